"""
Path and permission helpers — pure utilities shared by loader and adapters.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from zapp.core.errors import PreconditionError

logger = logging.getLogger(__name__)

# Highest value accepted for a permission mode (setuid/setgid/sticky + rwx)
MAX_MODE = 0o7777


def expand_path(path: str | os.PathLike[str]) -> Path:
    """Expand ``~`` / ``~user`` shorthand into a concrete path."""
    return Path(os.path.expanduser(os.fspath(path)))


def ensure_parent(path: Path) -> None:
    """Make sure the parent directory of ``path`` exists.

    Creates missing directories recursively. A parent that already
    exists as a plain file cannot be fixed by us, so that is fatal.

    Raises:
        PreconditionError: If the parent is a file or cannot be created.
    """
    parent = path.parent
    if parent.is_file():
        raise PreconditionError(f"Parent of {path} is a file: {parent}")

    if parent.is_dir():
        return

    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PreconditionError(f"Cannot create directory {parent}: {e}") from e
    logger.debug("Created directory %s", parent)


def parse_mode(value: int | str | None) -> int | None:
    """Parse an octal permission string into a numeric mode.

    YAML reads an unquoted ``644`` as the integer 644, so integers are
    taken digit-for-digit as octal too. ``"0644"`` and ``"0o644"`` are
    accepted.

    Raises:
        ValueError: If the value is not a valid octal mode.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"invalid permissions: {value!r}")

    text = str(value).strip().lower()
    if text.startswith("0o"):
        text = text[2:]
    if not text or any(ch not in "01234567" for ch in text):
        raise ValueError(f"invalid permissions: {value!r}")

    mode = int(text, 8)
    if mode > MAX_MODE:
        raise ValueError(f"invalid permissions: {value!r} (exceeds {MAX_MODE:o})")
    return mode


def format_mode(mode: int | None) -> str | None:
    """Render a numeric mode the way users write it (``0644``)."""
    if mode is None:
        return None
    return f"{mode:04o}"


def apply_mode(path: Path, mode: int | None) -> None:
    """Apply ``mode`` to ``path`` if one was specified.

    Raises:
        OSError: If chmod fails. Callers turn this into a task failure.
    """
    if mode is None:
        return
    os.chmod(path, mode)
