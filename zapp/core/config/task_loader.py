"""
Task loader — builds the task tree from raw configuration values.

A task entry is one of:

    - a bare string ``S``     → tasks/S.yaml, loaded as a group named S
    - a leaf mapping          → {copy|symlink|template|shell: ..., name?, su?}
    - a single-key mapping    → {K: [entries...]}, a group named K
    - an explicit group       → {group: [entries...], name?, su?}
    - anything else           → an unknown placeholder (always skipped)

Loading happens once, up front. Every problem found here is a
ConfigError: nothing has run yet, so there is nothing to report.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from zapp.core.config.loader import TASKS_DIR, AssetLayout, read_yaml
from zapp.core.errors import ConfigError
from zapp.core.models.task import LEAF_KINDS, Task

logger = logging.getLogger(__name__)

# Name of the group wrapping the top-level ``tasks`` list
ROOT_TASK_NAME = "main"

# Key of the explicit group form, which can carry name and su
GROUP_KEY = "group"


class TaskLoader:
    """Parses task entries, following references to task files.

    Tracks the chain of task files currently being loaded so that a file
    referencing itself, directly or through others, is reported instead
    of recursing forever.
    """

    def __init__(self, layout: AssetLayout):
        self.layout = layout
        self._loading: list[str] = []
        self.files_loaded = 0

    def load_root(self, entries: list[Any] | None) -> Task:
        """Parse the top-level ``tasks`` list into the root group."""
        task = self.parse_group(ROOT_TASK_NAME, entries)
        logger.info(
            "Loaded task tree: %d nodes from %d task files",
            task.count(),
            self.files_loaded,
        )
        return task

    def parse_group(self, name: str, entries: Any) -> Task:
        """Parse a sequence of task entries into a group."""
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ConfigError(
                f"Task group '{name}' must be a list of entries, "
                f"got {type(entries).__name__}"
            )
        return Task.group(name, (self.parse_entry(entry) for entry in entries))

    def parse_entry(self, entry: Any) -> Task:
        """Parse one task entry."""
        if isinstance(entry, str):
            return self.load_file(entry)

        if isinstance(entry, dict):
            kinds = [k for k in LEAF_KINDS if k in entry]
            if len(kinds) > 1:
                raise ConfigError(
                    f"Task entry declares more than one kind ({', '.join(kinds)}): {entry!r}"
                )
            if kinds:
                if GROUP_KEY in entry:
                    raise ConfigError(f"Task entry is both a group and a {kinds[0]} task: {entry!r}")
                return self.parse_leaf(kinds[0], entry)

            if GROUP_KEY in entry and set(entry) <= {GROUP_KEY, "name", "su"}:
                return self.parse_named_group(entry)

            if len(entry) == 1:
                key, value = next(iter(entry.items()))
                if isinstance(key, str):
                    return self.parse_group(key, value)

        logger.warning("Unrecognised task entry, will be skipped: %r", entry)
        return Task.unknown()

    def parse_named_group(self, entry: dict[str, Any]) -> Task:
        """Parse ``{group: [...], name?, su?}``; a privileged group skips its whole subtree."""
        name = str(entry.get("name") or GROUP_KEY)
        group = self.parse_group(name, entry[GROUP_KEY])
        try:
            return Task.group(name, group.children, privileged=entry.get("su", False))
        except ValidationError as e:
            raise ConfigError(f"Invalid group '{name}': {e}") from e

    def parse_leaf(self, kind: str, entry: dict[str, Any]) -> Task:
        """Parse a copy/symlink/template/shell mapping into a leaf task."""
        payload = entry[kind]
        name = str(entry.get("name") or kind)

        if kind == "shell":
            if not isinstance(payload, str):
                raise ConfigError(
                    f"Shell task '{name}' needs a command string, "
                    f"got {type(payload).__name__}"
                )
            variant: dict[str, Any] = {"kind": "shell", "command": payload}
        else:
            if not isinstance(payload, dict):
                raise ConfigError(
                    f"{kind.capitalize()} task '{name}' needs a mapping with src and dst, "
                    f"got {type(payload).__name__}"
                )
            variant = {**payload, "kind": kind}

        try:
            return Task.model_validate({
                "name": name,
                "privileged": entry.get("su", False),
                "variant": variant,
            })
        except ValidationError as e:
            raise ConfigError(f"Invalid {kind} task '{name}': {e}") from e

    def load_file(self, task_name: str) -> Task:
        """Load tasks/<name>.yaml as a group named ``task_name``."""
        path = self.layout.asset(TASKS_DIR, f"{task_name}.yaml")
        key = str(path)

        if key in self._loading:
            chain = " → ".join([*self._loading, key])
            raise ConfigError(f"Task file reference cycle: {chain}")

        logger.debug("Loading task file %s", path)
        entries = read_yaml(path, "task file")

        self._loading.append(key)
        try:
            task = self.parse_group(task_name, entries)
        finally:
            self._loading.pop()

        self.files_loaded += 1
        return task


def load_task_tree(layout: AssetLayout, entries: list[Any] | None) -> Task:
    """Build the full task tree for the top-level ``tasks`` list.

    Raises:
        ConfigError: If any entry or referenced task file is invalid.
    """
    return TaskLoader(layout).load_root(entries)
