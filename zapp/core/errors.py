"""
Error types — two tiers, two channels.

Fatal errors are raised and abort the whole run before (or outside)
normal per-task execution: bad configuration, an unusable environment.
Per-task failures are never raised through the engine; adapters turn
them into a failed Receipt and the engine reports FAILURE.

    ZappError
    ├── FatalError                    → CLI prints it and exits 2
    │   ├── ConfigError               unreadable/invalid config, task files, modes
    │   ├── PreconditionError         destination parent is a plain file
    │   └── InterpreterUnavailableError   shell cannot be launched
    └── TemplateRenderError           per-task, converted to FAILURE
"""

from __future__ import annotations


class ZappError(Exception):
    """Base class for all zapp errors."""


class FatalError(ZappError):
    """An error that aborts the run. Never expressed as a task status."""


class ConfigError(FatalError):
    """Raised when configuration, parameter or task files are invalid or missing."""


class PreconditionError(FatalError):
    """Raised when a destination's parent directory cannot exist."""


class InterpreterUnavailableError(FatalError):
    """Raised when the command interpreter for shell tasks cannot be launched."""


class TemplateRenderError(ZappError):
    """Raised by the template renderer. Adapters convert it to a failed receipt."""
