"""
Shell command adapter — run a shell task through ``sh -c``.

The command string is passed verbatim as the single argument after
``-c``. The call blocks until the process exits; there is no timeout.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time

from zapp.adapters.base import Adapter, ExecutionContext
from zapp.core.errors import InterpreterUnavailableError
from zapp.core.models.receipt import Receipt
from zapp.core.models.task import ShellTask

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"


class ShellCommandAdapter(Adapter):
    """Execute shell tasks.

    Args:
        shell: Interpreter to invoke (default: $ZAPP_SHELL or /bin/sh).
        capture_output: Capture stdout/stderr into the receipt instead of
            letting the command write to the terminal.
    """

    def __init__(self, shell: str | None = None, capture_output: bool = False):
        self.shell = shell or os.environ.get("ZAPP_SHELL") or DEFAULT_SHELL
        self.capture_output = capture_output

    @property
    def name(self) -> str:
        return "shell"

    @property
    def kinds(self) -> tuple[str, ...]:
        return ("shell",)

    def __repr__(self) -> str:
        return f"<ShellCommandAdapter shell={self.shell!r}>"

    def is_available(self) -> bool:
        return shutil.which(self.shell) is not None

    def execute(self, context: ExecutionContext) -> Receipt:
        variant = context.task.variant
        assert isinstance(variant, ShellTask)
        command = variant.command

        logger.debug("Executing: %s -c %r", self.shell, command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                [self.shell, "-c", command],
                capture_output=self.capture_output,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise InterpreterUnavailableError(
                f"Failed to run shell command with {self.shell}: {e}"
            ) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = (result.stdout or "").strip()
        stderr = (result.stderr or "").strip()
        metadata = {"command": command, "return_code": result.returncode}

        if result.returncode == 0:
            return Receipt.success(
                adapter=self.name,
                task_name=context.task.name,
                output=output,
                duration_ms=elapsed_ms,
                metadata=metadata,
            )

        return Receipt.failure(
            adapter=self.name,
            task_name=context.task.name,
            error=stderr or f"Command exited with code {result.returncode}",
            output=output,
            duration_ms=elapsed_ms,
            metadata=metadata,
        )
