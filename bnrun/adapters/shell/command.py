"""
Shell command adapter — run plan steps through ``sh``.

Commands run one at a time with the parent's stdio by default, so the
user sees their output live. Capture mode collects stdout/stderr into
the receipt instead.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from bnrun.adapters.base import Adapter, ExecutionContext
from bnrun.core.models.receipt import StepReceipt

logger = logging.getLogger(__name__)


class ShellCommandAdapter(Adapter):
    """Execute step commands in a shell.

    Args:
        capture_output: Default capture mode when the context does not
            ask for it.
        timeout: Default timeout in seconds (None = wait forever).
    """

    def __init__(self, capture_output: bool = False, timeout: float | None = None):
        self._capture_output = capture_output
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        if not context.step.command.strip():
            return False, "Empty command"

        if context.cwd and not Path(context.cwd).is_dir():
            return False, f"Working directory does not exist: {context.cwd}"

        return True, ""

    def execute(self, context: ExecutionContext) -> StepReceipt:
        step = context.step
        capture = context.capture_output or self._capture_output
        timeout = context.timeout if context.timeout is not None else self._timeout

        is_valid, error = self.validate(context)
        if not is_valid:
            return StepReceipt.failure(
                adapter=self.name,
                script=step.script,
                command=step.command,
                error=f"Validation failed: {error}",
            )

        logger.debug("Executing: %s (cwd=%s)", step.command, context.working_dir)
        start = time.monotonic()

        try:
            result = subprocess.run(
                step.command,
                shell=True,
                cwd=context.cwd,
                capture_output=capture,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return StepReceipt.failure(
                adapter=self.name,
                script=step.script,
                command=step.command,
                error=f"Command timed out after {timeout}s",
                metadata={"timeout": timeout},
            )
        except OSError as e:
            return StepReceipt.failure(
                adapter=self.name,
                script=step.script,
                command=step.command,
                error=f"Command execution error: {e}",
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = (result.stdout or "").strip()
        stderr = (result.stderr or "").strip()

        if result.returncode == 0:
            return StepReceipt.success(
                adapter=self.name,
                script=step.script,
                command=step.command,
                output=output,
                return_code=result.returncode,
                duration_ms=elapsed_ms,
                metadata={"stderr": stderr} if stderr else {},
            )
        return StepReceipt.failure(
            adapter=self.name,
            script=step.script,
            command=step.command,
            error=stderr or f"Command exited with code {result.returncode}",
            output=output,
            return_code=result.returncode,
            duration_ms=elapsed_ms,
        )
