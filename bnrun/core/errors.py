"""
Error types raised by the planning engine and its collaborators.

Every error is fatal to the current pass and propagates to the caller
unchanged. The use-case layer turns them into a result error string,
and the CLI into a non-zero exit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bnrun.core.models.plan import PlanStep
    from bnrun.core.models.receipt import StepReceipt


class BnrunError(Exception):
    """Base class for all bnrun errors."""


class ScriptNotFound(BnrunError):
    """No template matches the requested name, exactly or by placeholder."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No script found for {name!r}")


class InvalidScriptDefinition(BnrunError):
    """Definition data is malformed or violates a template invariant."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class CyclicInvocation(BnrunError):
    """A script invokes itself, directly or through other scripts."""

    def __init__(self, chain: list[str], reason: str = "cyclic script invocation"):
        self.chain = list(chain)
        super().__init__(f"{reason}: {' -> '.join(self.chain)}")


class CommandExecutionFailure(BnrunError):
    """A plan step exited non-zero; the rest of the plan was abandoned."""

    def __init__(self, step: PlanStep, receipt: StepReceipt):
        self.step = step
        self.receipt = receipt
        detail = f" (exit {receipt.return_code})" if receipt.return_code is not None else ""
        super().__init__(f"Error executing command: {step.command}{detail}")
