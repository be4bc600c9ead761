"""
Adapter base — the contract between the executor and a command runner.

The executor only talks to runners through this interface, never
directly to subprocesses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from bnrun.core.models.plan import PlanStep
from bnrun.core.models.receipt import StepReceipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to run one plan step."""

    step: PlanStep
    cwd: str | None = None
    capture_output: bool = False
    timeout: float | None = None

    @property
    def working_dir(self) -> str:
        """Resolved working directory for the step."""
        return self.cwd or "."


class Adapter(ABC):
    """Abstract base class for command runners.

    Adapters run a step and return a receipt. They NEVER raise:
    failures are captured in the StepReceipt with status='failed'.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tool is available. Never raises."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the step can be run.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> StepReceipt:
        """Run the step and return a receipt."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
