"""
Plan models — the flattened, ordered output of the planner.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Phase(str, Enum):
    """The three ordered stages of a script."""

    PRE = "pre"
    COMMAND = "command"
    POST = "post"


class PlanStep(BaseModel):
    """One concrete, fully substituted unit of execution.

    Steps are frozen once emitted; the skip filter produces copies.
    """

    model_config = ConfigDict(frozen=True)

    script: str                     # substituted origin script name
    phase: Phase = Phase.COMMAND
    command: str
    skip: bool = False


class ExecutionPlan(BaseModel):
    """Ordered steps for a single top-level invocation."""

    target: str
    steps: list[PlanStep] = Field(default_factory=list)

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def skipped_steps(self) -> int:
        return sum(1 for s in self.steps if s.skip)

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "total": self.total_steps,
            "skipped": self.skipped_steps,
            "steps": [s.model_dump(mode="json") for s in self.steps],
        }
