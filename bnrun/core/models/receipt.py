"""
Step receipt — the execution contract.

The executor hands PlanSteps to an adapter; the adapter answers with a
StepReceipt. Adapters never raise: failures are captured here and the
executor decides what a failure means for the rest of the plan.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class StepReceipt(BaseModel):
    """Result of executing (or skipping) a single plan step."""

    adapter: str
    script: str
    command: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    return_code: int | None = None
    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the step succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the step failed."""
        return self.status == "failed"

    @classmethod
    def success(
        cls,
        adapter: str,
        script: str,
        command: str,
        output: str = "",
        **kwargs: Any,
    ) -> StepReceipt:
        """Create a success receipt."""
        return cls(
            adapter=adapter,
            script=script,
            command=command,
            status="ok",
            output=output,
            **kwargs,
        )

    @classmethod
    def failure(
        cls,
        adapter: str,
        script: str,
        command: str,
        error: str,
        **kwargs: Any,
    ) -> StepReceipt:
        """Create a failure receipt."""
        return cls(
            adapter=adapter,
            script=script,
            command=command,
            status="failed",
            error=error,
            **kwargs,
        )

    @classmethod
    def skip(
        cls,
        adapter: str,
        script: str,
        command: str,
        reason: str = "",
        **kwargs: Any,
    ) -> StepReceipt:
        """Create a skip receipt."""
        return cls(
            adapter=adapter,
            script=script,
            command=command,
            status="skipped",
            output=reason,
            **kwargs,
        )
