"""
Executor — run a plan step by step through an adapter.

Steps run strictly in plan order, one at a time. Skipped steps produce
a ``skipped`` receipt without touching the adapter. The first failed
step stops the run: its receipt is recorded and CommandExecutionFailure
is raised. Nothing already executed is rolled back.

Flow:
    for step in plan → on_step hook → skip? → adapter.execute → receipt
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from bnrun.adapters.base import Adapter, ExecutionContext
from bnrun.core.errors import CommandExecutionFailure
from bnrun.core.models.plan import ExecutionPlan, PlanStep
from bnrun.core.models.receipt import StepReceipt

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """Receipts gathered while executing a plan."""

    target: str = ""
    receipts: list[StepReceipt] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.status == "skipped")

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        return "ok" if self.failed == 0 else "failed"

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
        }


def execute_plan(
    plan: ExecutionPlan,
    adapter: Adapter,
    report: ExecutionReport | None = None,
    on_step: Callable[[PlanStep], None] | None = None,
    cwd: str | None = None,
    capture_output: bool = False,
) -> ExecutionReport:
    """Execute every step of a plan in order.

    Args:
        plan: The plan to run.
        adapter: Command runner.
        report: Report to append receipts to (default: a new one). Pass
            one in to keep the receipts when a failure is raised.
        on_step: Called with each step before it runs (or is skipped).
        cwd: Working directory for every command.
        capture_output: Capture stdout/stderr into the receipts.

    Returns:
        ExecutionReport with one receipt per step.

    Raises:
        CommandExecutionFailure: On the first step that fails. Remaining
            steps are not run.
    """
    if report is None:
        report = ExecutionReport(target=plan.target)

    for step in plan.steps:
        if on_step is not None:
            on_step(step)

        if step.skip:
            logger.info("Skipping %s", step.command)
            report.receipts.append(
                StepReceipt.skip(
                    adapter=adapter.name,
                    script=step.script,
                    command=step.command,
                    reason="matched skip pattern",
                )
            )
            continue

        context = ExecutionContext(step=step, cwd=cwd, capture_output=capture_output)
        start = time.monotonic()
        receipt = adapter.execute(context)
        if not receipt.duration_ms:
            receipt.duration_ms = int((time.monotonic() - start) * 1000)
        report.receipts.append(receipt)

        status_marker = "✓" if receipt.ok else "✗"
        logger.info("%s [%s] %s → %s", status_marker, step.script, step.command, receipt.status)

        if receipt.failed:
            raise CommandExecutionFailure(step, receipt)

    return report
