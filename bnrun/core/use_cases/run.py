"""
Run use case — load scripts, plan a target, execute or dry-run it.

The full vertical slice from a requested name to executed commands.
Core errors never escape: they land in ``RunResult.error`` so the front
end can report them and pick an exit code.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from bnrun.adapters.base import Adapter
from bnrun.core.config.loader import default_script_dir, load_scripts
from bnrun.core.engine.executor import ExecutionReport, execute_plan
from bnrun.core.engine.planner import build_plan
from bnrun.core.errors import BnrunError, CommandExecutionFailure
from bnrun.core.models.plan import ExecutionPlan, PlanStep

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of planning (and possibly executing) a target."""

    target: str = ""
    script_dir: Path | None = None
    dry_run: bool = False
    plan: ExecutionPlan | None = None
    report: ExecutionReport | None = None
    error: str | None = None
    error_kind: str | None = None
    failed_step: PlanStep | None = None
    skip_patterns: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        result: dict = {
            "target": self.target,
            "script_dir": str(self.script_dir) if self.script_dir else None,
            "dry_run": self.dry_run,
            "skip_patterns": self.skip_patterns,
        }
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
        if self.failed_step:
            result["failed_step"] = self.failed_step.model_dump(mode="json")
        if self.plan:
            result["plan"] = self.plan.to_dict()
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def run_script(
    target: str,
    script_dir: Path | None = None,
    skip: Iterable[str] = (),
    dry_run: bool = False,
    adapter: Adapter | None = None,
    on_step: Callable[[PlanStep], None] | None = None,
    cwd: str | None = None,
) -> RunResult:
    """Plan a target and execute it unless ``dry_run`` is set.

    Args:
        target: Requested script name, e.g. ``build`` or ``deploy:prod``.
        script_dir: Directory of definition files (default: ``./.run``).
        skip: Glob patterns of steps to skip.
        dry_run: Plan only; nothing is executed.
        adapter: Command runner (default: ShellCommandAdapter).
        on_step: Called with each step before it runs.
        cwd: Working directory for commands.

    Returns:
        RunResult with the plan, the report, or an error.
    """
    if script_dir is None:
        script_dir = default_script_dir()

    result = RunResult(
        target=target,
        script_dir=script_dir,
        dry_run=dry_run,
        skip_patterns=list(skip),
    )

    # ── Load and plan ────────────────────────────────────────────
    try:
        registry = load_scripts(script_dir)
        result.plan = build_plan(registry, target, result.skip_patterns)
    except BnrunError as e:
        result.error = str(e)
        result.error_kind = type(e).__name__
        return result

    if dry_run:
        return result

    # ── Execute ──────────────────────────────────────────────────
    if adapter is None:
        from bnrun.adapters.shell.command import ShellCommandAdapter

        adapter = ShellCommandAdapter()

    report = ExecutionReport(target=target)
    result.report = report
    try:
        execute_plan(result.plan, adapter, report=report, on_step=on_step, cwd=cwd)
    except CommandExecutionFailure as e:
        logger.info("Aborted after failure: %s", e)
        result.error = str(e)
        result.error_kind = type(e).__name__
        result.failed_step = e.step

    return result
