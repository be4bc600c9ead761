"""
Domain models — Pydantic types for the script planner.

All models are re-exported here for convenient access:

    from bnrun.core.models import ScriptTemplate, PlanStep, ExecutionPlan
"""

from bnrun.core.models.plan import ExecutionPlan, Phase, PlanStep
from bnrun.core.models.receipt import StepReceipt
from bnrun.core.models.script import (
    RUN_ONCE,
    Binding,
    PhaseOptions,
    ResolvedInvocation,
    ScriptTemplate,
)

__all__ = [
    # script.py
    "Binding",
    # plan.py
    "ExecutionPlan",
    "Phase",
    "PhaseOptions",
    "PlanStep",
    "RUN_ONCE",
    "ResolvedInvocation",
    "ScriptTemplate",
    # receipt.py
    "StepReceipt",
]
