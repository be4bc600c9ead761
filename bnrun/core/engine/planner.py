"""
Plan builder — recursive expansion of scripts into an ordered plan.

Given a resolved invocation, the builder walks its pre, command and post
phases in declared order. A command that starts with the self-invocation
marker (``bnrun <name>``) is resolved and expanded in place; anything
else becomes one PlanStep.

Flow:
    resolve target → expand phases (recursing on ``bnrun`` commands)
                   → record run-once ledger → apply skip patterns

State lives on the builder instance: the run-once ledger (template names
already expanded in this pass) and the chain of scripts currently being
expanded. A fresh builder per top-level invocation keeps passes
independent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bnrun.core.engine.registry import ScriptRegistry
from bnrun.core.engine.resolver import Resolver
from bnrun.core.engine.skip import apply_skip
from bnrun.core.errors import CyclicInvocation
from bnrun.core.models.plan import ExecutionPlan, Phase, PlanStep
from bnrun.core.models.script import ResolvedInvocation

logger = logging.getLogger(__name__)

SELF_INVOCATION_PREFIX = "bnrun "

# Parameter values can grow on every nesting level without ever
# repeating a name; cap the depth so that also fails closed.
MAX_DEPTH = 64

_SCRIPT_TAGS = {Phase.PRE: "[PRE]", Phase.COMMAND: "[CMD]", Phase.POST: "[POS]"}
_STEP_TAGS = {Phase.PRE: "<$", Phase.COMMAND: " $", Phase.POST: ">$"}


def nested_script_name(command: str) -> str | None:
    """Return the script named by a self-invocation, or None."""
    if not command.startswith(SELF_INVOCATION_PREFIX):
        return None
    name = command[len(SELF_INVOCATION_PREFIX):].strip()
    return name or None


class PlanBuilder:
    """Expands resolved invocations into flat lists of PlanSteps."""

    def __init__(self, resolver: Resolver):
        self._resolver = resolver
        self._ledger: set[str] = set()
        self._chain: list[str] = []

    @property
    def ledger(self) -> frozenset[str]:
        """Template names already expanded during this pass."""
        return frozenset(self._ledger)

    def build(
        self,
        invocation: ResolvedInvocation,
        phase: Phase = Phase.COMMAND,
        depth: int = 0,
    ) -> list[PlanStep]:
        """Expand one invocation (recursively) into ordered steps.

        Args:
            invocation: The resolved script to expand.
            phase: Phase of the parent command that invoked this script.
                Used for trace output only.
            depth: Nesting level.

        Raises:
            CyclicInvocation: If the script is already being expanded
                further up the chain, or nesting exceeds MAX_DEPTH.
            ScriptNotFound: If a nested ``bnrun`` reference does not resolve.
        """
        template = invocation.template
        name = invocation.display_name

        if name in self._chain:
            raise CyclicInvocation([*self._chain, name])
        if depth > MAX_DEPTH:
            raise CyclicInvocation(
                [*self._chain, name],
                reason=f"script nesting exceeds {MAX_DEPTH} levels",
            )

        logger.info("%s%s %s", "  " * depth, _SCRIPT_TAGS[phase], name)

        self._chain.append(name)
        try:
            steps: list[PlanStep] = []

            if template.pre and not (template.pre_runs_once and template.name in self._ledger):
                steps.extend(self._expand(invocation, name, template.pre, Phase.PRE, depth + 1))

            steps.extend(self._expand(invocation, name, template.command, Phase.COMMAND, depth + 1))

            # Checked after the command phase: nested expansions may have
            # recorded this template in the meantime.
            if template.post and not (template.post_runs_once and template.name in self._ledger):
                steps.extend(self._expand(invocation, name, template.post, Phase.POST, depth + 1))
        finally:
            self._chain.pop()

        self._ledger.add(template.name)
        return steps

    def _expand(
        self,
        invocation: ResolvedInvocation,
        name: str,
        commands: list[str],
        phase: Phase,
        depth: int,
    ) -> list[PlanStep]:
        steps: list[PlanStep] = []
        for raw in commands:
            command = invocation.substitute(raw)

            nested = nested_script_name(command)
            if nested is not None:
                found = self._resolver.resolve(nested)
                steps.extend(self.build(found, phase=phase, depth=depth))
                continue

            logger.info("%s%s: %s", "  " * depth, _STEP_TAGS[phase], command)
            steps.append(PlanStep(script=name, phase=phase, command=command))
        return steps


def build_plan(
    registry: ScriptRegistry,
    target: str,
    skip_patterns: Iterable[str] = (),
) -> ExecutionPlan:
    """Resolve a target and build its full, skip-annotated plan.

    Uses a fresh PlanBuilder, so the run-once ledger covers exactly this
    one top-level invocation.
    """
    resolver = Resolver(registry)
    invocation = resolver.resolve(target)
    steps = PlanBuilder(resolver).build(invocation)
    plan = ExecutionPlan(target=target, steps=apply_skip(steps, list(skip_patterns)))
    logger.debug(
        "Planned '%s': %d steps (%d skipped)",
        target, plan.total_steps, plan.skipped_steps,
    )
    return plan
