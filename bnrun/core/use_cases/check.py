"""
Check use case — validate a script directory and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bnrun.core.config.loader import default_script_dir, load_scripts
from bnrun.core.engine.placeholders import placeholders
from bnrun.core.engine.planner import PlanBuilder, nested_script_name
from bnrun.core.engine.registry import ScriptRegistry
from bnrun.core.engine.resolver import Resolver
from bnrun.core.errors import CyclicInvocation, InvalidScriptDefinition, ScriptNotFound


@dataclass
class CheckResult:
    """Result of script directory validation."""

    valid: bool = False
    script_dir: Path | None = None
    registry: ScriptRegistry | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "script_dir": str(self.script_dir) if self.script_dir else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "scripts": self.registry.names() if self.registry else [],
        }


def check_scripts(script_dir: Path | None = None) -> CheckResult:
    """Load every definition and look for broken references and cycles.

    Loading errors are fatal. A ``bnrun`` reference to a missing script
    is a warning (it only fails when that script runs); a cycle between
    concrete scripts is an error.
    """
    result = CheckResult(script_dir=script_dir or default_script_dir())

    try:
        registry = load_scripts(result.script_dir)
    except InvalidScriptDefinition as e:
        result.errors.append(str(e))
        return result
    result.registry = registry

    if not len(registry):
        result.warnings.append("No scripts defined.")

    resolver = Resolver(registry)

    # Static references: only those without unresolved placeholders
    for template in registry:
        for raw in [*template.pre, *template.command, *template.post]:
            nested = nested_script_name(raw)
            if nested is None or placeholders(nested):
                continue
            try:
                resolver.resolve(nested)
            except ScriptNotFound:
                result.warnings.append(
                    f"Script '{template.name}' references unknown script '{nested}'"
                )

    # Expand every concrete script to surface cycles
    for template in registry:
        if placeholders(template.name):
            continue
        try:
            PlanBuilder(resolver).build(resolver.resolve(template.name))
        except CyclicInvocation as e:
            result.errors.append(f"Script '{template.name}': {e}")
        except ScriptNotFound:
            # Already reported as a warning, or hidden behind a placeholder
            pass

    result.valid = len(result.errors) == 0
    return result
