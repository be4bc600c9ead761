"""
Script models — reusable templates and their resolved invocations.

A ScriptTemplate is what a definition file declares. A
ResolvedInvocation is a template paired with the substitution
bindings that made a requested name match it.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from bnrun.core.engine.placeholders import substitute

RUN_ONCE = "run-once"


class PhaseOptions(BaseModel):
    """Per-phase behavior flags.

    Only ``run-once`` is recognized, for the pre and post phases.
    """

    pre: Literal["run-once"] | None = None
    post: Literal["run-once"] | None = None


class ScriptTemplate(BaseModel):
    """A named, reusable script definition.

    The name may carry ``${identifier}`` placeholders, in which case the
    template matches parameterized requests such as ``deploy:prod``.
    """

    name: str
    description: str = ""
    pre: list[str] = Field(default_factory=list)
    command: list[str] = Field(min_length=1)
    post: list[str] = Field(default_factory=list)
    config: PhaseOptions = Field(default_factory=PhaseOptions)

    @property
    def pre_runs_once(self) -> bool:
        return self.config.pre == RUN_ONCE

    @property
    def post_runs_once(self) -> bool:
        return self.config.post == RUN_ONCE


class Binding(BaseModel):
    """One placeholder token bound to a literal value."""

    token: str            # full token text, e.g. "${env}"
    value: str


class ResolvedInvocation(BaseModel):
    """A template plus the bindings that justify the match."""

    template: ScriptTemplate
    bindings: list[Binding] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        """Template name with every binding applied."""
        return self.substitute(self.template.name)

    def substitute(self, text: str) -> str:
        """Apply this invocation's bindings to a command or name template."""
        return substitute(text, {b.token: b.value for b in self.bindings})
