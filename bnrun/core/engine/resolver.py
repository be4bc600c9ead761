"""
Resolver — match a requested name to a registered template.

Two passes over the registry:

    1. exact:   a template named exactly like the request wins, with
                no bindings. Exact names are never shadowed.
    2. pattern: the parameter value is the ``:``-delimited segment after
                the base name (``deploy:prod`` → ``prod``). It is put in
                place of every placeholder in a template name; if the
                result equals the request, that template matches.

This is a direct-match scheme: all placeholders in one name receive the
same value.
"""

from __future__ import annotations

import logging

from bnrun.core.engine.placeholders import placeholders, substitute
from bnrun.core.engine.registry import ScriptRegistry
from bnrun.core.errors import ScriptNotFound
from bnrun.core.models.script import Binding, ResolvedInvocation

logger = logging.getLogger(__name__)

PARAM_SEPARATOR = ":"


def parameter_value(requested: str) -> str | None:
    """Extract the parameter part of a requested name, if any."""
    parts = requested.split(PARAM_SEPARATOR)
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


class Resolver:
    """Resolves requested names against a ScriptRegistry."""

    def __init__(self, registry: ScriptRegistry):
        self._registry = registry

    @property
    def registry(self) -> ScriptRegistry:
        return self._registry

    def resolve(self, requested: str) -> ResolvedInvocation:
        """Resolve a name to a template plus substitution bindings.

        Raises:
            ScriptNotFound: If nothing matches, exactly or by pattern.
        """
        exact = self._registry.get(requested)
        if exact is not None:
            logger.debug("Resolved '%s' by exact name", requested)
            return ResolvedInvocation(template=exact)

        value = parameter_value(requested)
        for template in self._registry:
            tokens = placeholders(template.name)
            if not tokens or value is None:
                continue
            bindings = [Binding(token=p.token, value=value) for p in tokens]
            candidate = substitute(template.name, {b.token: b.value for b in bindings})
            if candidate == requested:
                logger.debug(
                    "Resolved '%s' via template '%s' (%s)",
                    requested,
                    template.name,
                    ", ".join(f"{b.token}={b.value}" for b in bindings),
                )
                return ResolvedInvocation(template=template, bindings=bindings)

        raise ScriptNotFound(requested)
