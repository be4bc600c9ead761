"""
Script registry — in-memory collection of named script templates.

The registry owns every ScriptTemplate for the lifetime of one planning
pass. It keeps load order, because parameterized resolution walks the
templates in that order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import ValidationError

from bnrun.core.engine.placeholders import malformed_placeholder
from bnrun.core.errors import InvalidScriptDefinition
from bnrun.core.models.script import ScriptTemplate

logger = logging.getLogger(__name__)


class ScriptRegistry:
    """Ordered, name-unique store of script templates."""

    def __init__(self, templates: list[ScriptTemplate] | None = None):
        self._templates: dict[str, ScriptTemplate] = {}
        for template in templates or []:
            self.add(template)

    @classmethod
    def from_mapping(
        cls,
        data: Any,
        source: str | None = None,
        registry: ScriptRegistry | None = None,
    ) -> ScriptRegistry:
        """Build (or extend) a registry from parsed definition data.

        Args:
            data: Mapping of script name to record
                ``{command, pre?, post?, config?, description?}``.
            source: Where the data came from, for error messages.
            registry: Existing registry to add to (default: a new one).

        Raises:
            InvalidScriptDefinition: If the data is not a mapping or any
                record fails validation.
        """
        if not isinstance(data, Mapping):
            raise InvalidScriptDefinition(
                f"expected a mapping of script names, got {type(data).__name__}",
                source,
            )

        target = registry if registry is not None else cls()
        for name, record in data.items():
            if not isinstance(name, str):
                raise InvalidScriptDefinition(f"script name must be a string, got {name!r}", source)
            if not isinstance(record, Mapping):
                raise InvalidScriptDefinition(
                    f"script '{name}' must be a mapping, got {type(record).__name__}",
                    source,
                )
            try:
                template = ScriptTemplate.model_validate({**record, "name": name})
            except ValidationError as e:
                raise InvalidScriptDefinition(f"script '{name}' is invalid: {e}", source) from e
            target.add(template, source=source)
        return target

    def add(self, template: ScriptTemplate, source: str | None = None) -> None:
        """Register a template.

        Raises:
            InvalidScriptDefinition: On a duplicate name, an empty command
                list, or a malformed placeholder in the name.
        """
        if template.name in self._templates:
            raise InvalidScriptDefinition(f"duplicate script name '{template.name}'", source)
        if not template.command:
            raise InvalidScriptDefinition(f"script '{template.name}' has no commands", source)
        broken = malformed_placeholder(template.name)
        if broken is not None:
            raise InvalidScriptDefinition(
                f"script '{template.name}' has a malformed placeholder: {broken!r}",
                source,
            )
        self._templates[template.name] = template
        logger.debug("Registered script: %s", template.name)

    def get(self, name: str) -> ScriptTemplate | None:
        """Look up a template by its exact (unsubstituted) name."""
        return self._templates.get(name)

    def names(self) -> list[str]:
        """All template names in load order."""
        return list(self._templates.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __iter__(self) -> Iterator[ScriptTemplate]:
        return iter(list(self._templates.values()))

    def __len__(self) -> int:
        return len(self._templates)

    def __repr__(self) -> str:
        return f"<ScriptRegistry scripts={len(self)}>"
