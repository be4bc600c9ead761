"""
Placeholder tokenizer — ``${identifier}`` scanning and substitution.

Text is split into a flat sequence of literal segments and placeholder
tokens. Only ``${`` + ``[A-Za-z0-9_]+`` + ``}`` counts as a placeholder;
everything else (``${VAR:-x}``, a lone ``$``, an unterminated ``${``)
stays literal, so shell syntax in commands passes through untouched.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

_PLACEHOLDER_RE = re.compile(r"\$\{(\w+)\}", re.ASCII)


@dataclass(frozen=True)
class Segment:
    text: str


@dataclass(frozen=True)
class Placeholder:
    identifier: str

    @property
    def token(self) -> str:
        return "${" + self.identifier + "}"


Node = Segment | Placeholder


def tokenize(text: str) -> Iterator[Node]:
    """Yield literal and placeholder nodes in order of appearance."""
    pos = 0
    for m in _PLACEHOLDER_RE.finditer(text):
        if m.start() > pos:
            yield Segment(text[pos:m.start()])
        yield Placeholder(m.group(1))
        pos = m.end()
    if pos < len(text):
        yield Segment(text[pos:])


def placeholders(text: str) -> list[Placeholder]:
    """Distinct placeholders in order of first appearance."""
    seen: dict[str, Placeholder] = {}
    for node in tokenize(text):
        if isinstance(node, Placeholder) and node.identifier not in seen:
            seen[node.identifier] = node
    return list(seen.values())


def malformed_placeholder(name: str) -> str | None:
    """Return the offending fragment if a name holds a broken ``${...}``.

    Used for template names only; commands are allowed to carry
    arbitrary shell expansions.
    """
    for node in tokenize(name):
        if isinstance(node, Segment) and "${" in node.text:
            start = node.text.index("${")
            return node.text[start:]
    return None


def substitute(text: str, bindings: Mapping[str, str]) -> str:
    """Replace each bound token (e.g. ``"${env}"``) with its value.

    Unbound placeholders are kept verbatim.
    """
    if not bindings:
        return text
    parts: list[str] = []
    for node in tokenize(text):
        if isinstance(node, Placeholder):
            parts.append(bindings.get(node.token, node.token))
        else:
            parts.append(node.text)
    return "".join(parts)
