"""
Skip filter — glob matching of plan steps against skip patterns.

A step is skipped when any pattern matches its script name or its
command text. Patterns are path-style globs:

    *       any run of characters except ``/``
    **      as a whole path segment, any run of characters, ``/`` included
            (``**/`` may match nothing); elsewhere the same as ``*``
    ?       one character except ``/``
    [abc]   character class, ``[!abc]`` negated

Matching is anchored and case-sensitive.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable

from bnrun.core.models.plan import PlanStep


@functools.lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into an anchored regex."""
    i, n = 0, len(pattern)
    out: list[str] = []
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i):
                # Globstar only when ** fills a whole segment
                starts = i == 0 or pattern[i - 1] == "/"
                end = i + 2
                if starts and end == n:
                    out.append(".*")
                    i = end
                    continue
                if starts and pattern.startswith("/", end):
                    out.append("(?:.*/)?")
                    i = end + 1
                    continue
                i = end
                out.append("[^/]*")
                continue
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        elif c == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                # Unterminated class: treat "[" literally
                out.append(re.escape(c))
            else:
                body = pattern[i + 1:j].replace("\\", "\\\\").replace("[", "\\[")
                if body[:1] in ("!", "^"):
                    body = "^" + body[1:]
                out.append(f"[{body}]")
                i = j
        else:
            out.append(re.escape(c))
        i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def glob_match(text: str, pattern: str) -> bool:
    """Whether ``text`` matches the glob ``pattern`` in full."""
    return _compile(pattern).match(text) is not None


def should_skip(step: PlanStep, patterns: Iterable[str]) -> bool:
    """Whether any pattern matches the step's script name or command."""
    return any(
        glob_match(step.script, p) or glob_match(step.command, p)
        for p in patterns
    )


def apply_skip(steps: Iterable[PlanStep], patterns: list[str]) -> list[PlanStep]:
    """Return copies of ``steps`` with ``skip`` computed from ``patterns``."""
    return [
        step.model_copy(update={"skip": should_skip(step, patterns)})
        for step in steps
    ]
