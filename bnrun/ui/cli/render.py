"""
Plan rendering — boxes and aligned explanation lines for the terminal.

Pure string formatting; the CLI decides when and where to print.
"""

from __future__ import annotations

from bnrun.core.models.plan import Phase, PlanStep

_PHASE_TAGS = {Phase.PRE: "pre:", Phase.COMMAND: "", Phase.POST: "post:"}

_LABELS = ("Script:", "Phase:", "Command:", "Will skip:")
_LABEL_WIDTH = max(len(label) for label in _LABELS)


def step_prefix(step: PlanStep) -> str:
    """``> [<tag><script>]  `` — tag is empty for command steps."""
    return f"> [{_PHASE_TAGS[step.phase]}{step.script}]  "


def explain_step(step: PlanStep, width: int) -> str:
    """One explanation line with the prefix padded to ``width``."""
    return f"{step_prefix(step).ljust(width)}$ {step.command}"


def explain_plan(steps: list[PlanStep]) -> list[str]:
    """Explanation lines sharing a column: the longest prefix in the plan."""
    width = max((len(step_prefix(s)) for s in steps), default=0)
    return [explain_step(s, width) for s in steps]


def format_step_box(title: str, step: PlanStep) -> str:
    """Box-drawn summary of one step, titled with the requested target.

    The ``Will skip`` line only appears for skipped steps.
    """
    lines = [
        f"{_LABELS[0].ljust(_LABEL_WIDTH)} {step.script}",
        f"{_LABELS[1].ljust(_LABEL_WIDTH)} {step.phase.name}",
        f"{_LABELS[2].ljust(_LABEL_WIDTH)} {step.command}",
    ]
    skip_line = f"{_LABELS[3].ljust(_LABEL_WIDTH)} {'Yes' if step.skip else 'No'}"

    box_width = max(len(title), len(skip_line), *(len(line) for line in lines)) + 2

    out = [
        "┌" + "─" * box_width + "┐",
        f"│ {title.ljust(box_width - 1)}│",
        "├" + "─" * box_width + "┤",
    ]
    out.extend(f"│ {line.ljust(box_width - 1)}│" for line in lines)
    if step.skip:
        out.append(f"│ ⚠️ {skip_line.ljust(box_width - 3)}│")
    out.append("└" + "─" * box_width + "┘")
    return "\n".join(out)
