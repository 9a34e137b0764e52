"""Plain-text rendering of a result, for copying into an email or a text message."""

from __future__ import annotations

from typing import Literal

from plainly.core.contracts.explain import ExplainResult

RenderStyle = Literal["full", "texting"]

_STEPS_HEADING: dict[str, str] = {
    "full": "What this means for you",
    "texting": "Next steps",
}


def render_text(result: ExplainResult, style: RenderStyle = "full") -> str:
    """Return the explanation, summary and next steps as labelled plain text."""
    lines = [
        "Plain English Explanation",
        result.explanation,
        "",
        "Short Summary",
        result.summary,
        "",
        _STEPS_HEADING[style],
        *(f"- {step}" for step in result.next_steps),
    ]
    return "\n".join(lines)


__all__ = ["RenderStyle", "render_text"]
