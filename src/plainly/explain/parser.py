"""Validate and clamp the JSON object the model returns.

Required fields are checked strictly; optional ones are lenient: a
`questions` value that is not a list is ignored rather than rejected, and
list items that are neither strings nor numbers are skipped.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from plainly.core.contracts.explain import MAX_NEXT_STEPS, MAX_QUESTIONS, ExplainResult
from plainly.core.errors import ParseError

# ```json ... ``` wrappers some models add despite the system prompt.
_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def _strip_fence(raw: str) -> str:
    text = raw.strip()
    match = _FENCE_RE.match(text)
    return match.group(1) if match else text


def _clean_items(values: list[Any], limit: int) -> list[str]:
    """Keep strings and numbers, trim, drop blanks, then truncate to `limit`.

    Containers, booleans and nulls are dropped so no Python repr reaches
    the user.
    """
    items = [
        str(v).strip()
        for v in values
        if isinstance(v, (str, int, float)) and not isinstance(v, bool)
    ]
    return [item for item in items if item][:limit]


def _required_text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ParseError()
    return value.strip()


def parse_reply(raw: str | None, *, clarification: bool = True) -> ExplainResult:
    """Turn the model's text payload into a normalized :class:`ExplainResult`.

    Parameters
    ----------
    raw:
        The content string returned by the completion provider.
    clarification:
        When True, ``needsClarification`` must be a boolean. When False it
        may be absent, the result never asks for clarification and
        ``questions`` is dropped.

    Raises
    ------
    ParseError
        If ``raw`` is empty, is not a JSON object, or misses
        ``explanation`` / ``summary`` / ``nextSteps``.
    """
    if raw is None or not raw.strip():
        raise ParseError("Empty response from LLM")

    try:
        data = json.loads(_strip_fence(raw))
    except json.JSONDecodeError as exc:
        raise ParseError() from exc

    if not isinstance(data, Mapping):
        raise ParseError()

    explanation = _required_text(data, "explanation")
    summary = _required_text(data, "summary")

    next_steps = data.get("nextSteps")
    if not isinstance(next_steps, list):
        raise ParseError()

    needs_clarification = data.get("needsClarification")
    if clarification:
        if not isinstance(needs_clarification, bool):
            raise ParseError()
    else:
        needs_clarification = False

    questions: list[str] | None = None
    raw_questions = data.get("questions")
    if clarification and isinstance(raw_questions, list):
        questions = _clean_items(raw_questions, MAX_QUESTIONS)

    return ExplainResult(
        explanation=explanation,
        summary=summary,
        next_steps=_clean_items(next_steps, MAX_NEXT_STEPS),
        needs_clarification=needs_clarification,
        questions=questions,
    )


__all__ = ["parse_reply"]
