"""ExplainRequest / ExplainResult — the two values one explain call trades.

Neither value has an identity or outlives the call that created it.

Wire format
-----------
`ExplainResult` is serialized with camelCase keys (`nextSteps`,
`needsClarification`) because that is what the browser client reads. Python
code uses the snake_case attribute names. Both names are accepted on input.

Invariants
----------
- `next_steps` holds at most `MAX_NEXT_STEPS` entries.
- `questions` holds at most `MAX_QUESTIONS` entries, or is `None`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

from plainly.core.errors import ValidationError

ExplainMode = Literal["quick", "normal", "kid"]

EXPLAIN_MODES: tuple[str, ...] = get_args(ExplainMode)
DEFAULT_MODE: ExplainMode = "normal"

MAX_NEXT_STEPS = 4
MAX_QUESTIONS = 2


class ExplainRequest(BaseModel):
    """A normalized inbound request.

    Fields
    ------
    text : str
        The confusing text, already trimmed and non-empty.
    mode : ExplainMode
        Verbosity/tone preset; defaults to ``"normal"``.
    answers : Optional[list[str]]
        Answers to a previous clarification round, in question order.
        ``None`` on a first-round request.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(min_length=1)
    mode: ExplainMode = DEFAULT_MODE
    answers: list[str] | None = None

    @classmethod
    def from_payload(cls, body: Any) -> ExplainRequest:
        """Normalize a decoded JSON body into a request.

        - ``text`` is trimmed and must be a non-empty string.
        - ``mode`` defaults to ``"normal"`` and must be a known preset.
        - ``answers`` keeps only non-empty strings, trimmed; an empty result
          becomes ``None``.

        Raises
        ------
        ValidationError
            With a message fit to show the end user.
        """
        fields: Mapping[str, Any] = body if isinstance(body, Mapping) else {}

        raw_text = fields.get("text")
        text = raw_text.strip() if isinstance(raw_text, str) else ""
        if not text:
            raise ValidationError("Text is required.")

        mode = fields.get("mode")
        if mode is None:
            mode = DEFAULT_MODE
        if mode not in EXPLAIN_MODES:
            raise ValidationError(f"Mode must be one of: {', '.join(EXPLAIN_MODES)}.")

        answers: list[str] | None = None
        raw_answers = fields.get("answers")
        if isinstance(raw_answers, list):
            answers = [a.strip() for a in raw_answers if isinstance(a, str) and a.strip()]
        return cls(text=text, mode=mode, answers=answers or None)


class ExplainResult(BaseModel):
    """The normalized explanation returned to callers."""

    model_config = ConfigDict(populate_by_name=True)

    explanation: str
    summary: str
    next_steps: list[str] = Field(
        default_factory=list, max_length=MAX_NEXT_STEPS, alias="nextSteps"
    )
    needs_clarification: bool = Field(default=False, alias="needsClarification")
    questions: list[str] | None = Field(default=None, max_length=MAX_QUESTIONS)


__all__ = [
    "ExplainMode",
    "EXPLAIN_MODES",
    "DEFAULT_MODE",
    "MAX_NEXT_STEPS",
    "MAX_QUESTIONS",
    "ExplainRequest",
    "ExplainResult",
]
