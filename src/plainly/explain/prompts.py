"""Prompt templating for the explainer.

The model is asked for a single JSON object. The user message carries the
full instruction template; the system message only insists on JSON output.
"""

from __future__ import annotations

from collections.abc import Sequence

from plainly.core.contracts.explain import ExplainMode

SYSTEM_PROMPT = "Return JSON only. No extra text."

MODE_GUIDANCE: dict[str, str] = {
    "quick": "Be brief and direct. Use the shortest helpful wording.",
    "normal": "Be clear and balanced. Keep it easy to read.",
    "kid": "Explain like I'm 12. Use very simple words and friendly tone.",
}

_RULES = (
    "- Write like a helpful human.",
    "- No jargon unless you define it.",
    "- Short paragraphs.",
    "- If input is unclear, say what's missing instead of guessing.",
    "- Never claim certainty when it's vague.",
    '- No "as an AI model" language.',
)

_CLARIFY_RULE = (
    "- If the input is vague or missing context, set needsClarification to true "
    "and ask 1-2 questions."
)

_KEYS_WITH_CLARIFICATION = (
    "explanation (2-6 short paragraphs),\n"
    "summary (1-2 sentences),\n"
    "nextSteps (1-4 bullet items, as array of strings),\n"
    "needsClarification (boolean),\n"
    "questions (optional array of 1-2 strings)."
)

_KEYS_WITHOUT_CLARIFICATION = (
    "explanation (2-6 short paragraphs),\n"
    "summary (1-2 sentences),\n"
    "nextSteps (1-4 bullet items, as array of strings)."
)


def build_prompt(
    text: str,
    mode: ExplainMode,
    answers: Sequence[str] | None = None,
    *,
    clarification: bool = True,
) -> str:
    """Interpolate mode guidance, the raw input and prior answers into the template.

    Answers are numbered in the order the questions were asked. Once answers
    are present the model is told not to ask again.
    """
    rules = list(_RULES)
    if clarification:
        rules.append(_CLARIFY_RULE)

    sections = [
        "You are a helpful human who explains confusing text. Follow these rules:\n"
        + "\n".join(rules),
        "Output JSON only with keys:\n"
        + (_KEYS_WITH_CLARIFICATION if clarification else _KEYS_WITHOUT_CLARIFICATION),
        f"Mode guidance:\n{MODE_GUIDANCE[mode]}",
        f"Input:\n{text}",
    ]

    if answers:
        numbered = "\n".join(f"{i}. {answer}" for i, answer in enumerate(answers, start=1))
        sections.append(
            "Clarification answers (the reader's replies to your earlier questions):\n"
            f"{numbered}\n"
            "Use these answers in the explanation. Do not ask the same questions again."
        )

    return "\n\n".join(sections).strip()


def build_messages(
    text: str,
    mode: ExplainMode,
    answers: Sequence[str] | None = None,
    *,
    clarification: bool = True,
) -> list[dict[str, str]]:
    """Return the two role-tagged messages sent to the completion provider."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": build_prompt(text, mode, answers, clarification=clarification),
        },
    ]


__all__ = ["SYSTEM_PROMPT", "MODE_GUIDANCE", "build_prompt", "build_messages"]
