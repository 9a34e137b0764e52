"""Explainer: the prompt/response adapter around one completion call.

Responsibilities
----------------
- Pick the mode guidance and build the two chat messages.
- Call the completion provider exactly once (no retries).
- Validate and clamp the JSON reply into an :class:`ExplainResult`.

The explainer holds only immutable configuration, so one instance can serve
concurrent requests.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from plainly.core.contracts.explain import DEFAULT_MODE, ExplainMode, ExplainRequest, ExplainResult
from plainly.core.settings import Settings, get_logger
from plainly.llm.client import LLMClient
from plainly.llm.provider import CompletionProvider

from .parser import parse_reply
from .prompts import build_messages

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Explainer:
    """Turn confusing text into an explanation, a summary and next steps.

    Parameters
    ----------
    provider:
        Anything implementing :class:`CompletionProvider`; the production
        wiring passes an :class:`LLMClient`.
    model:
        Optional alias or model ID forwarded to the provider.
    temperature:
        Optional sampling temperature forwarded to the provider. ``None``
        leaves the choice to the model alias.
    clarification:
        Whether the model may ask clarifying questions.
    """

    provider: CompletionProvider
    model: str | None = None
    temperature: float | None = None
    clarification: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> Explainer:
        """Build the production explainer from explicit configuration."""
        return cls(
            provider=LLMClient.from_settings(settings),
            model=settings.model_alias,
            temperature=settings.temperature,
            clarification=settings.clarification_enabled,
        )

    def explain(
        self,
        text: str,
        mode: ExplainMode = DEFAULT_MODE,
        answers: Sequence[str] | None = None,
    ) -> ExplainResult:
        """Explain ``text`` in the given ``mode``.

        Raises
        ------
        ConfigurationError
            If the provider has no credential.
        UpstreamError
            If the provider call fails.
        ParseError
            If the reply is empty, not JSON, or misses required fields.
        """
        answer_list = list(answers) if answers else None
        logger.info(
            "Explaining %d chars (mode=%s, answers=%d)",
            len(text),
            mode,
            len(answer_list or ()),
        )

        messages = build_messages(text, mode, answer_list, clarification=self.clarification)
        raw = self.provider.complete(messages, model=self.model, temperature=self.temperature)
        result = parse_reply(raw, clarification=self.clarification)

        logger.info(
            "Explanation ready (steps=%d, needs_clarification=%s)",
            len(result.next_steps),
            result.needs_clarification,
        )
        return result

    def explain_request(self, request: ExplainRequest) -> ExplainResult:
        """Convenience wrapper for an already-normalized request."""
        return self.explain(request.text, request.mode, request.answers)


__all__ = ["Explainer"]
