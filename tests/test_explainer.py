"""End-to-end tests for the Explainer adapter with a fake completion provider.

We fully control the JSON returned by the provider so that we can assert:
- exactly one provider call per `explain()`,
- the prompt carries the mode guidance and any clarification answers,
- the result is clamped regardless of what the model returned,
- provider and parse failures propagate unchanged.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

import pytest

from plainly.core.contracts.explain import ExplainRequest
from plainly.core.errors import ConfigurationError, ParseError, UpstreamError
from plainly.core.settings import Settings
from plainly.explain.explainer import Explainer
from plainly.explain.prompts import MODE_GUIDANCE
from plainly.llm.client import LLMClient

INSURANCE_TEXT = (
    "The insurer may deny coverage if material misrepresentation is found in the "
    "application or underwriting file."
)


class FakeProvider:
    """In-memory stand-in for the completion provider.

    Records every call and returns a canned reply (or raises a canned error).
    """

    def __init__(self, reply: Any = None, error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def complete(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        model: str | None = None,
        temperature: float | None = None,
    ) -> str:
        self.calls.append(
            {"messages": list(messages), "model": model, "temperature": temperature}
        )
        if self.error is not None:
            raise self.error
        return self.reply if isinstance(self.reply, str) else json.dumps(self.reply)


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "explanation": "They can refuse to pay if your form had wrong facts.",
        "summary": "Wrong facts can void coverage.",
        "nextSteps": ["a", "b", "c", "d", "e"],
        "needsClarification": False,
    }
    payload.update(overrides)
    return payload


def test_insurance_scenario_truncates_next_steps() -> None:
    provider = FakeProvider(_payload())
    explainer = Explainer(provider=provider)

    result = explainer.explain(INSURANCE_TEXT, "normal")

    assert result.next_steps == ["a", "b", "c", "d"]
    assert result.needs_clarification is False
    assert len(provider.calls) == 1

    user_prompt = provider.calls[0]["messages"][1]["content"]
    assert INSURANCE_TEXT in user_prompt
    assert MODE_GUIDANCE["normal"] in user_prompt


def test_questions_are_capped_at_two() -> None:
    provider = FakeProvider(
        _payload(needsClarification=True, questions=["Which state?", "Which policy?", "When?"])
    )

    result = Explainer(provider=provider).explain(INSURANCE_TEXT)

    assert result.needs_clarification is True
    assert result.questions == ["Which state?", "Which policy?"]


def test_clarification_round_sends_both_answers_upstream() -> None:
    provider = FakeProvider(_payload())
    explainer = Explainer(provider=provider)

    explainer.explain(INSURANCE_TEXT, "normal", ["Yes", "No"])

    user_prompt = provider.calls[0]["messages"][1]["content"]
    assert "1. Yes" in user_prompt
    assert "2. No" in user_prompt


def test_model_and_temperature_are_forwarded() -> None:
    provider = FakeProvider(_payload())

    Explainer(provider=provider, model="careful", temperature=0.1).explain("hi", "quick")

    assert provider.calls[0]["model"] == "careful"
    assert provider.calls[0]["temperature"] == 0.1
    assert provider.calls[0]["messages"][0]["content"] == "Return JSON only. No extra text."


def test_explain_request_uses_normalized_fields() -> None:
    provider = FakeProvider(_payload())
    request = ExplainRequest.from_payload({"text": "  hi  ", "mode": "kid", "answers": ["Yes"]})

    Explainer(provider=provider).explain_request(request)

    user_prompt = provider.calls[0]["messages"][1]["content"]
    assert MODE_GUIDANCE["kid"] in user_prompt
    assert "1. Yes" in user_prompt


@pytest.mark.parametrize(
    "error",
    [ConfigurationError(), UpstreamError("rate limited"), ParseError("Empty response from LLM")],
)
def test_provider_errors_propagate(error: Exception) -> None:
    explainer = Explainer(provider=FakeProvider(error=error))

    with pytest.raises(type(error)) as excinfo:
        explainer.explain(INSURANCE_TEXT)

    assert excinfo.value is error


def test_reply_missing_summary_is_a_parse_error() -> None:
    payload = _payload()
    del payload["summary"]

    with pytest.raises(ParseError):
        Explainer(provider=FakeProvider(payload)).explain(INSURANCE_TEXT)


def test_clarification_disabled_never_asks() -> None:
    provider = FakeProvider(
        {"explanation": "e", "summary": "s", "nextSteps": [], "questions": ["q"]}
    )

    result = Explainer(provider=provider, clarification=False).explain("hi")

    assert result.needs_clarification is False
    assert result.questions is None
    assert "needsClarification" not in provider.calls[0]["messages"][1]["content"]


def test_from_settings_without_key_fails_without_outbound_call(monkeypatch: Any) -> None:
    def exploding_post(self: LLMClient, **_: Any) -> dict[str, Any]:
        raise AssertionError("no outbound call expected")

    monkeypatch.setattr(LLMClient, "_post", exploding_post)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    explainer = Explainer.from_settings(Settings(_env_file=None))

    with pytest.raises(ConfigurationError, match="Missing configuration"):
        explainer.explain(INSURANCE_TEXT)


def test_from_settings_wires_client_and_sampling() -> None:
    s = Settings(
        _env_file=None,
        OPENAI_API_KEY="sk-test",
        PLAINLY_MODEL="fast",
        PLAINLY_TEMPERATURE=0.0,
        PLAINLY_CLARIFICATION=False,
    )

    explainer = Explainer.from_settings(s)

    assert isinstance(explainer.provider, LLMClient)
    assert explainer.provider.api_key == "sk-test"
    assert explainer.model == "fast"
    assert explainer.temperature == 0.0
    assert explainer.clarification is False


@pytest.mark.parametrize(("alias", "expected"), [("fast", 0.0), ("explainer", 0.2)])
def test_unset_temperature_uses_the_alias_default(
    monkeypatch: Any, alias: str, expected: float
) -> None:
    seen: dict[str, Any] = {}

    def fake_post(self: LLMClient, *, url: str, headers: Any, payload: Any) -> dict[str, Any]:
        seen.update(payload)
        return {"choices": [{"message": {"content": json.dumps(_payload())}}]}

    monkeypatch.setattr(LLMClient, "_post", fake_post)
    monkeypatch.delenv("PLAINLY_TEMPERATURE", raising=False)
    s = Settings(_env_file=None, OPENAI_API_KEY="sk-test", PLAINLY_MODEL=alias)

    Explainer.from_settings(s).explain("hi")

    assert seen["temperature"] == expected


def test_explicit_temperature_overrides_the_alias_default(monkeypatch: Any) -> None:
    seen: dict[str, Any] = {}

    def fake_post(self: LLMClient, *, url: str, headers: Any, payload: Any) -> dict[str, Any]:
        seen.update(payload)
        return {"choices": [{"message": {"content": json.dumps(_payload())}}]}

    monkeypatch.setattr(LLMClient, "_post", fake_post)
    s = Settings(
        _env_file=None, OPENAI_API_KEY="sk-test", PLAINLY_MODEL="fast", PLAINLY_TEMPERATURE=0.7
    )

    Explainer.from_settings(s).explain("hi")

    assert seen["temperature"] == 0.7
