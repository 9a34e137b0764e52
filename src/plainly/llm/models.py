# -----------------------------------------------------------------------------
# This module defines a tiny, in-process model registry used by the LLM client.
#
# The registry gives us a single place to:
#   - declare human-friendly aliases (e.g. "explainer", "fast")
#   - pin them to concrete provider model IDs
#   - keep default sampling parameters (temperature)
#
# Unknown names are treated as concrete model IDs, so `PLAINLY_MODEL=gpt-4o`
# works without touching this file.
# -----------------------------------------------------------------------------
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ModelConfig:
    """Configuration for a single chat-completion model.

    Parameters
    ----------
    name:
        Provider-specific model identifier, e.g. ``"gpt-4o-mini"``.
    temperature:
        Default sampling temperature. Explanations should stay close to the
        source text, so every entry here stays low.
    """

    name: str
    temperature: float = 0.2


MODEL_REGISTRY: dict[str, ModelConfig] = {
    # The production explainer: cheap, fast, good at following a JSON schema.
    "explainer": ModelConfig(name="gpt-4o-mini", temperature=0.2),
    # Same model with fully greedy sampling, handy for reproducible demos.
    "fast": ModelConfig(name="gpt-4o-mini", temperature=0.0),
    # Larger model for texts where the small one keeps asking questions.
    "careful": ModelConfig(name="gpt-4o", temperature=0.2),
}

#: Default logical alias used when callers do not explicitly choose a model.
DEFAULT_ALIAS: str = "explainer"


def get_model(alias_or_name: str) -> ModelConfig:
    """Return a :class:`ModelConfig` for the given alias or model name.

    Registry aliases win; anything else becomes a config wrapping the raw
    model ID with the default temperature.
    """
    if alias_or_name in MODEL_REGISTRY:
        return MODEL_REGISTRY[alias_or_name]
    return ModelConfig(name=alias_or_name)


def all_models() -> Mapping[str, ModelConfig]:
    """Return a shallow copy of the registry for diagnostics and tests."""
    return dict(MODEL_REGISTRY)


__all__ = ["ModelConfig", "MODEL_REGISTRY", "DEFAULT_ALIAS", "get_model", "all_models"]
