from __future__ import annotations

from .client import LLMClient
from .models import (
    DEFAULT_ALIAS,
    MODEL_REGISTRY,
    ModelConfig,
    all_models,
    get_model,
)
from .provider import CompletionProvider

__all__ = [
    "ModelConfig",
    "MODEL_REGISTRY",
    "DEFAULT_ALIAS",
    "get_model",
    "all_models",
    "CompletionProvider",
    "LLMClient",
]
