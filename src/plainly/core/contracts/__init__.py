"""Pydantic contracts exchanged between the adapter and its callers."""

from __future__ import annotations

from .explain import (
    DEFAULT_MODE,
    EXPLAIN_MODES,
    MAX_NEXT_STEPS,
    MAX_QUESTIONS,
    ExplainMode,
    ExplainRequest,
    ExplainResult,
)

__all__ = [
    "DEFAULT_MODE",
    "EXPLAIN_MODES",
    "MAX_NEXT_STEPS",
    "MAX_QUESTIONS",
    "ExplainMode",
    "ExplainRequest",
    "ExplainResult",
]
