"""Exception taxonomy shared by the adapter, the API and the CLI.

Every failure is terminal for the request that hit it; nothing here is
retried. The API maps `ValidationError` to HTTP 400 and every other
`ExplainError` (and any unexpected exception) to HTTP 500.
"""

from __future__ import annotations


class ExplainError(Exception):
    """Base class for every error raised while producing an explanation."""


class ValidationError(ExplainError):
    """Inbound fields are missing or invalid (empty text, unknown mode)."""


class ConfigurationError(ExplainError):
    """No model credential is configured; the outbound call is never made."""

    def __init__(self, message: str = "Missing configuration") -> None:
        super().__init__(message)


class UpstreamError(ExplainError):
    """The completion provider answered with a non-success status.

    The message is the upstream body text, or a generic fallback when the
    provider sent nothing back.
    """

    def __init__(self, message: str = "", *, status_code: int | None = None) -> None:
        super().__init__(message or "LLM request failed")
        self.status_code = status_code


class ParseError(ExplainError):
    """The model reply is empty, not JSON, or misses required fields."""

    def __init__(self, message: str = "Failed to parse LLM response") -> None:
        super().__init__(message)


__all__ = [
    "ExplainError",
    "ValidationError",
    "ConfigurationError",
    "UpstreamError",
    "ParseError",
]
