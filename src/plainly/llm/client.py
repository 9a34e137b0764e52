# -----------------------------------------------------------------------------
# This module provides a small, synchronous chat-completion client that:
#   - receives its credential and base URL explicitly (no environment reads)
#   - uses the model registry to resolve logical aliases → concrete model IDs
#   - exposes a single `complete()` method that returns a text completion
#
# The implementation uses only the Python standard library (`urllib.request`)
# so that it does not introduce additional dependencies. Unit tests are
# expected to *mock* the internal `_post()` method so that no real HTTP calls
# are made during CI.
#
# Exactly one HTTP request is issued per `complete()` call. There is no retry
# loop: every failure is surfaced to the caller as a typed `ExplainError`.
# -----------------------------------------------------------------------------
from __future__ import annotations

import json
import urllib.error
import urllib.request
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from plainly.core.errors import ConfigurationError, ParseError, UpstreamError
from plainly.core.settings import get_logger

from .models import DEFAULT_ALIAS, ModelConfig, get_model

if TYPE_CHECKING:
    from plainly.core.settings import Settings

logger = get_logger(__name__)


@dataclass(slots=True)
class LLMClient:
    """OpenAI-compatible Chat Completions client with a `complete()` API.

    The client satisfies :class:`~plainly.llm.provider.CompletionProvider`.

    Parameters
    ----------
    api_key:
        Bearer credential for the provider. An empty value makes every call
        fail with :class:`ConfigurationError` before any network I/O.
    base_url:
        Base URL for the endpoint, e.g. ``"https://api.openai.com/v1"``.
        ``/chat/completions`` is appended.
    default_model_alias:
        Logical alias looked up in the model registry when callers do not
        pass ``model``.
    timeout_seconds:
        Socket timeout for the single HTTP request.
    """

    api_key: str | None
    base_url: str = "https://api.openai.com/v1"
    default_model_alias: str = DEFAULT_ALIAS
    timeout_seconds: float = 60.0

    # --------------------------------------------------------------------- #
    # Constructors
    # --------------------------------------------------------------------- #
    @classmethod
    def from_settings(cls, settings: Settings) -> LLMClient:
        """Construct a client from an explicit :class:`Settings` instance."""
        return cls(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            default_model_alias=settings.model_alias,
            timeout_seconds=settings.timeout_seconds,
        )

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def complete(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        model: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Generate a single text completion from the given chat messages.

        Parameters
        ----------
        messages:
            Chat-style messages, each with ``{"role": ..., "content": ...}``.
        model:
            Optional logical alias or concrete provider model ID. Falls back
            to :attr:`default_model_alias`.
        temperature:
            Optional override of the model's default sampling temperature.

        Returns
        -------
        str
            The text content of the first choice in the response.

        Raises
        ------
        ConfigurationError
            If no API key is configured. No request is sent.
        UpstreamError
            If the provider answers with a non-success status or cannot be
            reached.
        ParseError
            If the response body is not JSON or carries no content.
        """
        if not self.api_key:
            logger.error("No completion credential configured (OPENAI_API_KEY)")
            raise ConfigurationError()

        config: ModelConfig = get_model(model or self.default_model_alias)
        effective_temperature = float(
            temperature if temperature is not None else config.temperature
        )

        url = self.base_url.rstrip("/") + "/chat/completions"
        payload: MutableMapping[str, Any] = {
            "model": config.name,
            "temperature": effective_temperature,
            "messages": [{"role": m["role"], "content": m["content"]} for m in messages],
        }
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        logger.debug("POST %s model=%s temperature=%s", url, config.name, effective_temperature)
        response = self._post(url=url, headers=headers, payload=payload)
        return self._extract_content(response)

    # --------------------------------------------------------------------- #
    # Internal helpers (test seams)
    # --------------------------------------------------------------------- #
    def _post(
        self,
        *,
        url: str,
        headers: Mapping[str, str],
        payload: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Perform an HTTP POST request and decode the JSON response.

        This is the main seam for unit tests: tests patch :meth:`_post` at the
        class level to return a stubbed response without real network I/O.

        Raises
        ------
        UpstreamError
            On any non-2xx status (message = response body text) or a
            transport failure.
        ParseError
            If a successful response body cannot be decoded as JSON.
        """
        body = json.dumps(payload).encode("utf-8")
        request = urllib.request.Request(
            url=url,
            data=body,
            headers=dict(headers),
            method="POST",
        )

        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore").strip()
            logger.warning("Completion provider returned HTTP %s", exc.code)
            raise UpstreamError(detail, status_code=exc.code) from exc
        except (urllib.error.URLError, TimeoutError) as exc:
            logger.warning("Completion provider unreachable: %s", exc)
            raise UpstreamError(f"LLM network error: {exc}") from exc

        try:
            decoded: dict[str, Any] = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ParseError() from exc

        return decoded

    @staticmethod
    def _extract_content(response: Mapping[str, Any]) -> str:
        """Extract ``choices[0].message.content`` from a Chat Completions payload.

        Raises
        ------
        ParseError
            If the expected fields are missing, malformed or empty.
        """
        choices = response.get("choices") if isinstance(response, Mapping) else None
        if not isinstance(choices, list) or not choices:
            raise ParseError("Empty response from LLM")

        first = choices[0]
        message = first.get("message") if isinstance(first, Mapping) else None
        if not isinstance(message, Mapping):
            raise ParseError("Empty response from LLM")

        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            raise ParseError("Empty response from LLM")

        return content


__all__ = ["LLMClient"]
