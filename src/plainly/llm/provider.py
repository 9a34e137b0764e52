"""The narrow capability the explainer needs from a language model.

Anything with a matching ``complete()`` method can stand in for the real HTTP
client, which is how the tests feed canned JSON to the explainer.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class CompletionProvider(Protocol):
    """Turn a short list of chat messages into one text completion."""

    def complete(
        self,
        messages: Sequence[Mapping[str, str]],
        *,
        model: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Return the text of the first completion choice.

        Implementations raise :class:`~plainly.core.errors.ConfigurationError`
        when they lack a credential, :class:`~plainly.core.errors.UpstreamError`
        on a failed call and :class:`~plainly.core.errors.ParseError` when the
        reply carries no text.
        """
        ...


__all__ = ["CompletionProvider"]
