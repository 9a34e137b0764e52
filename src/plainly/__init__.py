"""Plainly: paste confusing text, get a plain-language explanation back.

The package is split into a small core (settings, errors, contracts), an LLM
transport layer, the explain adapter, and two front ends (HTTP API and CLI).
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
