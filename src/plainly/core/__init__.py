"""Core package initializer for Plainly.

Downstream code imports from the submodules directly:
    from plainly.core.settings import settings, load_settings, Settings, get_logger
    from plainly.core.errors import ExplainError, ParseError
"""

from __future__ import annotations

__all__ = ["__doc__"]
