from __future__ import annotations

from .explainer import Explainer
from .parser import parse_reply
from .prompts import MODE_GUIDANCE, SYSTEM_PROMPT, build_messages, build_prompt
from .render import render_text

__all__ = [
    "Explainer",
    "MODE_GUIDANCE",
    "SYSTEM_PROMPT",
    "build_messages",
    "build_prompt",
    "parse_reply",
    "render_text",
]
