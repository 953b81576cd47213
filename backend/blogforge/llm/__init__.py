"""
Blogforge LLM Components
========================

Structured content generation over an OpenAI-compatible API.
"""

from .content_generator import CONTENT_SYSTEM_PROMPT, ContentGenerator, strip_code_fences

__all__ = [
    "ContentGenerator",
    "CONTENT_SYSTEM_PROMPT",
    "strip_code_fences",
]
