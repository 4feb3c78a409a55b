"""
Prompts Module - Centralized prompt templates for page generation.
"""

from pagen.ai.prompts.webpage_prompts import (
    HTML_FENCE_CLOSER,
    HTML_FENCE_OPENER,
    WEBPAGE_SYSTEM_PROMPT,
    build_form_prompt,
    build_submission_prompt,
)

__all__ = [
    "HTML_FENCE_CLOSER",
    "HTML_FENCE_OPENER",
    "WEBPAGE_SYSTEM_PROMPT",
    "build_form_prompt",
    "build_submission_prompt",
]
