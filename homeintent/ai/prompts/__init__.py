"""
Prompts Module - Centralized prompt templates for AI interactions.
"""

from homeintent.ai.prompts.intent_prompts import (
    INTENT_SYSTEM_PROMPT,
    INTENT_EXTRACTION_PROMPT,
)

__all__ = [
    "INTENT_SYSTEM_PROMPT",
    "INTENT_EXTRACTION_PROMPT",
]
