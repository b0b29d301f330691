"""
Intent Module - Natural Language Understanding for the dispatcher.

Example Flow:
============
User says: "turn off all the lights"

IntentExtractor extracts:
{
    "target": "light",
    "action": "off",
    "content": "",
    "location": "all"
}
"""

from homeintent.ai.intent.schemas import Intent
from homeintent.ai.intent.parser import IntentExtractor

__all__ = [
    "Intent",
    "IntentExtractor",
]
