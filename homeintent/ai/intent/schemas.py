"""
Intent Schemas - Pydantic model for the structured intent.

The LLM answers with four string keys. Pydantic validates them at
construction time: a missing, null or non-string field is an error,
never silently defaulted. Empty strings are valid ("no location").
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class Intent(BaseModel):
    """
    Structured request extracted from one instruction.

    Immutable; consumed once per request.

    Example:
        {
            "target": "light",
            "action": "on",
            "content": "",
            "location": "living room"
        }
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    target: StrictStr = Field(description="Device class, e.g. 'light' or 'door'")
    action: StrictStr = Field(description="Action verb, e.g. 'on', 'off', 'open', 'close'")
    content: StrictStr = Field(description="Content to search, empty if not specified")
    location: StrictStr = Field(description="Location name, 'all', or empty")

    def to_log_dict(self) -> Dict[str, Any]:
        """Dictionary form used in structured logs and responses."""
        return self.model_dump()
