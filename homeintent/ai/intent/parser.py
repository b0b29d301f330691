"""
Intent Extractor - Extracts structured intents from raw instructions.

The extractor:
1. Takes raw text input ("open the door")
2. Calls the LLM provider with the extraction prompt
3. Parses the JSON response
4. Validates it into an Intent (all four keys required)

It does not retry and does not guess: provider failures, invalid JSON
and schema mismatches all raise ExtractionError.
"""

import json
import logging
import time

from pydantic import ValidationError

from homeintent.ai.providers.base import AIProvider
from homeintent.ai.prompts.intent_prompts import (
    INTENT_SYSTEM_PROMPT,
    INTENT_EXTRACTION_PROMPT,
)
from homeintent.ai.intent.schemas import Intent
from homeintent.core.errors import ExtractionError

logger = logging.getLogger("homeintent.ai.intent")


class IntentExtractor:
    """
    Parses natural language into an Intent.

    Usage:
        extractor = IntentExtractor(provider)
        intent = await extractor.extract("turn on the light in the kitchen")
        print(intent.target, intent.action, intent.location)
    """

    def __init__(self, provider: AIProvider):
        self.provider = provider
        logger.info(f"Intent extractor initialized with {provider.provider_type.value}")

    async def extract(self, text: str) -> Intent:
        """
        Extract an intent from a raw instruction.

        Raises:
            ExtractionError: if the provider fails or its answer is unusable
        """
        start_time = time.time()
        logger.info(f"Extracting intent: {text[:50]}...")

        response = await self.provider.generate_json(
            prompt=INTENT_EXTRACTION_PROMPT.format(instruction=text),
            system_prompt=INTENT_SYSTEM_PROMPT,
        )
        logger.debug(f"Provider response: {response.log_summary()}")

        if not response.success:
            logger.warning(f"Intent extraction failed: {response.error}")
            raise ExtractionError(f"Error from AI service: {response.error}")

        try:
            data = json.loads(response.content)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse intent JSON: {e}")
            raise ExtractionError(f"Failed to parse AI response JSON: {e}") from e

        if not isinstance(data, dict):
            raise ExtractionError(f"AI response is not a JSON object: {response.content[:50]}")

        try:
            intent = Intent.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            logger.warning(f"AI response failed intent validation: {fields}")
            raise ExtractionError(f"AI response has missing or invalid fields: {fields}") from e

        processing_time = (time.time() - start_time) * 1000
        logger.info(f"Extracted intent in {processing_time:.0f}ms: {intent.target}/{intent.action}")
        return intent
