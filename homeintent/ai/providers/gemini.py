"""
Gemini Provider - hosted intent extraction through Google's GenAI SDK.

Used when INTENT_PROVIDER=gemini. The model is asked for
application/json output with a low temperature, and the answer is
bounded to a few hundred tokens: an intent is four short strings.
"""

import logging
import time
from typing import Optional

from google import genai
from google.genai import types

from homeintent.core.config import settings
from homeintent.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage,
)

logger = logging.getLogger("homeintent.ai.gemini")

INTENT_TEMPERATURE = 0.2
INTENT_MAX_OUTPUT_TOKENS = 256


class GeminiProvider(AIProvider):
    """
    Gemini client for intent extraction.

    Without an API key the provider still constructs, but every call
    returns a failed AIResponse, which surfaces as an extraction error.
    """

    provider_type = ProviderType.GEMINI

    def __init__(self, model: str = None, api_key: str = None):
        self.model = model or settings.GEMINI_MODEL
        api_key = api_key or settings.GEMINI_API_KEY
        self._client: Optional[genai.Client] = genai.Client(api_key=api_key) if api_key else None

        if self._client is None:
            logger.warning("GEMINI_API_KEY is empty; Gemini intent extraction will fail")
        else:
            logger.info(f"Gemini provider ready (model={self.model})")

    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        start_time = time.time()
        if self._client is None:
            return self._create_error_response("API key missing", self.model)

        config = types.GenerateContentConfig(
            temperature=INTENT_TEMPERATURE,
            max_output_tokens=INTENT_MAX_OUTPUT_TOKENS,
            response_mime_type="application/json",
            system_instruction=system_prompt,
        )

        try:
            result = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            return self._create_error_response(
                f"Gemini request failed: {e}", self.model, self._measure_latency(start_time)
            )

        usage = result.usage_metadata
        return AIResponse(
            content=self._strip_code_fence(result.text or ""),
            provider=self.provider_type,
            model=self.model,
            usage=TokenUsage(
                prompt_tokens=(usage.prompt_token_count or 0) if usage else 0,
                completion_tokens=(usage.candidates_token_count or 0) if usage else 0,
            ),
            latency_ms=self._measure_latency(start_time),
        )
