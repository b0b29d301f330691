"""
Ollama Provider - local LLM served by Ollama's /api/generate endpoint.

Default provider: the instruction never leaves the house. The prompt is
wrapped in phi3's chat template, and Ollama's JSON mode keeps the model
from adding prose around the object.
"""

import json
import time
import logging
from typing import Optional

import httpx

from homeintent.core.config import settings
from homeintent.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage,
)

logger = logging.getLogger("homeintent.ai.ollama")

DEFAULT_SYSTEM_PROMPT = "You are my Home AI assistant."


class OllamaProvider(AIProvider):
    """
    Client for a local Ollama server.

    Args:
        url: Full URL of the generate endpoint
        model: Ollama model tag
        timeout: Request timeout in seconds
        client: Optional pre-built httpx.AsyncClient (tests inject one
            with an httpx.MockTransport)
    """

    provider_type = ProviderType.OLLAMA

    def __init__(
        self,
        url: str = None,
        model: str = None,
        timeout: float = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = url or settings.OLLAMA_URL
        self.model = model or settings.OLLAMA_MODEL
        self._client = client or httpx.AsyncClient(timeout=timeout or settings.AI_REQUEST_TIMEOUT)
        logger.info(f"Ollama provider initialized with model: {self.model} at {self.url}")

    def _build_prompt(self, prompt: str, system_prompt: Optional[str]) -> str:
        system = system_prompt or DEFAULT_SYSTEM_PROMPT
        return f"<|system|>{system}<|end|><|user|>{prompt}<|end|><|assistant|>"

    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        start_time = time.time()
        payload = {
            "model": self.model,
            "prompt": self._build_prompt(prompt, system_prompt),
            "stream": False,
            "format": "json",
        }

        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Failed to send request to Ollama: {e}")
            return self._error(f"failed to send request to AI service: {e}", start_time)

        if not response.is_success:
            return self._error(f"AI service returned HTTP {response.status_code}", start_time)

        try:
            data = response.json()
            content = data["response"]
        except (ValueError, KeyError, TypeError) as e:
            return self._error(f"failed to decode AI response: {e}", start_time)

        if not isinstance(content, str):
            return self._error(f"failed to decode AI response: {json.dumps(content)[:50]}", start_time)

        return AIResponse(
            content=self._strip_code_fence(content),
            provider=self.provider_type,
            model=self.model,
            usage=TokenUsage(
                prompt_tokens=data.get("prompt_eval_count") or 0,
                completion_tokens=data.get("eval_count") or 0,
            ),
            latency_ms=self._measure_latency(start_time),
            success=True,
        )

    async def close(self) -> None:
        await self._client.aclose()

    def _error(self, msg, start_time):
        return self._create_error_response(msg, self.model, self._measure_latency(start_time))
