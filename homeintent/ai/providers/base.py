"""
Base AI Provider - the contract every intent-extraction LLM fulfils.

An instruction goes in, a JSON string comes out. Providers are
interchangeable: the extractor only ever calls generate_json() and
checks AIResponse.success.

Providers never raise for model or transport problems. They hand back
an AIResponse with success=False and the reason in `error`, and the
extractor decides what that means for the request.

Example:
    provider = OllamaProvider()
    response = await provider.generate_json(
        "open the door",
        system_prompt="You are my Home AI assistant.",
    )
    if response.success:
        intent_json = response.content
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger("homeintent.ai")


class ProviderType(str, Enum):
    """LLM backends that can extract intents."""
    OLLAMA = "ollama"
    GEMINI = "gemini"


@dataclass
class TokenUsage:
    """Tokens reported by the backend, zero when it reports none."""
    prompt_tokens: int = 0
    completion_tokens: int = 0

    @property
    def total(self) -> int:
        return self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Answer from a provider.

    Attributes:
        content: Raw JSON text produced by the model ("" on failure)
        provider: Backend that answered
        model: Model name/tag used
        usage: Token counts
        latency_ms: Round-trip time of the call
        success: False when the call or its decoding failed
        error: Failure reason when success is False
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None

    def log_summary(self) -> Dict[str, Any]:
        """Compact form for log lines; content is truncated."""
        return {
            "provider": self.provider.value,
            "model": self.model,
            "success": self.success,
            "latency_ms": round(self.latency_ms, 2),
            "tokens": self.usage.total,
            "content": self.content[:80],
            "error": self.error,
        }


class AIProvider(ABC):
    """
    Abstract intent-extraction backend.

    Subclasses set `provider_type` and `model` and implement
    generate_json(). Backends holding a connection pool override close().
    """

    provider_type: ProviderType
    model: str = ""

    @abstractmethod
    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> AIResponse:
        """
        Ask the model for a JSON object.

        Args:
            prompt: Extraction prompt with the instruction embedded
            system_prompt: Persona / framing for the model
            **kwargs: Backend-specific options

        Returns:
            AIResponse whose content is a JSON string on success.
            Failures are reported in the response, not raised.
        """
        pass

    async def close(self) -> None:
        """Release any resources held by the provider."""
        return None

    def _measure_latency(self, start_time: float) -> float:
        return (time.time() - start_time) * 1000

    def _create_error_response(
        self,
        error: str,
        model: str,
        latency_ms: float = 0.0
    ) -> AIResponse:
        logger.error(f"{self.provider_type.value} request failed: {error}")
        return AIResponse(
            content="",
            provider=self.provider_type,
            model=model,
            latency_ms=latency_ms,
            success=False,
            error=error,
        )

    @staticmethod
    def _strip_code_fence(content: str) -> str:
        """Remove a ```json ... ``` wrapper some models add around JSON."""
        content = content.strip()
        if content.startswith("```"):
            content = content.split("\n", 1)[1] if "\n" in content else content[3:]
            if content.rstrip().endswith("```"):
                content = content.rstrip()[:-3]
        return content.strip()
