"""
AI Providers Module - LLM clients used for intent extraction.

- Ollama (local, default)
- Google Gemini

Each provider has the same interface, making them interchangeable:
    response = await provider.generate_json(prompt, system_prompt=...)
"""

from homeintent.core.config import Settings
from homeintent.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from homeintent.ai.providers.gemini import GeminiProvider
from homeintent.ai.providers.ollama import OllamaProvider


def get_provider(settings: Settings) -> AIProvider:
    """
    Create the provider selected by settings.INTENT_PROVIDER.

    Raises:
        ValueError: for an unknown provider name
    """
    name = settings.INTENT_PROVIDER.lower()
    if name == ProviderType.OLLAMA.value:
        return OllamaProvider(
            url=settings.OLLAMA_URL,
            model=settings.OLLAMA_MODEL,
            timeout=settings.AI_REQUEST_TIMEOUT,
        )
    if name == ProviderType.GEMINI.value:
        return GeminiProvider(model=settings.GEMINI_MODEL, api_key=settings.GEMINI_API_KEY)
    raise ValueError(f"Unknown INTENT_PROVIDER: {settings.INTENT_PROVIDER!r}")


__all__ = [
    "AIProvider",
    "AIResponse",
    "ProviderType",
    "TokenUsage",
    "GeminiProvider",
    "OllamaProvider",
    "get_provider",
]
