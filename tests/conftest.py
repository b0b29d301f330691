"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- In-memory device store (no Firebase dependency)
- Scripted LLM provider (no network calls, no token costs)
- Dispatcher, extractor and service wired together
- Test client (FastAPI TestClient)
"""

import json
from typing import Any, Dict, Generator, List, Optional, Union

import pytest
from fastapi.testclient import TestClient

from homeintent.ai.intent.parser import IntentExtractor
from homeintent.ai.providers.base import AIProvider, AIResponse, ProviderType
from homeintent.devices.address_table import DEFAULT_ADDRESS_TABLE
from homeintent.devices.store import InMemoryDeviceStore
from homeintent.main import create_app
from homeintent.monitoring import DispatchMonitor
from homeintent.services.dispatcher import IntentDispatcher
from homeintent.services.instruction_service import InstructionService


# ---------------------------------------------------------------------------
# FAKE LLM PROVIDER
# ---------------------------------------------------------------------------

class ScriptedProvider(AIProvider):
    """
    AIProvider returning a canned answer.

    `answer` may be a dict (sent as JSON), a raw string, or None to
    simulate a provider failure.
    """

    provider_type = ProviderType.OLLAMA

    def __init__(self, answer: Union[Dict[str, Any], str, None] = None, error: str = "connection refused"):
        self.model = "scripted"
        self.answer = answer
        self.error = error
        self.prompts: List[str] = []

    async def generate_json(self, prompt: str, system_prompt: Optional[str] = None, **kwargs) -> AIResponse:
        self.prompts.append(prompt)
        if self.answer is None:
            return self._create_error_response(self.error, self.model)
        content = self.answer if isinstance(self.answer, str) else json.dumps(self.answer)
        return AIResponse(content=content, provider=self.provider_type, model=self.model)


# ---------------------------------------------------------------------------
# CORE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> InMemoryDeviceStore:
    """Empty in-memory device store."""
    return InMemoryDeviceStore()


@pytest.fixture
def monitor() -> DispatchMonitor:
    """Fresh monitor so stats never leak between tests."""
    return DispatchMonitor()


@pytest.fixture
def dispatcher(store: InMemoryDeviceStore, monitor: DispatchMonitor) -> IntentDispatcher:
    return IntentDispatcher(store, table=DEFAULT_ADDRESS_TABLE, monitor=monitor)


@pytest.fixture
def provider() -> ScriptedProvider:
    """Provider answering with a valid 'kitchen light on' intent."""
    return ScriptedProvider({"target": "light", "action": "on", "content": "", "location": "kitchen"})


@pytest.fixture
def service(provider: ScriptedProvider, dispatcher: IntentDispatcher, monitor: DispatchMonitor) -> InstructionService:
    return InstructionService(IntentExtractor(provider), dispatcher, monitor=monitor)


# ---------------------------------------------------------------------------
# HTTP FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def client(
    store: InMemoryDeviceStore,
    provider: ScriptedProvider,
    monitor: DispatchMonitor,
) -> Generator[TestClient, None, None]:
    """
    Test client around an app using the in-memory store and the
    scripted provider. Tests change `provider.answer` and seed `store`
    before sending requests.
    """
    app = create_app(store=store, provider=provider, monitor=monitor)
    with TestClient(app) as test_client:
        yield test_client
