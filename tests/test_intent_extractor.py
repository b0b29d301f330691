"""
Tests for the Intent Extractor.

Tests for:
- Prompt construction
- Valid LLM answers → Intent
- Unusable answers → ExtractionError (no guessing)
"""

import pytest
from pydantic import ValidationError

from homeintent.ai.intent.parser import IntentExtractor
from homeintent.ai.intent.schemas import Intent
from homeintent.core.errors import ExtractionError, FailureKind


class TestExtract:
    """Tests for IntentExtractor.extract()."""

    @pytest.mark.asyncio
    async def test_valid_answer(self, provider):
        intent = await IntentExtractor(provider).extract("turn on the kitchen light")

        assert intent == Intent(target="light", action="on", content="", location="kitchen")

    @pytest.mark.asyncio
    async def test_instruction_is_embedded_in_prompt(self, provider):
        await IntentExtractor(provider).extract("open the door please")

        assert len(provider.prompts) == 1
        assert "open the door please" in provider.prompts[0]
        assert '"target"' in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_extra_keys_ignored(self, provider):
        provider.answer = {"target": "door", "action": "open", "content": "", "location": "", "mood": "happy"}

        intent = await IntentExtractor(provider).extract("open the door")

        assert intent.target == "door"
        assert not hasattr(intent, "mood")

    @pytest.mark.asyncio
    async def test_raw_string_answer(self, provider):
        provider.answer = '{"target": "light", "action": "off", "content": "", "location": "all"}'

        intent = await IntentExtractor(provider).extract("lights off")

        assert intent.location == "all"

    @pytest.mark.asyncio
    async def test_provider_failure(self, provider):
        provider.answer = None

        with pytest.raises(ExtractionError) as exc_info:
            await IntentExtractor(provider).extract("turn on the light")

        assert exc_info.value.kind is FailureKind.EXTRACTION_ERROR
        assert "connection refused" in exc_info.value.detail

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["not json at all", "", "{\"target\": "])
    async def test_non_json_answer(self, provider, answer):
        provider.answer = answer

        with pytest.raises(ExtractionError):
            await IntentExtractor(provider).extract("turn on the light")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ['["light", "on"]', '"light"', "42"])
    async def test_non_object_answer(self, provider, answer):
        provider.answer = answer

        with pytest.raises(ExtractionError):
            await IntentExtractor(provider).extract("turn on the light")

    @pytest.mark.asyncio
    async def test_missing_field(self, provider):
        provider.answer = {"target": "light", "action": "on", "content": ""}

        with pytest.raises(ExtractionError) as exc_info:
            await IntentExtractor(provider).extract("turn on the light")

        assert "location" in exc_info.value.detail

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad", [None, 1, True, ["on"]])
    async def test_non_string_field(self, provider, bad):
        provider.answer = {"target": "light", "action": bad, "content": "", "location": "kitchen"}

        with pytest.raises(ExtractionError) as exc_info:
            await IntentExtractor(provider).extract("turn on the light")

        assert "action" in exc_info.value.detail


class TestIntent:
    """Tests for the Intent schema."""

    def test_intent_is_immutable(self):
        intent = Intent(target="light", action="on", content="", location="kitchen")

        with pytest.raises(ValidationError):
            intent.action = "off"

    def test_log_dict(self):
        intent = Intent(target="door", action="open", content="", location="")

        assert intent.to_log_dict()["target"] == "door"
