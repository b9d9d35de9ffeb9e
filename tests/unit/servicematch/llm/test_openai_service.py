"""
Unit tests for the OpenAI-backed LLM provider and the provider handle.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from servicematch.llm.handle import LLMHandle
from servicematch.llm.openai_service import OpenAIService


def _completion(content):
    mock_message = MagicMock()
    mock_message.content = content
    mock_choice = MagicMock()
    mock_choice.message = mock_message
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    return mock_response


class TestConfiguration:

    def test_no_key_creates_no_client(self):
        svc = OpenAIService(api_key=None)
        assert svc.is_configured is False
        assert svc.client is None

    @pytest.mark.parametrize("key", ["", "demo-key", "changeme"])
    def test_placeholder_keys_are_unconfigured(self, key):
        svc = OpenAIService(api_key=key)
        assert svc.is_configured is False
        assert svc.client is None

    def test_real_key_creates_client(self):
        svc = OpenAIService(api_key="sk-test", base_url="http://localhost:11434/v1")
        assert svc.is_configured is True
        assert svc.client is not None

    def test_model_config_defaults(self):
        svc = OpenAIService(api_key="sk-test")
        assert svc.model == "gpt-4o-mini"
        assert svc.temperature == 0.2
        assert svc.max_tokens == 800

        svc = OpenAIService(api_key="sk-test", model_config={"model": "llama3", "max_tokens": 300})
        assert svc.model == "llama3"
        assert svc.max_tokens == 300


class TestComplete:

    @pytest.fixture
    def service(self):
        svc = OpenAIService(api_key="sk-test", model_config={"model": "test-model", "temperature": 0.0})
        svc.client = MagicMock()
        svc.client.chat.completions.create = AsyncMock(return_value=_completion('  {"overallScore": 80}\n'))
        return svc

    @pytest.mark.asyncio
    async def test_sends_system_and_user_messages(self, service):
        text = await service.complete("system text", "user text")

        assert text == '{"overallScore": 80}'
        kwargs = service.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["temperature"] == 0.0
        assert kwargs["messages"] == [
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "user text"},
        ]

    @pytest.mark.asyncio
    async def test_empty_content_returns_empty_string(self, service):
        service.client.chat.completions.create.return_value = _completion(None)
        assert await service.complete("s", "u") == ""

    @pytest.mark.asyncio
    async def test_unconfigured_raises(self):
        svc = OpenAIService(api_key=None)
        with pytest.raises(RuntimeError):
            await svc.complete("s", "u")


class TestLLMHandle:

    def test_empty_handle(self):
        handle = LLMHandle()
        assert handle.get() is None
        assert handle.is_configured is False

    def test_swap(self):
        handle = LLMHandle(OpenAIService(api_key=None))
        assert handle.is_configured is False

        configured = OpenAIService(api_key="sk-test")
        handle.swap(configured)
        assert handle.get() is configured
        assert handle.is_configured is True

        handle.swap(None)
        assert handle.is_configured is False
