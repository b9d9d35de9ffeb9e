#!/usr/bin/env python3
"""
Unit tests for LLMCallPolicy.
"""
import httpx
import openai
import pytest

from servicematch.config_loader import ScoringConfig
from servicematch.exceptions import AITransportError, AIUnavailable
from servicematch.llm.handle import LLMHandle
from servicematch.llm.openai_service import OpenAIService
from servicematch.llm.policy import LLMCallPolicy
from tests.mocks.llm_mocks import MockLLMProvider, SlowLLMProvider


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", "http://llm.test"))


class FlakyLLMProvider(MockLLMProvider):
    """Raises the scripted errors in order, then answers."""

    def __init__(self, *errors):
        super().__init__(default="ok")
        self.errors = list(errors)

    async def complete(self, system_prompt, user_prompt):
        self.calls.append(user_prompt)
        if self.errors:
            raise self.errors.pop(0)
        return self.default


class TestProvider:

    def test_no_provider_is_unavailable(self):
        with pytest.raises(AIUnavailable):
            LLMCallPolicy(LLMHandle(None)).provider()

    def test_unconfigured_provider_is_unavailable(self):
        with pytest.raises(AIUnavailable):
            LLMCallPolicy(LLMHandle(MockLLMProvider(configured=False))).provider()

    def test_placeholder_key_is_unavailable(self):
        handle = LLMHandle(OpenAIService(api_key="changeme"))
        with pytest.raises(AIUnavailable):
            LLMCallPolicy(handle).provider()

    def test_configured_provider_returned(self):
        llm = MockLLMProvider()
        assert LLMCallPolicy(LLMHandle(llm)).provider() is llm

    def test_follows_handle_swap(self):
        handle = LLMHandle(MockLLMProvider(configured=False))
        policy = LLMCallPolicy(handle)
        rotated = MockLLMProvider()

        handle.swap(rotated)

        assert policy.provider() is rotated


class TestFromConfig:

    def test_defaults(self):
        policy = LLMCallPolicy.from_config(LLMHandle(None))
        assert policy.timeout_seconds == 15.0
        assert policy.max_attempts == 2

    def test_values_from_scoring_config(self):
        policy = LLMCallPolicy.from_config(LLMHandle(None), ScoringConfig(timeout_seconds=3.5, max_attempts=4))
        assert policy.timeout_seconds == 3.5
        assert policy.max_attempts == 4


class TestComplete:

    @pytest.mark.asyncio
    async def test_returns_text(self):
        llm = MockLLMProvider(default="hello")
        policy = LLMCallPolicy(LLMHandle(llm))

        assert await policy.complete(llm, "system", "user") == "hello"
        assert llm.system_prompts == ["system"]
        assert llm.calls == ["user"]

    @pytest.mark.asyncio
    async def test_timeout_becomes_transport_error(self):
        llm = SlowLLMProvider()
        policy = LLMCallPolicy(LLMHandle(llm), timeout_seconds=0.05, max_attempts=1)

        with pytest.raises(AITransportError, match="timed out"):
            await policy.complete(llm, "system", "user")

    @pytest.mark.asyncio
    async def test_transient_error_is_retried(self):
        llm = FlakyLLMProvider(connection_error())
        policy = LLMCallPolicy(LLMHandle(llm), max_attempts=2)

        assert await policy.complete(llm, "system", "user") == "ok"
        assert len(llm.calls) == 2

    @pytest.mark.asyncio
    async def test_exhausted_retries_become_transport_error(self):
        llm = FlakyLLMProvider(connection_error(), connection_error())
        policy = LLMCallPolicy(LLMHandle(llm), max_attempts=2)

        with pytest.raises(AITransportError):
            await policy.complete(llm, "system", "user")
        assert len(llm.calls) == 2

    @pytest.mark.asyncio
    async def test_other_errors_propagate_unchanged(self):
        llm = FlakyLLMProvider(ValueError("bad prompt"))
        policy = LLMCallPolicy(LLMHandle(llm), max_attempts=3)

        with pytest.raises(ValueError):
            await policy.complete(llm, "system", "user")
        assert len(llm.calls) == 1
