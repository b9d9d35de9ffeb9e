#!/usr/bin/env python3
"""
Unit tests for AppContext wiring and credential rotation.
"""
import pytest

from servicematch.app_context import AppContext
from servicematch.config_loader import AppConfig, LlmConfig, ScoringConfig
from servicematch.directory import ProviderDirectory
from servicematch.llm.openai_service import OpenAIService
from servicematch.scorer.models import SOURCE_AI, SOURCE_FALLBACK
from tests import make_job, make_provider
from tests.mocks.llm_mocks import MockLLMProvider


@pytest.fixture
def directory():
    return ProviderDirectory([make_provider("p1", rating=4.8, years_experience=12)])


class TestBuild:

    def test_unconfigured_build(self, directory):
        ctx = AppContext.build(AppConfig(), directory=directory)

        assert ctx.llm_handle.is_configured is False
        assert ctx.directory is directory
        assert ctx.scorer.fallback is ctx.deterministic_scorer
        assert ctx.catalog.keywords_for("Plumbing")

    def test_llm_settings_reach_the_service(self, directory):
        config = AppConfig(llm=LlmConfig(api_key="sk-test", model="llama3", max_tokens=256))
        ctx = AppContext.build(config, directory=directory)

        service = ctx.llm_handle.get()
        assert isinstance(service, OpenAIService)
        assert service.is_configured
        assert service.model == "llama3"
        assert service.max_tokens == 256

    def test_scorer_and_advisor_share_call_policy(self, directory):
        config = AppConfig(scoring=ScoringConfig(timeout_seconds=4.0, max_attempts=3))
        ctx = AppContext.build(config, directory=directory)

        assert ctx.llm_calls.timeout_seconds == 4.0
        assert ctx.llm_calls.max_attempts == 3
        assert ctx.scorer.llm is ctx.llm_calls
        assert ctx.advisor.llm is ctx.llm_calls

    @pytest.mark.asyncio
    async def test_advisor_looks_up_directory(self, directory):
        ctx = AppContext.build(AppConfig(), directory=directory)

        prediction = await ctx.advisor.predict_success("p1", make_job())

        assert prediction.provider_id == "p1"
        assert prediction.source == SOURCE_FALLBACK

    def test_empty_directory_without_seed(self):
        ctx = AppContext.build(AppConfig())
        assert len(ctx.directory) == 0

    @pytest.mark.asyncio
    async def test_orchestrator_looks_up_directory(self, directory):
        ctx = AppContext.build(AppConfig(), directory=directory)

        result = await ctx.orchestrator.score_single_provider("p1", make_job())

        assert result.provider_id == "p1"
        assert result.source == SOURCE_FALLBACK


class TestRotateCredentials:

    def test_rotation_swaps_provider(self, directory):
        ctx = AppContext.build(AppConfig(), directory=directory)

        ctx.rotate_credentials("sk-rotated", base_url="http://localhost:11434/v1")

        assert ctx.llm_handle.is_configured is True
        assert ctx.config.llm.api_key is None

    def test_rotation_to_placeholder_disables_ai(self, directory):
        config = AppConfig(llm=LlmConfig(api_key="sk-test"))
        ctx = AppContext.build(config, directory=directory)

        ctx.rotate_credentials("demo-key")

        assert ctx.llm_handle.is_configured is False

    @pytest.mark.asyncio
    async def test_next_call_uses_rotated_provider(self, directory):
        ctx = AppContext.build(AppConfig(), directory=directory)
        first = await ctx.orchestrator.score_single_provider("p1", make_job())
        assert first.source == SOURCE_FALLBACK

        mock = MockLLMProvider()
        ctx.llm_handle.swap(mock)
        second = await ctx.orchestrator.score_single_provider("p1", make_job())

        assert len(mock.calls) == 1
        assert second.source == SOURCE_AI
