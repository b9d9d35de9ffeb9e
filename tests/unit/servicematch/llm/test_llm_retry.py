"""
Unit tests for LLM retry helpers.
"""
import asyncio

import httpx
import openai
import pytest

from servicematch.llm.retry import (
    _parse_reset_duration,
    _wait_from_rate_limit_headers,
    llm_retrying,
)


def _rate_limit_error(headers):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    response = httpx.Response(429, headers=headers, request=request)
    return openai.RateLimitError("rate limited", response=response, body=None)


class TestParseResetDuration:

    @pytest.mark.parametrize("value,expected", [
        ("1s", 1.0),
        ("500ms", 0.5),
        ("1m30s", 90.0),
        ("2h", 7200.0),
        ("", 0.0),
        ("soon", 0.0),
    ])
    def test_values(self, value, expected):
        assert _parse_reset_duration(value) == pytest.approx(expected)


class TestRateLimitHeaders:

    def test_longest_declared_wait_wins(self):
        exc = _rate_limit_error({
            "retry-after": "2",
            "x-ratelimit-reset-requests": "500ms",
            "x-ratelimit-reset-tokens": "6s",
        })
        assert _wait_from_rate_limit_headers(exc) == pytest.approx(6.0)

    def test_non_numeric_retry_after_is_ignored(self):
        exc = _rate_limit_error({"retry-after": "Wed, 21 Oct 2015 07:28:00 GMT"})
        assert _wait_from_rate_limit_headers(exc) == 0.0

    def test_no_headers(self):
        assert _wait_from_rate_limit_headers(_rate_limit_error({})) == 0.0


class TestLlmRetrying:

    @pytest.mark.asyncio
    async def test_timeout_is_retried_until_success(self):
        calls = []

        async def flaky():
            calls.append(1)
            if len(calls) == 1:
                raise asyncio.TimeoutError()
            return "ok"

        result = None
        async for attempt in llm_retrying(max_attempts=2):
            with attempt:
                result = await flaky()

        assert result == "ok"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_non_transient_error_is_not_retried(self):
        calls = []

        with pytest.raises(ValueError):
            async for attempt in llm_retrying(max_attempts=3):
                with attempt:
                    calls.append(1)
                    raise ValueError("bad prompt")

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_last_error_is_reraised_after_max_attempts(self):
        calls = []

        with pytest.raises(asyncio.TimeoutError):
            async for attempt in llm_retrying(max_attempts=1):
                with attempt:
                    calls.append(1)
                    raise asyncio.TimeoutError()

        assert len(calls) == 1
