"""
Retry helpers for LLM calls.

Only transient OpenAI errors and per-attempt timeouts are retried. Rate limits honour the server's
declared reset timers; everything else uses capped exponential backoff.
"""
import asyncio
import logging
import re

import openai
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (
    asyncio.TimeoutError,  # per-attempt timeout raised by asyncio.wait_for
    openai.RateLimitError,
    openai.APITimeoutError,
    openai.APIConnectionError,
    openai.InternalServerError,
)

# Cap on any single backoff, so a scoring request stays interactive
MAX_WAIT_SECONDS = 10.0


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(
        "Transient LLM error (attempt %s). Waiting %.1fs before retry. Details: %s",
        retry_state.attempt_number, wait, exc,
    )


def _parse_reset_duration(value: str) -> float:
    """Parse an OpenAI reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Longest wait declared by retry-after / x-ratelimit-reset-* headers, or 0.0."""
    headers = getattr(getattr(exc, "response", None), "headers", None)
    if not headers:
        return 0.0

    candidates = []
    retry_after = headers.get("retry-after", "")
    if retry_after:
        try:
            candidates.append(float(retry_after))
        except ValueError:
            logger.debug("Ignoring non-numeric retry-after header %r", retry_after)

    for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
        parsed = _parse_reset_duration(headers.get(header, ""))
        if parsed > 0:
            candidates.append(parsed)

    return max(candidates) if candidates else 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            return min(wait, MAX_WAIT_SECONDS)

    exp = wait_exponential(multiplier=0.5, min=0.5, max=MAX_WAIT_SECONDS)
    return exp(retry_state)


def llm_retrying(max_attempts: int) -> AsyncRetrying:
    """Return a tenacity AsyncRetrying controller for one LLM call."""
    return AsyncRetrying(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        wait=_wait_respecting_retry_after,
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )
