"""
LLM Call Policy - Timeout and retry applied around single-request LLM calls.

LLM providers issue exactly one request per call. The policy is owned by
the application wiring and handed to every AI caller, so the scoring
adapter and the project advisor share one timeout/retry configuration and
never implement their own.
"""
import asyncio
import logging
from typing import Optional

import openai

from servicematch.config_loader import ScoringConfig
from servicematch.exceptions import AITransportError, AIUnavailable
from servicematch.llm.handle import LLMHandle
from servicematch.llm.interfaces import LLMProvider
from servicematch.llm.retry import llm_retrying

logger = logging.getLogger(__name__)


class LLMCallPolicy:
    """
    Resolves the current LLM provider and runs completions under policy.

    Args:
        llm_handle: Handle holding the current LLM provider
        timeout_seconds: Per-attempt timeout
        max_attempts: Attempts per call, transient errors only
    """

    def __init__(self, llm_handle: LLMHandle, timeout_seconds: float = 15.0, max_attempts: int = 2):
        self.llm_handle = llm_handle
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts

    @classmethod
    def from_config(cls, llm_handle: LLMHandle, config: Optional[ScoringConfig] = None) -> "LLMCallPolicy":
        config = config or ScoringConfig()
        return cls(llm_handle, timeout_seconds=config.timeout_seconds, max_attempts=config.max_attempts)

    def provider(self) -> LLMProvider:
        """
        The provider to use for the next call.

        Raises:
            AIUnavailable: No provider, or one without usable credentials
        """
        llm = self.llm_handle.get()
        if llm is None or not llm.is_configured:
            raise AIUnavailable("No LLM credentials configured")
        return llm

    async def complete(self, llm: LLMProvider, system_prompt: str, user_prompt: str) -> str:
        """
        One completion under the timeout/retry policy.

        Raises:
            AITransportError: Timed out or failed on every attempt
        """
        timeout = self.timeout_seconds
        try:
            async for attempt in llm_retrying(self.max_attempts):
                with attempt:
                    text = await asyncio.wait_for(
                        llm.complete(system_prompt, user_prompt),
                        timeout=timeout,
                    )
        except asyncio.TimeoutError as e:
            raise AITransportError(f"LLM call timed out after {timeout}s") from e
        except openai.OpenAIError as e:
            raise AITransportError(f"LLM call failed: {e}") from e
        return text
