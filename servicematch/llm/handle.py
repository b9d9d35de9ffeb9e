"""
LLM Handle - Indirection around the process-wide LLM provider.

Scorers keep the handle, not the provider, so rotated credentials take
effect on the next call without rebuilding the matching pipeline.
"""
import logging
from typing import Optional

from servicematch.llm.interfaces import LLMProvider

logger = logging.getLogger(__name__)


class LLMHandle:

    def __init__(self, provider: Optional[LLMProvider] = None):
        self._provider = provider

    def get(self) -> Optional[LLMProvider]:
        return self._provider

    def swap(self, provider: Optional[LLMProvider]) -> None:
        """Replace the provider; in-flight calls keep the one they started with."""
        self._provider = provider
        logger.info(
            "LLM provider swapped (configured=%s)",
            bool(provider is not None and provider.is_configured),
        )

    @property
    def is_configured(self) -> bool:
        provider = self._provider
        return provider is not None and provider.is_configured
