"""
LLM Provider Interface - Abstract base for AI service providers.

This module defines the interface for LLM services (OpenAI, Ollama, Gemini, etc.).
The matching engine only needs "text in, text out, or an error".
"""
from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """
    Abstract Interface for AI Service Providers.
    """

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """
        True when valid credentials are present.

        An unconfigured provider is never called; callers go straight to
        their fallback path.
        """
        pass

    @abstractmethod
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """
        Issue a single completion request and return the response text.

        Implementations must not retry or impose their own timeout; that
        policy belongs to the caller.
        """
        pass
