"""
OpenAI Service - LLM implementation using the OpenAI API.

Any OpenAI-compatible endpoint (OpenAI, Ollama, OpenRouter) works through
base_url.
"""
from typing import Any, Dict, Optional
import logging

from openai import AsyncOpenAI

from servicematch.config_loader import PLACEHOLDER_API_KEYS
from servicematch.llm.interfaces import LLMProvider

logger = logging.getLogger(__name__)


class OpenAIService(LLMProvider):
    """
    OpenAI LLM Service.

    Without a usable api_key no client is created at all, so an
    unconfigured deployment can never reach the network.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
    ):
        self._api_key = api_key
        self.model_config = model_config or {}
        self.model = self.model_config.get('model', 'gpt-4o-mini')
        self.temperature = self.model_config.get('temperature', 0.2)
        self.max_tokens = self.model_config.get('max_tokens', 800)

        self.client: Optional[AsyncOpenAI] = None
        if self.is_configured:
            client_kwargs = {'api_key': api_key}
            if base_url:
                client_kwargs['base_url'] = base_url
            self.client = AsyncOpenAI(**client_kwargs)
        else:
            logger.info("No LLM API key configured - AI scoring will use deterministic fallback")

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key) and self._api_key not in PLACEHOLDER_API_KEYS

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Issue one chat completion and return the message text."""
        if self.client is None:
            raise RuntimeError("OpenAIService.complete called without configured credentials")

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        content = response.choices[0].message.content
        return (content or "").strip()
