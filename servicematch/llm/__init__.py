"""LLM Module - LLM services and interfaces."""
from servicematch.llm.interfaces import LLMProvider
from servicematch.llm.openai_service import OpenAIService
from servicematch.llm.handle import LLMHandle
from servicematch.llm.policy import LLMCallPolicy

__all__ = ['LLMProvider', 'OpenAIService', 'LLMHandle', 'LLMCallPolicy']
