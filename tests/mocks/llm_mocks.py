#!/usr/bin/env python3
"""
Test Mock Implementations - LLM providers for scoring tests.

These never touch the network. Responses are scripted per provider id,
which the mock reads back out of the scoring prompt.
"""
import asyncio
import json
import re
from typing import Callable, Dict, List, Optional, Union

from servicematch.llm.interfaces import LLMProvider

Response = Union[str, BaseException]


def ai_response(
    overall: float = 85,
    skill: float = 90,
    experience: float = 80,
    reliability: float = 85,
    value: float = 70,
    location: float = 75,
    urgency: Optional[float] = 80,
    success: Optional[float] = 82,
    recommendation: str = "HIGHLY_RECOMMENDED",
    wrap: bool = True,
) -> str:
    """Build an LLM-style scoring reply, optionally wrapped in prose."""
    data = {
        "overallScore": overall,
        "skillMatch": skill,
        "experienceScore": experience,
        "reliabilityScore": reliability,
        "valueScore": value,
        "locationAdvantage": location,
        "strengths": ["Relevant trade experience"],
        "concerns": [],
        "recommendation": recommendation,
        "matchReason": "Strong fit for the job",
    }
    if urgency is not None:
        data["urgencyFit"] = urgency
    if success is not None:
        data["successProbability"] = success
    body = json.dumps(data)
    return f"Here is my assessment:\n```json\n{body}\n```" if wrap else body


class MockLLMProvider(LLMProvider):
    """
    Scripted LLM provider.

    Args:
        responses: provider business name/id -> reply text or exception to raise
        default: reply for providers not in responses
        configured: value reported by is_configured
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Response]] = None,
        default: Response = None,
        configured: bool = True,
    ):
        self.responses = responses or {}
        self.default = default if default is not None else ai_response()
        self.configured = configured
        self.calls: List[str] = []
        self.system_prompts: List[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def _key(self, user_prompt: str) -> Optional[str]:
        for key in self.responses:
            if re.search(rf'"{re.escape(key)}"', user_prompt):
                return key
        return None

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append(user_prompt)
        self.system_prompts.append(system_prompt)
        key = self._key(user_prompt)
        reply = self.responses[key] if key is not None else self.default
        if isinstance(reply, BaseException):
            raise reply
        return reply


class ExplodingLLMProvider(LLMProvider):
    """Provider that fails the test if complete() is ever reached."""

    def __init__(self, configured: bool = False, on_call: Optional[Callable[[], None]] = None):
        self.configured = configured
        self.on_call = on_call

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        if self.on_call:
            self.on_call()
        raise AssertionError("LLM complete() must not be called")


class SlowLLMProvider(MockLLMProvider):
    """Never answers within a short timeout."""

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append(user_prompt)
        await asyncio.sleep(10)
        return self.default


class BlockingLLMProvider(MockLLMProvider):
    """Blocks until cancelled; records that the call started."""

    def __init__(self):
        super().__init__()
        self.started = asyncio.Event()
        self.cancelled = False

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return self.default
