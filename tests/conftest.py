"""Shared fixtures for the classification service tests."""

import logging
from typing import List, Union

import pytest

from classify_api.interfaces.llm_provider import LLMProvider


class ScriptedProvider(LLMProvider):
    """In-memory provider replaying a fixed list of replies or errors."""

    provider_name = "scripted"
    model_name = "scripted-model"

    def __init__(self, replies: List[Union[str, Exception]]) -> None:
        self._replies = list(replies)
        self.prompts: List[str] = []

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        index = min(len(self.prompts), len(self._replies)) - 1
        reply = self._replies[index]
        if isinstance(reply, Exception):
            raise reply
        return reply


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers requested delays."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def quiet_logger() -> logging.Logger:
    logger = logging.getLogger("tests.resolver")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger


@pytest.fixture
def scripted_provider():
    """Factory for ScriptedProvider instances."""
    return ScriptedProvider
