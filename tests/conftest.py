from __future__ import annotations

import copy
from typing import Dict, List

import pytest

from aish.config import SessionConfig
from aish.prompt import SENTINEL


class FakeClient:
    """Stands in for CompletionClient and records every request."""

    def __init__(self, responses: List[str], chunk_size: int = 3) -> None:
        self.responses = list(responses)
        self.chunk_size = chunk_size
        self.requests: List[List[Dict[str, str]]] = []

    def _next(self, messages):
        self.requests.append(copy.deepcopy(messages))
        return self.responses.pop(0)

    def complete(self, messages):
        return self._next(messages)

    def stream(self, messages):
        text = self._next(messages)
        for start in range(0, len(text), self.chunk_size):
            yield text[start : start + self.chunk_size]


@pytest.fixture
def config() -> SessionConfig:
    return SessionConfig(
        api_key="test-key",
        base_url="http://llm.test/v1",
        model="test-model",
        os_name="Ubuntu 22.04 LTS",
        username="alice",
        hostname="web01",
    )


@pytest.fixture
def sentinel() -> str:
    return SENTINEL
