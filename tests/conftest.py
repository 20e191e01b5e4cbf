"""tests/conftest.py

Pytest configuration and shared fixtures for the EcoChat test suite.
"""

from __future__ import annotations

import json
import random
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from config.settings import Settings
from ecochat.agent import ChatAgent, build_agent
from ecochat.core.memory import ChatTurn


UPSTREAM_REPLY = "**Solar** is great in Kenya! ☀️\n\nTips:\n- Start small\n- Use payment plans\nWhat will you try first?"


def make_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = {
        "app_env": "test",
        "api_choice": "MOCK",
        "groq_api_key": None,
        "openai_api_key": None,
        "hf_api_key": None,
        "session_window": 10,
    }
    values.update(overrides)
    return Settings(**values)


def completion_transport(
    status_code: int = 200,
    content: str = UPSTREAM_REPLY,
    calls: Optional[List[httpx.Request]] = None,
) -> httpx.MockTransport:
    """Upstream stand-in answering every request with a fixed completion."""

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={"error": {"message": "upstream down"}})
        return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": content}}]})

    return httpx.MockTransport(handler)


def request_body(request: httpx.Request) -> Dict[str, Any]:
    return json.loads(request.content)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def sample_turns() -> List[ChatTurn]:
    return [
        ChatTurn(role="user", content="Tell me about solar energy"),
        ChatTurn(role="assistant", content="Solar energy is fantastic in Kenya!"),
        ChatTurn(role="user", content="Is it expensive?"),
        ChatTurn(role="assistant", content="Prices have dropped a lot."),
    ]


@pytest.fixture
def agent(settings: Settings, rng: random.Random) -> ChatAgent:
    return build_agent(settings, rng=rng)


@pytest.fixture
def client_factory() -> Callable[..., TestClient]:
    def _make(**kwargs: Any) -> TestClient:
        transport = kwargs.pop("transport", None)
        settings = make_settings(**kwargs)
        agent = build_agent(settings, rng=random.Random(7), transport=transport)
        return TestClient(create_app(agent=agent))

    return _make


@pytest.fixture
def client(client_factory: Callable[..., TestClient]) -> TestClient:
    return client_factory()
