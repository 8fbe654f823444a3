"""Shared fixtures: settings stores and OpenAI client doubles."""

from __future__ import annotations

import asyncio
import json
from types import SimpleNamespace
from typing import Any

import httpx
import pytest
from openai import AsyncOpenAI

from chatgpt_helper.infrastructure.settings_store import InMemorySettingsStore


def completion_json(content: str | None) -> dict[str, Any]:
    """A minimal ``chat.completion`` body as returned by the API."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1_700_000_000,
        "model": "gpt-4o-mini",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "logprobs": None,
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


class MockOpenAIApi:
    """Serves chat completions through ``httpx.MockTransport``.

    Every outbound request is recorded so tests can inspect the exact JSON
    body and headers produced by the SDK.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.content: str | None = "Hello there!"
        self.status_code = 200
        self.http_client = httpx.AsyncClient(transport=httpx.MockTransport(self._handle))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(
                self.status_code,
                json={"error": {"message": "boom", "type": "invalid_request_error"}},
            )
        return httpx.Response(200, json=completion_json(self.content))

    def factory(self, api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key, max_retries=0, http_client=self.http_client)

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


class RecordingClient:
    """Stand-in for ``AsyncOpenAI`` exposing ``chat.completions.create``.

    When ``gate`` is set, ``create`` blocks on it after signalling ``started``.
    """

    def __init__(self, api_key: str, gate: asyncio.Event | None = None) -> None:
        self.api_key = api_key
        self.gate = gate
        self.started = asyncio.Event()
        self.requests: list[dict[str, Any]] = []
        self.closed = False
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    async def _create(self, **kwargs: Any) -> SimpleNamespace:
        self.requests.append(kwargs)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        message = SimpleNamespace(content=f"reply via {self.api_key}")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    async def close(self) -> None:
        self.closed = True


class RecordingFactory:
    """Client factory that remembers every client it built."""

    def __init__(self, gate: asyncio.Event | None = None) -> None:
        self.gate = gate
        self.clients: list[RecordingClient] = []

    def __call__(self, api_key: str) -> RecordingClient:
        client = RecordingClient(api_key, gate=self.gate)
        self.clients.append(client)
        return client


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore({"token": "sk-test"})


@pytest.fixture
def openai_api() -> MockOpenAIApi:
    return MockOpenAIApi()


@pytest.fixture
def recording_factory() -> RecordingFactory:
    return RecordingFactory()
