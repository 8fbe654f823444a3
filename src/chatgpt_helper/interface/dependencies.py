"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx
from openai import DefaultAsyncHttpxClient

from chatgpt_helper.domain.ports.llm_helper import LlmHelper
from chatgpt_helper.domain.settings_schema import CHATGPT_HELPER_NAME
from chatgpt_helper.infrastructure.config import get_settings
from chatgpt_helper.infrastructure.openai_helper import (
    ChatGptLlmHelper,
    openai_client_factory,
)
from chatgpt_helper.infrastructure.settings_store import InMemorySettingsStore
from chatgpt_helper.services.helper_registry import HelperRegistry

registry = HelperRegistry()

_http_client: httpx.AsyncClient | None = None
_settings_store: InMemorySettingsStore | None = None
_helper: ChatGptLlmHelper | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _settings_store, _helper  # noqa: PLW0603

    _http_client = DefaultAsyncHttpxClient()
    _settings_store = InMemorySettingsStore.from_settings(get_settings())
    _helper = ChatGptLlmHelper(
        _settings_store, client_factory=openai_client_factory(_http_client)
    )
    # hook:chatgpt_helper:token
    _settings_store.subscribe("token", _helper.update_credential)

    await _helper.on_application_bootstrap()
    registry.register(_helper)


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _settings_store, _helper  # noqa: PLW0603

    if _helper:
        registry.unregister(_helper.name)
        await _helper.close()
        _helper = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _settings_store = None


def get_helper() -> LlmHelper:
    """Return the registered ChatGPT helper."""
    return registry.get(CHATGPT_HELPER_NAME)


def get_settings_store() -> InMemorySettingsStore:
    assert _settings_store is not None, "startup() was not called"
    return _settings_store
