"""OpenAI helper — implements the LlmHelper port on chat completions."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import httpx
from openai import AsyncOpenAI, AuthenticationError, DefaultAsyncHttpxClient, OpenAIError

from chatgpt_helper.domain.entities import (
    ConversationTurn,
    GenerationDefaults,
    GenerationOptions,
)
from chatgpt_helper.domain.exceptions import (
    HelperNotInitializedError,
    InvalidCredentialError,
    NoResponseGeneratedError,
    ProviderError,
)
from chatgpt_helper.domain.ports.settings_store import SettingsStore
from chatgpt_helper.domain.settings_schema import CHATGPT_HELPER_NAME
from chatgpt_helper.services.messages import build_messages
from chatgpt_helper.services.options import compose_request, merge_options
from chatgpt_helper.services.structured import (
    schema_for,
    structured_response_format,
    unwrap_result,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], AsyncOpenAI]


def openai_client_factory(http_client: httpx.AsyncClient | None = None) -> ClientFactory:
    """Return a factory building SDK clients for a given API key.

    Clients built by one factory share ``http_client``'s connection pool, so
    rotating the key does not tear down open connections and replaced clients
    need no closing.  Without ``http_client`` the factory creates one pool of
    its own and shares it the same way.
    """
    if http_client is None:
        http_client = DefaultAsyncHttpxClient()

    def factory(api_key: str) -> AsyncOpenAI:
        return AsyncOpenAI(api_key=api_key, max_retries=0, http_client=http_client)

    return factory


class ChatGptLlmHelper:
    """Concrete ``LlmHelper`` backed by the OpenAI chat-completions API.

    The SDK client is built on application bootstrap and rebuilt whenever the
    ``token`` setting changes.  Rebuilding swaps ``self._client`` in one
    assignment; every call reads the reference once, so requests already in
    flight finish on the client they started with.
    """

    name = CHATGPT_HELPER_NAME

    def __init__(
        self,
        settings_store: SettingsStore,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._settings_store = settings_store
        self._client_factory = client_factory or openai_client_factory()
        self._client: AsyncOpenAI | None = None

    def get_path(self) -> Path:
        return Path(__file__).resolve().parent

    # ── Lifecycle ───────────────────────────────────────────────────────

    async def on_application_bootstrap(self) -> None:
        """Build the initial client from the configured token."""
        settings = await self.get_settings()
        token = settings.get("token") or ""
        if not token:
            logger.warning("No OpenAI token configured; requests will be rejected")
        self._client = self._client_factory(token)

    def update_credential(self, token: Any) -> None:
        """Rebuild the client with a rotated API key.

        The replaced client is not closed: calls still running on it finish
        normally, and its connections belong to the factory's shared pool.
        """
        if not isinstance(token, str) or not token.strip():
            raise InvalidCredentialError("The OpenAI token must be a non-empty string.")
        self._client = self._client_factory(token.strip())
        logger.info("OpenAI client rebuilt after token rotation")

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        client, self._client = self._client, None
        if client is not None:
            await client.close()

    # ── Settings ────────────────────────────────────────────────────────

    async def get_settings(self) -> GenerationDefaults:
        return await self._settings_store.get_settings()

    async def build_options(
        self, options: GenerationOptions | Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Merge per-call ``options`` over the configured defaults."""
        return merge_options(await self.get_settings(), options)

    # ── Generators ──────────────────────────────────────────────────────

    async def generate_response(
        self,
        prompt: str,
        model: str,
        system_prompt: str,
        options: GenerationOptions | None = None,
    ) -> str:
        """Generate a free-text response to ``prompt``."""
        model, merged = await self._prepare(model, options)
        request = compose_request(
            model,
            build_messages(system_prompt, prompt),
            merged,
            response_format={"type": "text"},
        )
        return await self._complete("generate_response", request)

    async def generate_structured_response(
        self,
        prompt: str,
        model: str | None,
        system_prompt: str,
        schema: Mapping[str, Any] | None = None,
        options: GenerationOptions | None = None,
        *,
        result_type: Any = None,
    ) -> Any:
        """Generate a value conforming to ``schema``.

        Temperature is pinned to 0 unless the caller asks for a nonzero one.
        If ``result_type`` is given the value is validated against it, and
        ``schema`` may be omitted to derive it from that type.
        """
        if schema is None:
            if result_type is None:
                raise TypeError("Either schema or result_type must be given")
            schema = schema_for(result_type)

        model, merged = await self._prepare(model, options)
        merged["temperature"] = (options or {}).get("temperature") or 0
        request = compose_request(
            model,
            build_messages(system_prompt, prompt),
            merged,
            response_format=structured_response_format(schema),
        )
        content = await self._complete("generate_structured_response", request)
        return unwrap_result(content, result_type)

    async def generate_chat_completion(
        self,
        prompt: str,
        model: str,
        system_prompt: str,
        history: Sequence[ConversationTurn | Mapping[str, Any]] = (),
        options: GenerationOptions | None = None,
    ) -> str:
        """Send ``prompt`` after the conversation ``history``.

        Works for multi-shot or chain-of-thought prompting too: pass the
        examples as history.
        """
        model, merged = await self._prepare(model, options)
        request = compose_request(
            model, build_messages(system_prompt, prompt, history), merged
        )
        return await self._complete("generate_chat_completion", request)

    # ── Internals ───────────────────────────────────────────────────────

    async def _prepare(
        self, model: str | None, options: Mapping[str, Any] | None
    ) -> tuple[str, dict[str, Any]]:
        """Resolve the model id and the merged options from one settings read."""
        defaults = await self.get_settings()
        return model or defaults.get("model") or "", merge_options(defaults, options)

    async def _complete(self, method: str, request: dict[str, Any]) -> str:
        """Send one completion request and return the first choice's text."""
        client = self._client
        if client is None:
            raise HelperNotInitializedError(
                f"{method}() called before the helper was bootstrapped."
            )

        logger.debug("%s → model=%s, %d message(s)", method, request["model"], len(request["messages"]))
        try:
            completion = await client.chat.completions.create(**request)
        except AuthenticationError as exc:
            raise ProviderError(
                "Invalid OpenAI API key. Update the chatgpt_helper token setting."
            ) from exc
        except OpenAIError as exc:
            logger.error("OpenAI %s failed: %s", method, exc)
            raise ProviderError(f"LLM call failed: {exc}") from exc

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise NoResponseGeneratedError(method)
        return content
