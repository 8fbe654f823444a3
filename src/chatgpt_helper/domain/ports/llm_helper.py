"""Port: LLM helper — the host's generic "generate a response" contract."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Protocol, Sequence

from chatgpt_helper.domain.entities import ConversationTurn, GenerationOptions


class LlmHelper(Protocol):
    """Abstract contract the host expects from every LLM helper plugin."""

    name: str

    def get_path(self) -> Path:
        """Directory the host scans for the helper's assets."""
        ...

    async def generate_response(
        self,
        prompt: str,
        model: str,
        system_prompt: str,
        options: GenerationOptions | None = None,
    ) -> str:
        """Return a free-text completion for a single prompt."""
        ...

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
        """Return a value constrained by ``schema``."""
        ...

    async def generate_chat_completion(
        self,
        prompt: str,
        model: str,
        system_prompt: str,
        history: Sequence[ConversationTurn] = (),
        options: GenerationOptions | None = None,
    ) -> str:
        """Return a completion that continues the conversation ``history``."""
        ...
