"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal, Mapping, TypedDict

GenerationDefaults = dict[str, Any]
"""Administrator-configured settings snapshot, keyed by setting label."""

Role = Literal["user", "assistant"]


class GenerationOptions(TypedDict, total=False):
    """Per-call override of the tuning knobs (all keys optional).

    Keys not listed here are passed through to the provider untouched.
    """

    temperature: float
    max_completion_tokens: int
    frequency_penalty: float
    function_call: str
    logit_bias: dict[str, int]
    logprobs: bool
    n: int
    parallel_tool_calls: bool
    presence_penalty: float
    response_format: str | dict[str, Any]
    seed: int | None
    stop: str | list[str] | None
    store: bool
    tool_choice: str
    top_logprobs: int | None
    top_p: float


class ChatMessage(TypedDict):
    """One entry of the provider's ``messages`` array."""

    role: str
    content: str


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """A historical message from the host's conversation.

    ``message`` is the host's structured payload (text, quick replies,
    attachments, ...).  Turns carrying a ``sender`` were written by the end
    user; turns without one were produced by the bot.
    """

    message: Mapping[str, Any]
    sender: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConversationTurn:
        """Build a turn from the host's ``{"message": ..., "sender": ...}`` shape."""
        return cls(message=data.get("message") or {}, sender=data.get("sender"))

    @property
    def role(self) -> Role:
        return "user" if self.sender else "assistant"

    @property
    def content(self) -> str:
        text = self.message.get("text")
        if text:
            return str(text)
        return json.dumps(dict(self.message))

    def to_chat_message(self) -> ChatMessage:
        return {"role": self.role, "content": self.content}
