"""Message-array construction for chat-completion requests."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from chatgpt_helper.domain.entities import ChatMessage, ConversationTurn


def as_turn(item: ConversationTurn | Mapping[str, Any]) -> ConversationTurn:
    if isinstance(item, ConversationTurn):
        return item
    return ConversationTurn.from_dict(item)


def format_history(
    history: Iterable[ConversationTurn | Mapping[str, Any]],
) -> list[ChatMessage]:
    """Normalise host messages to ``{role, content}`` pairs, keeping order."""
    return [as_turn(item).to_chat_message() for item in history]


def build_messages(
    system_prompt: str,
    prompt: str,
    history: Iterable[ConversationTurn | Mapping[str, Any]] = (),
) -> list[ChatMessage]:
    """System instruction, then the history, then the user's prompt."""
    return [
        {"role": "system", "content": system_prompt},
        *format_history(history),
        {"role": "user", "content": prompt},
    ]
