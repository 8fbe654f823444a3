"""Tests for conversation-turn normalisation and message building."""

from __future__ import annotations

import json

from chatgpt_helper.domain.entities import ConversationTurn
from chatgpt_helper.services.messages import build_messages, format_history


class TestConversationTurn:
    def test_sender_maps_to_user(self) -> None:
        turn = ConversationTurn(message={"text": "hello"}, sender="subscriber-1")

        assert turn.to_chat_message() == {"role": "user", "content": "hello"}

    def test_no_sender_maps_to_assistant(self) -> None:
        turn = ConversationTurn(message={"text": "hi, how can I help?"})

        assert turn.role == "assistant"

    def test_payload_without_text_is_serialized(self) -> None:
        payload = {"quickReplies": [{"title": "Yes", "payload": "YES"}]}
        turn = ConversationTurn(message=payload)

        assert json.loads(turn.content) == payload

    def test_empty_text_falls_back_to_serialization(self) -> None:
        turn = ConversationTurn(message={"text": "", "attachment": {"type": "image"}})

        assert json.loads(turn.content) == {"text": "", "attachment": {"type": "image"}}

    def test_from_dict(self) -> None:
        turn = ConversationTurn.from_dict({"message": {"text": "yo"}, "sender": "u1"})

        assert turn == ConversationTurn(message={"text": "yo"}, sender="u1")


class TestBuildMessages:
    def test_plain_prompt_has_system_and_user(self) -> None:
        assert build_messages("be brief", "what time is it?") == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "what time is it?"},
        ]

    def test_history_kept_in_order_between_system_and_prompt(self) -> None:
        history = [
            ConversationTurn(message={"text": "one"}, sender="u"),
            {"message": {"text": "two"}},
            ConversationTurn(message={"text": "three"}, sender="u"),
        ]

        messages = build_messages("sys", "four", history)

        assert len(messages) == len(history) + 2
        assert [m["content"] for m in messages] == ["sys", "one", "two", "three", "four"]
        assert [m["role"] for m in messages[1:-1]] == ["user", "assistant", "user"]

    def test_format_history_empty(self) -> None:
        assert format_history([]) == []
