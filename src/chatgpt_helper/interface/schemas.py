"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chatgpt_helper.domain.entities import ConversationTurn


class GenerateRequest(BaseModel):
    """Request body for ``POST /generate``."""

    prompt: str
    model: str = ""
    system_prompt: str = ""
    options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "prompt must not be empty."
            raise ValueError(msg)
        return v


class StructuredGenerateRequest(GenerateRequest):
    """Request body for ``POST /generate/structured``."""

    model_config = ConfigDict(populate_by_name=True)

    response_schema: dict[str, Any] = Field(alias="schema")


class HistoryTurn(BaseModel):
    """One message of the conversation history, as the host stores it."""

    message: dict[str, Any]
    sender: str | None = None

    def to_turn(self) -> ConversationTurn:
        return ConversationTurn(message=self.message, sender=self.sender)


class ChatCompletionRequest(GenerateRequest):
    """Request body for ``POST /chat``."""

    history: list[HistoryTurn] = Field(default_factory=list)


class TextResponse(BaseModel):
    text: str


class StructuredResponse(BaseModel):
    result: Any


class SettingDeclaration(BaseModel):
    """A declared setting as shown to the administrator UI."""

    label: str
    group: str
    subgroup: str | None
    type: str
    value: Any


class SettingUpdate(BaseModel):
    """Request body for ``PUT /settings/{label}``."""

    value: Any


class SettingUpdated(BaseModel):
    status: str = "ok"
    label: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
