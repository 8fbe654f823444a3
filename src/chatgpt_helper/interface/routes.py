"""API routes — thin controllers that delegate to the helper."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from chatgpt_helper.domain.ports.llm_helper import LlmHelper
from chatgpt_helper.domain.settings_schema import SETTINGS, SettingType
from chatgpt_helper.infrastructure.settings_store import InMemorySettingsStore
from chatgpt_helper.interface.dependencies import get_helper, get_settings_store
from chatgpt_helper.interface.schemas import (
    ChatCompletionRequest,
    GenerateRequest,
    SettingDeclaration,
    SettingUpdate,
    SettingUpdated,
    StructuredGenerateRequest,
    StructuredResponse,
    TextResponse,
)

router = APIRouter()

_LLM_ERRORS = {
    502: {"description": "LLM provider error or empty completion"},
    503: {"description": "Helper not bootstrapped"},
}


@router.post("/generate", response_model=TextResponse, responses=_LLM_ERRORS)
async def generate(
    body: GenerateRequest,
    helper: LlmHelper = Depends(get_helper),
) -> TextResponse:
    """Generate a free-text response."""
    text = await helper.generate_response(
        body.prompt, body.model, body.system_prompt, body.options
    )
    return TextResponse(text=text)


@router.post(
    "/generate/structured", response_model=StructuredResponse, responses=_LLM_ERRORS
)
async def generate_structured(
    body: StructuredGenerateRequest,
    helper: LlmHelper = Depends(get_helper),
) -> StructuredResponse:
    """Generate a value constrained by the supplied JSON schema."""
    result = await helper.generate_structured_response(
        body.prompt,
        body.model,
        body.system_prompt,
        body.response_schema,
        body.options,
    )
    return StructuredResponse(result=result)


@router.post("/chat", response_model=TextResponse, responses=_LLM_ERRORS)
async def chat(
    body: ChatCompletionRequest,
    helper: LlmHelper = Depends(get_helper),
) -> TextResponse:
    """Continue a conversation from its message history."""
    text = await helper.generate_chat_completion(
        body.prompt,
        body.model,
        body.system_prompt,
        [turn.to_turn() for turn in body.history],
        body.options,
    )
    return TextResponse(text=text)


@router.get("/settings/schema", response_model=list[SettingDeclaration])
async def settings_schema() -> list[SettingDeclaration]:
    """List the declared settings of the helper (secret defaults are hidden)."""
    return [
        SettingDeclaration(
            label=s.label,
            group=s.group,
            subgroup=s.subgroup,
            type=s.type.value,
            value=None if s.type is SettingType.SECRET else s.value,
        )
        for s in SETTINGS
    ]


@router.put(
    "/settings/{label}",
    response_model=SettingUpdated,
    responses={
        404: {"description": "Unknown setting"},
        422: {"description": "Invalid value"},
    },
)
async def update_setting(
    label: str,
    body: SettingUpdate,
    store: InMemorySettingsStore = Depends(get_settings_store),
) -> SettingUpdated:
    """Change one setting and fire its ``hook:chatgpt_helper:<label>`` event."""
    store.set(label, body.value)
    return SettingUpdated(label=label)
