"""Declared settings of the helper — consumed by the host's settings subsystem.

The host persists and edits these values; the helper only declares them
(label, type, default) and reads them back through a ``SettingsStore``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

CHATGPT_HELPER_NAME = "chatgpt-helper"
CHATGPT_HELPER_NAMESPACE = CHATGPT_HELPER_NAME.replace("-", "_")

OPTIONS_SUBGROUP = "options"


class SettingType(str, Enum):
    """Input widget the host renders for a setting."""

    SECRET = "secret"
    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    CHECKBOX = "checkbox"


@dataclass(frozen=True, slots=True)
class HelperSetting:
    """A single declared setting of the ``chatgpt_helper`` group."""

    label: str
    type: SettingType
    value: Any
    group: str = CHATGPT_HELPER_NAMESPACE
    subgroup: str | None = None

    @property
    def event_name(self) -> str:
        """Event the host emits when an administrator changes this setting."""
        return f"hook:{self.group}:{self.label}"


def _option(label: str, type_: SettingType, value: Any) -> HelperSetting:
    return HelperSetting(label=label, type=type_, value=value, subgroup=OPTIONS_SUBGROUP)


SETTINGS: tuple[HelperSetting, ...] = (
    HelperSetting(label="token", type=SettingType.SECRET, value=""),
    HelperSetting(label="model", type=SettingType.TEXT, value="gpt-4o-mini"),
    # between 0 and 2
    _option("temperature", SettingType.NUMBER, 0.8),
    _option("max_completion_tokens", SettingType.NUMBER, 1000),
    # between -2.0 and 2.0
    _option("frequency_penalty", SettingType.NUMBER, 0),
    # "none" or "auto"
    _option("function_call", SettingType.TEXT, "none"),
    _option("logit_bias", SettingType.TEXTAREA, "{}"),
    _option("logprobs", SettingType.CHECKBOX, False),
    _option("n", SettingType.NUMBER, 1),
    _option("parallel_tool_calls", SettingType.CHECKBOX, False),
    _option("presence_penalty", SettingType.NUMBER, 0),
    # "text" or "json"
    _option("response_format", SettingType.TEXT, "text"),
    _option("seed", SettingType.NUMBER, None),
    _option("stop", SettingType.TEXT, None),
    _option("store", SettingType.CHECKBOX, False),
    # "none", "auto" or "required"
    _option("tool_choice", SettingType.TEXT, "auto"),
    # None or 0..20
    _option("top_logprobs", SettingType.NUMBER, None),
    _option("top_p", SettingType.NUMBER, 0.9),
)

SETTINGS_BY_LABEL: dict[str, HelperSetting] = {s.label: s for s in SETTINGS}


def default_values() -> dict[str, Any]:
    """Return ``{label: default}`` for every declared setting."""
    return {s.label: s.value for s in SETTINGS}
