"""Generation-option merging and request composition.

Pure functions: administrator defaults + per-call overrides in, the keyword
arguments for ``chat.completions.create`` out.  ``None`` is the
canonical-absent value: the option is left out of the outbound request.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from chatgpt_helper.domain.entities import ChatMessage
from chatgpt_helper.domain.exceptions import ConfigurationDecodeError

# Handled outside of the option set.
_EXCLUDED_KEYS = frozenset({"model", "token"})

_RESPONSE_FORMAT_HINTS = {
    "text": "text",
    "json": "json_object",
    "json_object": "json_object",
}


def merge_options(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Overlay ``overrides`` on ``defaults`` field by field.

    ``seed``, ``stop`` and ``top_logprobs`` are only ever taken from valid
    caller values; a default for them is never sent.
    """
    caller = {k: v for k, v in (overrides or {}).items() if k not in _EXCLUDED_KEYS}

    base = {k: v for k, v in defaults.items() if k not in _EXCLUDED_KEYS}
    if "logit_bias" in base:
        base["logit_bias"] = decode_logit_bias(base["logit_bias"])
    if "max_completion_tokens" in base:
        base["max_completion_tokens"] = _to_int(base["max_completion_tokens"])

    merged = {**base, **caller}

    seed = caller.get("seed")
    merged["seed"] = seed if _is_non_negative_int(seed) else None
    merged["stop"] = caller.get("stop") or None
    top_logprobs = caller.get("top_logprobs")
    merged["top_logprobs"] = (
        top_logprobs
        if caller.get("logprobs") and _is_non_negative_int(top_logprobs)
        else None
    )

    if "response_format" in merged:
        merged["response_format"] = normalize_response_format(merged["response_format"])
    return merged


def decode_logit_bias(value: Any) -> dict[str, int] | None:
    """Decode the ``logit_bias`` setting from its JSON-text form."""
    if value is None or value == "":
        return None
    if isinstance(value, Mapping):
        return dict(value)
    try:
        decoded = json.loads(value)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ConfigurationDecodeError(
            f"Setting logit_bias is not valid JSON: {exc}"
        ) from exc
    if not isinstance(decoded, dict):
        raise ConfigurationDecodeError(
            "Setting logit_bias must be a JSON object mapping token ids to biases."
        )
    return decoded


def normalize_response_format(value: Any) -> dict[str, Any] | None:
    """Turn a ``"text"``/``"json"`` hint into the provider's format object."""
    if value is None or value == "":
        return None
    if isinstance(value, Mapping):
        return dict(value)
    hint = str(value).strip().lower()
    return {"type": _RESPONSE_FORMAT_HINTS.get(hint, hint)}


def compose_request(
    model: str,
    messages: Sequence[ChatMessage],
    options: Mapping[str, Any],
    **forced: Any,
) -> dict[str, Any]:
    """Build the ``chat.completions.create`` kwargs.

    ``forced`` values win over ``options``; streaming is always off.
    """
    request: dict[str, Any] = {
        **options,
        **forced,
        "model": model,
        "messages": list(messages),
        "stream": False,
    }

    # The API rejects tool settings that have nothing to apply to.
    if not request.get("tools"):
        request.pop("tool_choice", None)
        request.pop("parallel_tool_calls", None)
    if not request.get("functions"):
        request.pop("function_call", None)

    return {k: v for k, v in request.items() if v is not None}


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _to_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return int(float(value))
    return int(value)
