"""Tests for the structured-output envelope."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from chatgpt_helper.domain.exceptions import ResponseDecodeError
from chatgpt_helper.services.structured import (
    schema_for,
    structured_response_format,
    unwrap_result,
    wrap_schema,
)


class Intent(BaseModel):
    name: str
    confidence: float


_SCHEMA = {"type": "array", "items": {"type": "string"}}


def test_wrap_schema_has_single_required_result() -> None:
    wrapped = wrap_schema(_SCHEMA)

    assert wrapped["type"] == "object"
    assert wrapped["required"] == ["result"]
    assert wrapped["additionalProperties"] is False
    assert wrapped["properties"] == {"result": _SCHEMA}


def test_structured_response_format_is_strict_json_schema() -> None:
    fmt = structured_response_format(_SCHEMA)

    assert fmt["type"] == "json_schema"
    assert fmt["json_schema"]["strict"] is True
    assert fmt["json_schema"]["schema"]["properties"]["result"] == _SCHEMA


def test_unwrap_result_returns_result_field() -> None:
    assert unwrap_result('{"result": ["a", "b"]}') == ["a", "b"]


def test_unwrap_result_invalid_json_raises() -> None:
    with pytest.raises(ResponseDecodeError, match="not valid JSON"):
        unwrap_result("{result: nope")


def test_unwrap_result_missing_result_raises() -> None:
    with pytest.raises(ResponseDecodeError, match="result"):
        unwrap_result('{"value": 1}')


def test_unwrap_result_validates_against_type() -> None:
    intent = unwrap_result('{"result": {"name": "greet", "confidence": 0.9}}', Intent)

    assert intent == Intent(name="greet", confidence=0.9)


def test_unwrap_result_type_mismatch_raises() -> None:
    with pytest.raises(ResponseDecodeError, match="expected type"):
        unwrap_result('{"result": {"name": "greet"}}', Intent)


def test_schema_for_model() -> None:
    schema = schema_for(Intent)

    assert schema["type"] == "object"
    assert set(schema["properties"]) == {"name", "confidence"}


class Item(BaseModel):
    sku: str
    quantity: int = 1


def _resolve(root: dict, ref: str) -> dict:
    node = root
    for part in ref.lstrip("#/").split("/"):
        node = node[part]
    return node


def test_schema_for_closes_every_object() -> None:
    schema = schema_for(Item)

    assert schema["additionalProperties"] is False
    assert schema["required"] == ["sku", "quantity"]


def test_container_schema_refs_resolve_from_envelope_root() -> None:
    envelope = structured_response_format(schema_for(list[Item]))["json_schema"]["schema"]

    result_schema = envelope["properties"]["result"]
    assert "$defs" not in result_schema
    assert result_schema["type"] == "array"
    item_schema = _resolve(envelope, result_schema["items"]["$ref"])
    assert set(item_schema["properties"]) == {"sku", "quantity"}
    assert item_schema["additionalProperties"] is False
    assert item_schema["required"] == ["sku", "quantity"]


def test_wrap_schema_without_defs_adds_none() -> None:
    assert "$defs" not in wrap_schema(_SCHEMA)
