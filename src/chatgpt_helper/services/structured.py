"""Structured-output envelope: wrap a result schema, unwrap the reply.

The provider only accepts an object at the top level of a strict JSON
schema, so the caller's schema is placed under a single ``result`` property.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError
from pydantic.json_schema import GenerateJsonSchema, JsonSchemaMode, JsonSchemaValue
from pydantic_core import CoreSchema

from chatgpt_helper.domain.exceptions import ResponseDecodeError

RESULT_KEY = "result"
ENVELOPE_NAME = "structured_response"


class StrictJsonSchema(GenerateJsonSchema):
    """JSON schema generator producing what strict structured output accepts.

    Every object gets ``additionalProperties: false`` and lists all of its
    properties as required.
    """

    def generate(
        self, schema: CoreSchema, mode: JsonSchemaMode = "validation"
    ) -> JsonSchemaValue:
        json_schema = super().generate(schema, mode=mode)
        _close_objects(json_schema)
        return json_schema


def _close_objects(node: Any) -> None:
    if isinstance(node, dict):
        properties = node.get("properties")
        if isinstance(properties, dict):
            node["additionalProperties"] = False
            node["required"] = list(properties)
            for sub_schema in properties.values():
                _close_objects(sub_schema)
        for key, value in node.items():
            if key != "properties":
                _close_objects(value)
    elif isinstance(node, list):
        for item in node:
            _close_objects(item)


def wrap_schema(schema: Mapping[str, Any]) -> dict[str, Any]:
    """Place ``schema`` under ``result``; its ``$defs`` move to the root.

    ``$ref`` pointers like ``#/$defs/Item`` resolve against the document
    root, which is now the envelope.
    """
    result_schema = dict(schema)
    defs = result_schema.pop("$defs", None)
    envelope: dict[str, Any] = {
        "type": "object",
        "properties": {RESULT_KEY: result_schema},
        "required": [RESULT_KEY],
        "additionalProperties": False,
    }
    if defs:
        envelope["$defs"] = defs
    return envelope


def structured_response_format(schema: Mapping[str, Any]) -> dict[str, Any]:
    """``response_format`` value requesting strict schema-constrained output."""
    return {
        "type": "json_schema",
        "json_schema": {
            "name": ENVELOPE_NAME,
            "strict": True,
            "schema": wrap_schema(schema),
        },
    }


def schema_for(result_type: Any) -> dict[str, Any]:
    """Derive a JSON schema from a Python type (pydantic model, list[...], ...)."""
    return TypeAdapter(result_type).json_schema(schema_generator=StrictJsonSchema)


def unwrap_result(content: str, result_type: Any = None) -> Any:
    """Parse the envelope and return its ``result``.

    When ``result_type`` is given the value is validated against it and
    returned as an instance of that type.
    """
    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ResponseDecodeError(f"Structured response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict) or RESULT_KEY not in payload:
        raise ResponseDecodeError(
            f"Structured response has no '{RESULT_KEY}' field."
        )

    result = payload[RESULT_KEY]
    if result_type is None:
        return result
    try:
        return TypeAdapter(result_type).validate_python(result)
    except ValidationError as exc:
        raise ResponseDecodeError(
            f"Structured response does not match the expected type: {exc}"
        ) from exc
