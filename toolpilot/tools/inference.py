"""
Best-effort parameter schemas for tools that publish none.

A small table maps known tool-name patterns to schema templates. A name
matches a pattern when either string contains the other; anything else gets
the empty-object schema. Inferred schemas are hints for the model, never a
correctness guarantee.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaSource(str, Enum):
    """Where an inferred schema came from."""

    KNOWN_PATTERN = "known_pattern"
    UNKNOWN = "unknown"


class InferredSchema(BaseModel):
    """Result of a schema lookup."""

    source: SchemaSource
    pattern: str | None = Field(default=None, description="Matched name pattern")
    schema_: dict[str, Any] = Field(alias="schema")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def copy_schema(self) -> dict[str, Any]:
        """Deep copy of the schema template."""
        return copy.deepcopy(self.schema_)


def _object(properties: dict[str, Any], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


_STRING = {"type": "string"}

KNOWN_SCHEMAS: dict[str, dict[str, Any]] = {
    "item-service-get-item-by-path": _object(
        {"path": _STRING},
        ["path"],
    ),
    "item-service-edit-item": _object(
        {
            "data": _object(
                {
                    "ItemID": _STRING,
                    "Fields": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {"Name": _STRING, "Value": _STRING},
                        },
                    },
                },
                ["ItemID", "Fields"],
            ),
        },
        ["data"],
    ),
    "item-service-update-item-field": _object(
        {"itemId": _STRING, "fieldName": _STRING, "fieldValue": _STRING},
        ["itemId", "fieldName", "fieldValue"],
    ),
}

EMPTY_SCHEMA: dict[str, Any] = _object({}, [])


def lookup_schema(tool_name: str) -> InferredSchema:
    """
    Look up a schema template for a tool name.

    Args:
        tool_name: Tool name as advertised by the transport

    Returns:
        InferredSchema tagged with its source
    """
    if tool_name:
        for pattern, schema in KNOWN_SCHEMAS.items():
            if pattern in tool_name or tool_name in pattern:
                return InferredSchema(
                    source=SchemaSource.KNOWN_PATTERN,
                    pattern=pattern,
                    schema=schema,
                )
    return InferredSchema(source=SchemaSource.UNKNOWN, schema=EMPTY_SCHEMA)


def infer_schema(tool_name: str) -> dict[str, Any]:
    """Return a fresh copy of the inferred schema for ``tool_name``."""
    return lookup_schema(tool_name).copy_schema()
