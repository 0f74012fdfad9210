"""
Tool discovery models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolDescriptor(BaseModel):
    """A tool advertised by the execution transport."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(description="Unique tool name")
    description: str = Field(default="", description="Tool description")
    input_schema: dict[str, Any] | None = Field(
        default=None,
        alias="schema",
        description="JSON-schema-like parameter description, if known",
    )

    @property
    def parameter_names(self) -> list[str]:
        """
        Property names declared by the schema, in declaration order.

        Schemas inferred from the tool name nest their properties under
        ``parameters``; those are used when the top level declares none.
        """
        if not isinstance(self.input_schema, dict):
            return []
        properties = self.input_schema.get("properties")
        if not isinstance(properties, dict):
            nested = self.input_schema.get("parameters")
            properties = nested.get("properties") if isinstance(nested, dict) else None
        if not isinstance(properties, dict):
            return []
        return list(properties.keys())

    def with_schema(self, schema: dict[str, Any] | None) -> "ToolDescriptor":
        """Return a copy carrying the given schema."""
        return self.model_copy(update={"input_schema": schema})
