"""
Plan and execution models.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PlannedAction(BaseModel):
    """One step of a model-produced execution plan."""

    model_config = ConfigDict(extra="ignore")

    tool: str = Field(description="Exact name of the tool to invoke")
    parameters: dict[str, Any] = Field(
        default_factory=dict,
        description="Arguments passed to the tool"
    )
    reasoning: str = Field(default="", description="Why the model chose this step")

    @field_validator("parameters", mode="before")
    @classmethod
    def _none_parameters_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("reasoning", mode="before")
    @classmethod
    def _none_reasoning_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_summary(self) -> str:
        """Get a brief summary."""
        return f"{self.tool}({', '.join(self.parameters)})"


class ExecutionResult(BaseModel):
    """Result of a single tool invocation as reported by the transport."""

    model_config = ConfigDict(populate_by_name=True)

    is_error: bool = Field(default=False, alias="isError")
    payload: Any = Field(default=None, description="Opaque transport payload")

    @classmethod
    def from_raw(cls, raw: Any) -> "ExecutionResult":
        """
        Build a result from a raw transport response.

        Dict responses keep every field except ``isError`` in the payload.
        """
        if isinstance(raw, dict):
            data = dict(raw)
            is_error = bool(data.pop("isError", False))
            return cls(is_error=is_error, payload=data)
        return cls(is_error=bool(getattr(raw, "isError", False)), payload=raw)

    def to_wire(self) -> dict[str, Any]:
        """Render the result the way the transport reported it."""
        if isinstance(self.payload, dict):
            return {**self.payload, "isError": self.is_error}
        return {"isError": self.is_error, "payload": self.payload}
