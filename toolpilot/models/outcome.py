"""
Terminal outcome of one orchestration request.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from toolpilot.models.plan import ExecutionResult, PlannedAction

GENERIC_ERROR = "AI agent error"

# Headers answered to a CORS preflight by hosts serving the orchestrator over HTTP
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


class RequestOutcome(BaseModel):
    """
    Exactly one of these is produced per request.

    Successful runs carry the plan, the per-step results and the summary;
    failed runs carry the error message. Both carry the full audit log.
    """

    success: bool
    model_used: str = Field(default="")
    logs: list[str] = Field(default_factory=list)

    # Success
    plan: list[PlannedAction] = Field(default_factory=list)
    results: list[ExecutionResult] = Field(default_factory=list)
    summary: str = Field(default="")

    # Failure
    error: str | None = Field(default=None)
    details: str | None = Field(default=None)

    @classmethod
    def succeeded(
        cls,
        plan: list[PlannedAction],
        results: list[ExecutionResult],
        summary: str,
        logs: list[str],
        model_used: str,
    ) -> "RequestOutcome":
        return cls(
            success=True,
            plan=plan,
            results=results,
            summary=summary,
            logs=logs,
            model_used=model_used,
        )

    @classmethod
    def failed(cls, details: str, logs: list[str], model_used: str) -> "RequestOutcome":
        return cls(
            success=False,
            error=GENERIC_ERROR,
            details=details,
            logs=logs,
            model_used=model_used,
        )

    @property
    def status_code(self) -> int:
        """HTTP-style status for hosts that serve the outcome over HTTP."""
        return 200 if self.success else 500

    def to_response(self) -> dict[str, Any]:
        """Render the wire response body."""
        if self.success:
            return {
                "success": True,
                "logs": list(self.logs),
                "actionPlan": [action.model_dump() for action in self.plan],
                "results": [result.to_wire() for result in self.results],
                "response": self.summary,
                "modelUsed": self.model_used,
            }
        return {
            "success": False,
            "error": self.error or GENERIC_ERROR,
            "logs": list(self.logs),
            "details": self.details or "Unknown error",
            "modelUsed": self.model_used,
        }
