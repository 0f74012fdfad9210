"""
Plan executor.

Runs a plan strictly in order against the execution transport and stops at
the first invalid or failing step. Later steps may depend on the side effects
of earlier ones and there is no rollback, so a partially applied plan is an
expected outcome; the completed results travel with the raised error.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import ToolExecutionError, ToolNotFoundError
from toolpilot.models.plan import ExecutionResult, PlannedAction
from toolpilot.tools.catalog import ToolCatalog
from toolpilot.tools.transport import ExecutionTransport
from toolpilot.utils.helpers import to_json


class ExecutionReport(BaseModel):
    """Results of a fully executed plan, aligned with its steps."""

    results: list[ExecutionResult] = Field(default_factory=list)
    log: list[str] = Field(default_factory=list)


class PlanExecutor:
    """
    Sequential, fail-fast plan execution.

    Example:
        >>> executor = PlanExecutor()
        >>> report = await executor.execute(plan, catalog, transport, audit)
        >>> len(report.results) == len(plan)
        True
    """

    async def execute(
        self,
        plan: list[PlannedAction],
        catalog: ToolCatalog,
        transport: ExecutionTransport,
        audit: AuditLog | None = None,
    ) -> ExecutionReport:
        """
        Validate and run every step of ``plan``.

        Args:
            plan: Steps in execution order
            catalog: Tools discovered for this request
            transport: Connected execution transport
            audit: Audit log for the request

        Returns:
            ExecutionReport with one result per step

        Raises:
            ToolNotFoundError: If a step names a tool missing from the catalog
            ToolExecutionError: If a step raises or reports ``isError``
        """
        audit = audit or AuditLog()
        results: list[ExecutionResult] = []
        total = len(plan)

        for step, action in enumerate(plan, start=1):
            audit.add(f"Executing step {step}/{total}: {action.tool}")
            audit.add(f"Parameters: {to_json(action.parameters)}")
            audit.add(f"Reasoning: {action.reasoning}")

            if action.tool not in catalog:
                audit.error(f"Tool not available: {action.tool}")
                raise ToolNotFoundError(action.tool, step, results)

            try:
                result = await transport.call_tool(action.tool, action.parameters)
            except Exception as e:
                audit.error(f"Error executing tool {action.tool}: {e}")
                raise ToolExecutionError(action.tool, step, str(e), results) from e

            if result.is_error:
                raw = to_json(result.to_wire())
                audit.error(f"Step {step} returned error: {raw}")
                raise ToolExecutionError(action.tool, step, f"Error in step {step}: {raw}", results)

            results.append(result)
            audit.add(f"Step {step} completed successfully")

        return ExecutionReport(results=results, log=audit.entries)
