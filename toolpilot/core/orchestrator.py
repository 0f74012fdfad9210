"""
Orchestrator for Toolpilot.

The Orchestrator handles one request end to end: it connects to the
execution transport, discovers tools, gets a plan from the model, runs it
and asks the model for a summary. Every request gets its own transport
connection, audit log and tool catalog.
"""

from __future__ import annotations

from typing import Any

from toolpilot.agents.planner import PlannerAgent
from toolpilot.agents.summarizer import SummarizerAgent
from toolpilot.core.audit import AuditLog
from toolpilot.core.errors import ToolpilotError, TransportConnectError
from toolpilot.core.executor import PlanExecutor
from toolpilot.llm.client import LLMClient
from toolpilot.models.config import ToolpilotConfig
from toolpilot.models.conversation import AgentRequest
from toolpilot.models.outcome import RequestOutcome
from toolpilot.tools.catalog import ToolCatalog
from toolpilot.tools.transport import TransportFactory, scoped_transport
from toolpilot.utils.logger import get_logger

logger = get_logger(__name__)


class Orchestrator:
    """
    Request-scoped orchestration engine.

    The Orchestrator coordinates one request by:
    1. Connecting to the execution transport
    2. Discovering tools and their schemas
    3. Using the Planner to get an execution plan
    4. Running the plan step by step
    5. Using the Summarizer to write the reply

    Every failure is turned into a failed ``RequestOutcome``; ``run`` never
    raises.

    Example:
        >>> config = ToolpilotConfig.load()
        >>> orchestrator = Orchestrator(config)
        >>> outcome = await orchestrator.run(AgentRequest(prompt="list the top 5 items"))
        >>> outcome.success
        True
    """

    def __init__(
        self,
        config: ToolpilotConfig,
        client: LLMClient | None = None,
        transport_factory: TransportFactory | None = None,
        executor: PlanExecutor | None = None,
    ):
        """
        Initialize the Orchestrator.

        Args:
            config: Toolpilot configuration
            client: Model gateway (built from ``config.llm`` when omitted)
            transport_factory: Coroutine opening the execution transport
            executor: Plan executor
        """
        self.config = config
        self.client = client or LLMClient(config.llm)
        self.transport_factory = transport_factory
        self.executor = executor or PlanExecutor()

        self.planner = PlannerAgent(self.client, config.planning)
        self.summarizer = SummarizerAgent(self.client, config.planning)

    @property
    def model_used(self) -> str:
        return self.client.model_string

    async def run(self, request: AgentRequest | dict[str, Any]) -> RequestOutcome:
        """
        Handle one request.

        Args:
            request: The request, or its wire-format dict

        Returns:
            RequestOutcome carrying the audit log in both success and failure
        """
        audit = AuditLog()

        try:
            if not isinstance(request, AgentRequest):
                request = AgentRequest.model_validate(request)

            audit.add("Connecting to MCP server...")
            async with scoped_transport(
                self.config.transport,
                factory=self.transport_factory,
                audit=audit,
            ) as transport:
                audit.add("MCP connection established successfully")

                catalog = await ToolCatalog.discover(transport, audit)

                audit.add(f'Prompt received: "{request.prompt}"')
                if request.page_context:
                    audit.add(f"Page context received with ID: {request.page_id or 'unknown'}")
                audit.add(f"Conversation history length: {len(request.conversation_history)}")

                planning = await self.planner.run(request, catalog=catalog, audit=audit)
                report = await self.executor.execute(planning.plan, catalog, transport, audit)

                summary = await self.summarizer.run(
                    request,
                    planning_messages=planning.messages,
                    results=report.results,
                    audit=audit,
                )

            audit.add("Execution completed successfully")
            return RequestOutcome.succeeded(
                plan=planning.plan,
                results=report.results,
                summary=summary,
                logs=audit.entries,
                model_used=self.model_used,
            )

        except TransportConnectError as e:
            audit.error(f"Could not connect to MCP server: {e}")
            return self._failure(e, audit)
        except ToolpilotError as e:
            return self._failure(e, audit)
        except Exception as e:
            logger.exception("Unexpected error in orchestrator")
            return self._failure(e, audit)

    def _failure(self, error: Exception, audit: AuditLog) -> RequestOutcome:
        details = str(error) or error.__class__.__name__
        logger.error(f"Request failed: {details}")
        return RequestOutcome.failed(details=details, logs=audit.entries, model_used=self.model_used)

    def get_stats(self) -> dict[str, Any]:
        """
        Get statistics about the agents.

        Returns:
            Dictionary with statistics
        """
        return {
            "planner": self.planner.get_stats(),
            "summarizer": self.summarizer.get_stats(),
        }
