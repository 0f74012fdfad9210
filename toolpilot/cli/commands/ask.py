"""
Ask command for Toolpilot CLI.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import typer
from pydantic import ValidationError

from toolpilot.cli.ui.console import console, print_error, print_info, print_warning, show_banner
from toolpilot.cli.ui.panels import create_outcome_panel
from toolpilot.models.conversation import AgentRequest, ConversationMessage
from toolpilot.models.outcome import RequestOutcome
from toolpilot.utils.helpers import to_json


def load_history(path: Path) -> list[dict]:
    """
    Load conversation history from a JSON file.

    A missing file is an empty history.
    """
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"History file must hold a JSON list: {path}")
    return data


def save_history(path: Path, messages: list[ConversationMessage]) -> None:
    """Write conversation history back to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(to_json([m.model_dump(mode="json") for m in messages]))


def build_request(prompt: str, page_id: str | None, history: list[dict]) -> AgentRequest:
    """Build an AgentRequest from CLI arguments."""
    payload: dict = {"prompt": prompt, "conversationHistory": history}
    if page_id:
        payload["pageContext"] = {"pageInfo": {"id": page_id}}
    return AgentRequest.model_validate(payload)


def record_exchange(request: AgentRequest, outcome: RequestOutcome) -> list[ConversationMessage]:
    """Append the prompt and the reply to the request's history; failed requests add nothing."""
    if not outcome.success:
        return list(request.conversation_history)
    return [
        *request.conversation_history,
        ConversationMessage(role="user", content=request.prompt),
        ConversationMessage(role="assistant", content=outcome.summary),
    ]


def run_ask(
    prompt: str,
    page_id: str | None = None,
    history_file: str | None = None,
    config_file: str | None = None,
    json_output: bool = False,
    show_logs: bool = False,
    quiet: bool = False,
) -> None:
    """
    Run one request through the orchestrator and print the outcome.

    Exits with code 1 when the request fails.
    """
    from toolpilot.core.orchestrator import Orchestrator
    from toolpilot.models.config import ToolpilotConfig

    try:
        config = ToolpilotConfig.load(config_file)
    except FileNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if config.logging.file:
        from toolpilot.utils.logger import setup_logging

        setup_logging(
            config.logging.level,
            log_file=config.logging.file,
            json_format=config.logging.json_format,
            console=False,
        )

    history_path = Path(history_file) if history_file else None
    try:
        history = load_history(history_path) if history_path else []
        request = build_request(prompt, page_id, history)
    except (ValueError, ValidationError) as e:
        print_error(f"Invalid request: {e}")
        raise typer.Exit(1)

    if not json_output and not quiet:
        show_banner()
        if not config.llm.is_configured():
            print_warning(f"LLM provider '{config.llm.provider}' has no API key configured")

    orchestrator = Orchestrator(config)
    if json_output or quiet:
        outcome = asyncio.run(orchestrator.run(request))
    else:
        with console.status("[bold blue]Planning and running tools...[/]"):
            outcome = asyncio.run(orchestrator.run(request))

    if json_output:
        console.print_json(to_json(outcome.to_response()))
    else:
        console.print(create_outcome_panel(outcome, show_logs=show_logs))

    if history_path and outcome.success:
        save_history(history_path, record_exchange(request, outcome))
        if not json_output and not quiet:
            print_info(f"Conversation saved to {history_path}")

    if not outcome.success:
        raise typer.Exit(1)
