# src/cli/runner.py

"""Headless CLI commands, reusing the async orchestrator."""

import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.models.conversation import ChatAnswer, ChatMessage
from src.services.catalog_search import ProductSearchCriteria
from src.services.health_checker import HealthChecker
from src.services.tool_orchestrator import ToolOrchestrator

logger = logging.getLogger("shop_assistant.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def load_history(path: str | None) -> list[ChatMessage]:
    """Read prior messages from a JSON file holding a list of messages.

    Raises:
        ValueError: if the file is not a JSON list of valid messages.
    """
    if path is None:
        return []
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("History file must contain a JSON list")
    return [ChatMessage.from_payload(item) for item in raw]


def _print_answer(answer: ChatAnswer) -> None:
    """Render the answer text plus a table of tool results."""
    console = Console()
    console.print(answer.text)
    if not answer.tool_results:
        return

    table = Table(
        title="Tool Calls",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Tool", style="magenta")
    table.add_column("Status", justify="center")
    table.add_column("Result", overflow="fold", style="dim")
    for r in answer.tool_results:
        status = "[green]OK[/green]" if r.success else "[red]FAILED[/red]"
        table.add_row(r.tool_name, status, r.to_message_content()[:300])
    console.print(table)


async def cli_chat(
    query: str,
    conversation_id: str | None,
    history_path: str | None,
    output_format: str,
    orchestrator: ToolOrchestrator | None = None,
) -> int:
    """Run one chat turn and return an exit code (0=ok, 1=fail)."""
    try:
        prior = load_history(history_path)
    except (OSError, ValueError) as exc:
        _err.print(f"[red]Could not read history: {exc}[/red]")
        return 1

    orchestrator = orchestrator or ToolOrchestrator.from_settings()
    _err.print(f"[bold]Asking:[/bold] {query}")

    answer = await orchestrator.chat(query, conversation_id, prior)
    _err.print(
        f"[dim]conversation={answer.conversation_id} "
        f"status={answer.status.value} "
        f"tool={answer.tool_used or '-'}[/dim]"
    )

    if output_format == "text":
        _print_answer(answer)
    else:
        json.dump(
            answer.to_dict(),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")
    return 0


def run_list_categories(orchestrator: ToolOrchestrator | None = None) -> int:
    """Print catalog categories with their product counts."""
    orchestrator = orchestrator or ToolOrchestrator.from_settings()
    searcher = orchestrator.searcher
    categories = searcher.get_categories()
    if not categories:
        _err.print("[yellow]Catalog has no categories.[/yellow]")
        return 1

    table = Table(title="Catalog Categories", title_style="bold cyan")
    table.add_column("Category", style="bold")
    table.add_column("Products", justify="right", style="green")
    for category in categories:
        total = searcher.search(
            ProductSearchCriteria(category=category, limit=1)
        ).total
        table.add_row(category, str(total))
    Console().print(table)
    return 0


def run_list_currencies(orchestrator: ToolOrchestrator | None = None) -> int:
    """Print the supported currency directory."""
    orchestrator = orchestrator or ToolOrchestrator.from_settings()
    currencies = orchestrator.converter.get_supported_currencies()

    table = Table(
        title=f"Supported Currencies ({len(currencies)})",
        title_style="bold cyan",
    )
    table.add_column("Code", style="bold")
    table.add_column("Name")
    table.add_column("Symbol", justify="center", style="green")
    for c in currencies:
        table.add_row(c.code, c.name, c.symbol or "")
    Console().print(table)
    return 0


async def run_health_check(
    orchestrator: ToolOrchestrator | None = None,
) -> int:
    """Probe oracle, rate provider and catalog; 1 if any is down."""
    _err.print("[bold]Running dependency health check...[/bold]")
    checker = HealthChecker(orchestrator or ToolOrchestrator.from_settings())
    results = await checker.check_all()

    table = Table(
        title="Dependency Health Check",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Dependency", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Latency", justify="right")
    table.add_column("Notes", style="dim")

    any_down = False
    for r in results:
        if r.status == "ok":
            status = "[green]✅ OK[/green]"
        elif r.status == "slow":
            status = "[yellow]⚠️  SLOW[/yellow]"
        else:
            status = "[red]❌ DOWN[/red]"
            any_down = True

        latency = (
            f"{r.latency_ms:.0f}ms"
            if r.latency_ms > 0
            else "-"
        )
        table.add_row(
            r.source_id, status, latency, r.message,
        )

    Console().print(table)
    return 1 if any_down else 0
