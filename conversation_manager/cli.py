"""Conversation Manager CLI with Rich output.

Provides commands for:
- Running the MCP server over stdio, SSE or streamable HTTP
- Inspecting the effective configuration and exposed tools

Usage:
    conversation-manager serve                          # stdio (for MCP clients)
    conversation-manager serve -t streamable-http -p 9000
    conversation-manager info                           # config, tools, resources
"""

from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from conversation_manager.config import TRANSPORTS, Config
from conversation_manager.dispatcher import TOOL_DESCRIPTIONS
from conversation_manager.phases import Operation
from conversation_manager.resources import ASPECTS, URI_TEMPLATE
from conversation_manager.schemas import (
    MIN_GOAL_LENGTH,
    MIN_KEY_POINT_LENGTH,
    MIN_SUMMARY_SOURCE_LENGTH,
)
from conversation_manager.server import run_server

app = typer.Typer(
    name="conversation-manager",
    help="Conversation Manager - goal, summary and key point tracking over MCP",
    rich_markup_mode="rich",
    no_args_is_help=True,
)
console = Console()
# stdout belongs to the stdio transport while serving
err_console = Console(stderr=True)

REQUIRED_ARGUMENTS = {
    Operation.SET_GOAL: f"goalDescription (>= {MIN_GOAL_LENGTH} chars)",
    Operation.RECORD_KEY_POINT: f"keyPoint (>= {MIN_KEY_POINT_LENGTH} chars)",
    Operation.SUMMARIZE: f"textToSummarize (>= {MIN_SUMMARY_SOURCE_LENGTH} chars)",
    Operation.SUGGEST_NEXT_STEP: "-",
}


def print_banner(target: Console = console):
    """Print Conversation Manager banner."""
    banner = Text()
    banner.append("Conversation", style="bold cyan")
    banner.append(" Manager", style="cyan")
    target.print(Panel(banner, border_style="cyan", box=box.ROUNDED))


def _build_config(
    transport: str | None,
    host: str | None,
    port: int | None,
) -> Config:
    """Environment config with command-line overrides applied."""
    overrides = {}
    if transport is not None:
        overrides["transport"] = transport
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    try:
        return Config(**overrides)
    except ValueError as e:
        err_console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def serve(
    transport: Optional[str] = typer.Option(
        None,
        "--transport", "-t",
        help=f"Transport to use: {', '.join(TRANSPORTS)} (default: from environment, else stdio)",
    ),
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Bind address for HTTP transports",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port", "-p",
        help="Bind port for HTTP transports",
    ),
):
    """Run the MCP server.

    Examples:
        conversation-manager serve                      # stdio
        conversation-manager serve -t sse --port 9000   # SSE on port 9000
    """
    config = _build_config(transport, host, port)
    print_banner(err_console)
    if config.transport == "stdio":
        err_console.print("[dim]Serving on stdio[/dim]")
    else:
        err_console.print(f"[dim]Serving {config.transport} on {config.host}:{config.port}[/dim]")
    run_server(config)


@app.command()
def info():
    """Show effective configuration, tools and resources."""
    config = _build_config(None, None, None)
    print_banner()

    table = Table(title="Configuration", box=box.ROUNDED)
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Server name", config.server_name)
    table.add_row("Default conversation", config.default_conversation_id)
    table.add_row("Summary length", str(config.summary_max_chars))
    table.add_row("Strict conversation ids", "yes" if config.strict_conversation_ids else "no")
    table.add_row("Transport", config.transport)
    if config.transport != "stdio":
        table.add_row("Address", f"{config.host}:{config.port}")
    console.print(table)

    tools = Table(title="Tools", box=box.ROUNDED)
    tools.add_column("Name", style="cyan", no_wrap=True)
    tools.add_column("Required")
    tools.add_column("Description", style="dim")
    for operation, description in TOOL_DESCRIPTIONS.items():
        tools.add_row(operation.value, REQUIRED_ARGUMENTS[operation], description)
    console.print(tools)

    console.print(f"\n[bold]Resource:[/bold] {URI_TEMPLATE}")
    console.print(f"[dim]aspect: {', '.join(ASPECTS)}[/dim]")


@app.command()
def version():
    """Show Conversation Manager version."""
    from conversation_manager import __version__

    console.print(f"Conversation Manager [cyan]{__version__}[/cyan]")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
