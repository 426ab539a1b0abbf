"""
Zep MCP CLI - Main Entry Point

Command-line interface for the Zep memory adapter.

Usage:
    zepmcp serve --transport sse --port 8110     # Run the MCP server
    zepmcp tools                                 # Print the tool descriptors
    zepmcp add s1 "hello" --role user            # Append a message to a session
    zepmcp get s1                                # Show a session's messages
    zepmcp search "what did I say?" --limit 5    # Semantic search
"""

import asyncio
import dataclasses
from pathlib import Path
from typing import Any, Dict, Optional

import click

from zepmcp.cli.formatters import format_json, format_search_table, format_session_table
from zepmcp.core.config import ZepMCPConfig, get_config, load_config
from zepmcp.core.exceptions import ConfigurationError, MissingCredentialError
from zepmcp.core.logging_config import configure_logging
from zepmcp.mcp import server as mcp_server
from zepmcp.mcp.dispatcher import ToolDispatcher
from zepmcp.mcp.schemas import ToolResult


def _load_config(ctx: click.Context) -> ZepMCPConfig:
    config_path = ctx.obj.get("config_path")
    try:
        return load_config(Path(config_path)) if config_path else get_config()
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)


def _run_tool(ctx: click.Context, name: str, arguments: Dict[str, Any]) -> ToolResult:
    cfg = _load_config(ctx)
    try:
        client = mcp_server.build_client(cfg)
    except MissingCredentialError as exc:
        click.echo(f"Error: {exc.message}", err=True)
        ctx.exit(1)

    result = asyncio.run(ToolDispatcher(client).dispatch(name, arguments))
    if not result.ok:
        click.echo(f"Error: {result.error}", err=True)
        ctx.exit(1)
    return result


# ============================================================================
# CLI Group and Main Entry
# ============================================================================

@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to config.yaml file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def cli(ctx, config: Optional[str], verbose: bool):
    """
    Zep MCP - memory tools for agents, backed by Zep.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    configure_logging("DEBUG" if verbose else "WARNING")


@cli.command()
@click.option(
    "--transport",
    "-t",
    type=click.Choice(["stdio", "sse"]),
    help="Transport to serve on (defaults to mcp.transport from config)",
)
@click.option("--host", help="Bind host for the SSE transport")
@click.option("--port", type=int, help="Bind port for the SSE transport")
@click.pass_context
def serve(ctx, transport: Optional[str], host: Optional[str], port: Optional[int]):
    """
    Run the MCP server.

    Example:
        zepmcp serve --transport sse --host 0.0.0.0 --port 8110
    """
    cfg = _load_config(ctx)
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    if overrides:
        cfg = dataclasses.replace(cfg, mcp=dataclasses.replace(cfg.mcp, **overrides))
    mcp_server.main(transport=transport, config=cfg)


@cli.command()
def tools():
    """Print the tool descriptors advertised to MCP clients."""
    click.echo(format_json(ToolDispatcher.list_tools()))


@cli.command()
@click.argument("session_id")
@click.argument("message")
@click.option(
    "--role",
    "-r",
    default="user",
    show_default=True,
    help="Role of the message sender (user or assistant)",
)
@click.pass_context
def add(ctx, session_id: str, message: str, role: str):
    """
    Append a message to a session.

    Example:
        zepmcp add s1 "I prefer window seats" --role user
    """
    result = _run_tool(
        ctx, "create_memory", {"sessionId": session_id, "message": message, "role": role}
    )
    click.echo(format_json(result.data))


@cli.command()
@click.argument("session_id")
@click.option("--table", "as_table", is_flag=True, help="Output as a table")
@click.pass_context
def get(ctx, session_id: str, as_table: bool):
    """Show the remembered conversation of a session."""
    result = _run_tool(ctx, "get_memory", {"sessionId": session_id})
    if as_table:
        click.echo(format_session_table(result.data))
    else:
        click.echo(format_json(result.data))


@cli.command()
@click.argument("query")
@click.option(
    "--limit",
    "-n",
    type=int,
    default=None,
    help="Maximum number of results [default: 10]",
)
@click.option("--table", "as_table", is_flag=True, help="Output as a table")
@click.pass_context
def search(ctx, query: str, limit: Optional[int], as_table: bool):
    """
    Semantic search across all sessions.

    Example:
        zepmcp search "seating preference" -n 5
    """
    arguments: Dict[str, Any] = {"query": query}
    if limit is not None:
        arguments["limit"] = limit
    result = _run_tool(ctx, "search_memory", arguments)
    if as_table:
        click.echo(format_search_table(result.data))
    else:
        click.echo(format_json(result.data))


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
