"""
Zep MCP Server
==============
MCP bridge exposing Zep memory tools to agent clients.
"""

import asyncio
import json
import sys
from typing import Optional

import mcp.types as types
from loguru import logger
from mcp.server.lowlevel import Server

from zepmcp.core.config import ZepMCPConfig, get_config, require_api_key
from zepmcp.core.exceptions import (
    ConfigurationError,
    DependencyMissingError,
    MissingCredentialError,
    UnsupportedTransportError,
)
from zepmcp.core.logging_config import configure_logging
from zepmcp.core.memory_client import ZepMemoryClient
from zepmcp.mcp.dispatcher import ToolDispatcher
from zepmcp.mcp.schemas import ToolResult


def render_tool_result(result: ToolResult) -> types.CallToolResult:
    """Render a ToolResult as a single text content block."""
    if result.ok:
        text = json.dumps(result.data, indent=2, ensure_ascii=False)
        return types.CallToolResult(content=[types.TextContent(type="text", text=text)])
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=f"Error: {result.error}")],
        isError=True,
    )


def build_client(config: ZepMCPConfig) -> ZepMemoryClient:
    """Run the credential gate and construct the long-lived memory client."""
    api_key = require_api_key(config)
    return ZepMemoryClient.from_api_key(
        api_key,
        base_url=config.zep.base_url,
        timeout_seconds=config.zep.timeout_seconds,
    )


def build_server(client: ZepMemoryClient, config: ZepMCPConfig | None = None) -> Server:
    cfg = config or get_config()
    dispatcher = ToolDispatcher(client)
    server = Server(cfg.mcp.server_name, version=cfg.mcp.server_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool(**tool) for tool in dispatcher.list_tools()]

    # Registered directly so arguments reach the dispatcher undecoded:
    # decoding happens once there, not against the advertised JSON schema.
    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        logger.debug(f"Tool call: {name}")
        result = await dispatcher.dispatch(name, request.params.arguments)
        return types.ServerResult(render_tool_result(result))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def run_stdio(server: Server) -> None:
    from mcp.server.stdio import stdio_server

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Zep MCP Server v2 running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def serve(server: Server, config: ZepMCPConfig, transport: Optional[str] = None) -> None:
    transport = transport or config.mcp.transport

    if transport == "stdio":
        asyncio.run(run_stdio(server))
        return

    if transport == "sse":
        try:
            import uvicorn

            from zepmcp.mcp.sse_app import create_sse_app
        except ImportError as exc:
            raise DependencyMissingError(
                dependency=exc.name or "uvicorn",
                message="Install packages 'uvicorn' and 'starlette' to serve over SSE."
            ) from exc

        app = create_sse_app(server, config)
        logger.info(
            f"Zep MCP Server v2 listening on http://{config.mcp.host}:{config.mcp.port}{config.mcp.sse_path}"
        )
        uvicorn.run(app, host=config.mcp.host, port=config.mcp.port, log_config=None)
        return

    raise UnsupportedTransportError(
        transport=transport,
        supported_transports=["stdio", "sse"]
    )


def main(transport: Optional[str] = None, config: ZepMCPConfig | None = None) -> None:
    try:
        cfg = config or get_config()
    except ConfigurationError as exc:
        configure_logging()
        logger.error(f"Error: {exc}")
        sys.exit(1)

    configure_logging(cfg.observability.log_level, cfg.observability.json_logs or None)

    try:
        client = build_client(cfg)
    except MissingCredentialError as exc:
        logger.error(f"Error: {exc.message}")
        logger.error("Set ZEPAPIKEY in the environment or zep.api_key in config.yaml")
        sys.exit(1)

    server = build_server(client, cfg)

    try:
        serve(server, cfg, transport)
    except KeyboardInterrupt:
        logger.info("Stopping server...")
    except Exception as exc:
        logger.opt(exception=exc).error(f"Fatal error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
