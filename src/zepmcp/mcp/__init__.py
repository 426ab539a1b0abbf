"""
Zep MCP (Model Context Protocol) Module
=======================================
MCP server implementation for AI agent integration.

Available Tools:
    - create_memory: Append a message to a session
    - get_memory: Retrieve a session's messages and summary
    - search_memory: Semantic search across all sessions

Transports:
    - stdio: line-oriented standard streams (local process integration)
    - sse: HTTP + Server-Sent Events (remote hosted integration)

Configuration:
    MCP settings live in config.yaml under the 'zepmcp.mcp' section:
    - transport: "stdio" or "sse"
    - host/port: HTTP binding (if using the SSE transport)
    - sse_path/messages_path: HTTP routes

Usage:
    from zepmcp.mcp.server import build_client, build_server

    server = build_server(build_client(config), config)
"""
