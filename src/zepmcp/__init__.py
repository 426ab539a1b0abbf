"""
Zep MCP - Model Context Protocol adapter for the Zep memory service
====================================================================

Exposes three memory tools to MCP clients and forwards each call to Zep:

    - create_memory: append a message to a session
    - get_memory: retrieve a session's remembered conversation
    - search_memory: semantic search across all sessions

Main Packages:
    - core: configuration, exceptions, logging, transfer models, memory client
    - mcp: tool schemas, dispatcher, server and transport bindings, Zep adapter
    - cli: command-line interface

Quick Start:
    export ZEPAPIKEY=...
    zepmcp-server                      # stdio
    zepmcp serve --transport sse       # HTTP + SSE

Version: 1.0.0
"""

__version__ = "1.0.0"
