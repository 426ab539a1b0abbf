"""
MCP Adapters Package
====================
Network adapters for the remote memory service.

Available Adapters:
    - ZepAPIAdapter: Zep v2 REST API over requests
"""
