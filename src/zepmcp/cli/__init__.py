"""
Zep MCP CLI Package

Command-line interface for serving the MCP tools and calling them directly.
"""

from zepmcp.cli.main import cli, main

__all__ = ["cli", "main"]
