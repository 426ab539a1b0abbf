"""
CLI Output Formatters

Table and JSON output for the memory commands.
"""

import json
from typing import Any, Dict, List, Optional

from tabulate import tabulate


def truncate(text: str, max_length: int = 80, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix


def format_json(data: Any) -> str:
    """Same rendering as a successful tool call."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_search_table(results: List[Dict[str, Any]]) -> str:
    if not results:
        return "No memories found."

    headers = ["Score", "Session", "Content"]
    rows = [
        [
            f"{float(r.get('score') or 0):.3f}",
            r.get("sessionId") or "-",
            truncate(r.get("content", ""), 60),
        ]
        for r in results
    ]
    return tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True)


def format_session_table(memory: Dict[str, Any]) -> str:
    messages = memory.get("messages") or []
    lines = [f"Session: {memory.get('sessionId')}"]
    summary: Optional[str] = memory.get("summary")
    if summary:
        lines.append(f"Summary: {summary}")

    if not messages:
        lines.append("No messages.")
        return "\n".join(lines)

    rows = [
        [m.get("timestamp") or "", m.get("role", ""), truncate(m.get("content", ""), 70)]
        for m in messages
    ]
    lines.append(tabulate(rows, headers=["Timestamp", "Role", "Content"], tablefmt="grid"))
    return "\n".join(lines)
