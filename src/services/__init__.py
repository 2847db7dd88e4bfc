"""
Services Package

Tool adapters that sit between the LLM and the database.
"""

from .db_tool import ToolResult, get_configured_policy, run_db_tool

__all__ = [
    "ToolResult",
    "get_configured_policy",
    "run_db_tool",
]
