"""
QueryGate Database Tool

Adapter between an LLM "db" tool call and the database layer.

The model proposes SQL text; this module bounds its size, runs it through the
admission gate, and only then hands it to the executor supplied by the caller.
Rejections come back as a tool result the model can read and correct from.
"""
from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any

from src.core.config import settings
from src.core.logging import get_gate_logger, get_logger
from src.utils.sql_validator import GatePolicy, Rejected, admit, build_policy

logger = get_logger(__name__)

QUERY_TOO_LONG = "query_too_long"
EXECUTION_ERROR = "execution_error"

Executor = Callable[[str], Sequence[Mapping[str, Any]]]


@dataclass
class ToolResult:
    """Result of a db tool invocation, as returned to the model"""

    success: bool
    query: str | None = None
    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0
    truncated: bool = False
    error: str | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "query": self.query,
            "columns": self.columns,
            "rows": self.rows,
            "row_count": self.row_count,
            "truncated": self.truncated,
            "error": self.error,
            "reason": self.reason,
        }


@lru_cache
def get_configured_policy() -> GatePolicy:
    """
    Gate policy with any extra destructive keywords from settings.

    Built once and reused.
    """
    return build_policy(settings.gate_extra_destructive_keywords)


def _preview(sql: str, limit: int = 200) -> str:
    flat = " ".join(sql.split())
    return flat if len(flat) <= limit else flat[:limit] + "..."


def run_db_tool(
    sql: str,
    executor: Executor,
    *,
    max_length: int | None = None,
    row_limit: int | None = None,
    policy: GatePolicy | None = None,
) -> ToolResult:
    """
    Admit a model-generated query and execute it if allowed.

    Args:
        sql: SQL text from the tool call arguments
        executor: Callable that runs an admitted query and returns row mappings
        max_length: Longest query accepted (default from settings)
        row_limit: Maximum rows returned to the model (default from settings)
        policy: Gate policy to apply (default built from settings)

    Returns:
        ToolResult describing rows on success or the rejection reason
    """
    max_length = max_length or settings.query_max_length
    row_limit = row_limit or settings.tool_row_limit

    if len(sql) > max_length:
        get_gate_logger().warning(f"reason={QUERY_TOO_LONG} length={len(sql)} limit={max_length}")
        return ToolResult(
            success=False,
            error=f"Query is too long ({len(sql)} characters, limit {max_length}).",
            reason=QUERY_TOO_LONG,
        )

    decision = admit(sql, policy or get_configured_policy())
    if isinstance(decision, Rejected):
        get_gate_logger().warning(f"reason={decision.reason} sql={_preview(sql)!r}")
        return ToolResult(success=False, error=decision.message, reason=decision.reason)

    query = decision.query
    logger.debug(f"Executing admitted query: {_preview(query)}")

    try:
        result_rows = executor(query)
    except Exception as e:
        logger.error(f"Query execution failed: {e}")
        return ToolResult(success=False, query=query, error=f"Query execution failed: {e}", reason=EXECUTION_ERROR)

    rows = [dict(row) for row in result_rows]
    columns = list(rows[0].keys()) if rows else []
    truncated = len(rows) > row_limit

    if truncated:
        logger.info(f"Truncating tool result from {len(rows)} to {row_limit} rows")
        rows = rows[:row_limit]

    return ToolResult(
        success=True,
        query=query,
        columns=columns,
        rows=rows,
        row_count=len(rows),
        truncated=truncated,
    )
