"""
QueryGate Query API Router

Endpoints for checking candidate SQL against the admission gate.
Nothing here executes SQL.
"""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.core.config import settings
from src.core.logging import get_logger
from src.services.db_tool import get_configured_policy
from src.utils.sql_validator import Accepted, RejectionKind, admit

logger = get_logger(__name__)

router = APIRouter(tags=["query"])


class ValidateRequest(BaseModel):
    """Request to check a candidate query"""
    sql: str = Field(..., max_length=settings.query_max_length, description="Candidate SQL from an LLM tool call")


class ValidateResponse(BaseModel):
    """Gate decision for a candidate query"""
    accepted: bool
    query: str | None = None
    reason: str | None = None
    message: str | None = None


class PolicyResponse(BaseModel):
    """Active gate rules"""
    destructive_keywords: list[str]
    rejection_kinds: list[str]


@router.post("/validate", response_model=ValidateResponse)
async def validate_query(request: ValidateRequest) -> ValidateResponse:
    """
    Run a candidate query through the admission gate.

    Rejections are a normal outcome and come back with HTTP 200; the
    reason code tells the caller which rule fired.
    """
    decision = admit(request.sql, get_configured_policy())

    if isinstance(decision, Accepted):
        return ValidateResponse(accepted=True, query=decision.query)

    logger.info(f"Query rejected: {decision.reason}")
    return ValidateResponse(accepted=False, reason=decision.reason, message=decision.message)


@router.get("/policy", response_model=PolicyResponse)
async def get_policy() -> PolicyResponse:
    """List the leading verbs blocked as destructive and every rejection code"""
    policy = get_configured_policy()
    return PolicyResponse(
        destructive_keywords=sorted(policy.destructive_keywords),
        rejection_kinds=[kind.value for kind in RejectionKind],
    )
