"""
Utilities Package

SQL admission gate.
"""

from .sql_validator import (
    DEFAULT_POLICY,
    Accepted,
    Decision,
    GatePolicy,
    Rejected,
    RejectionKind,
    admit,
    build_policy,
    require_admitted,
)

__all__ = [
    "DEFAULT_POLICY",
    "Accepted",
    "Decision",
    "GatePolicy",
    "Rejected",
    "RejectionKind",
    "admit",
    "build_policy",
    "require_admitted",
]
