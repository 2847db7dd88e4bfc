"""
SQL Admission Gate

Decides whether a candidate SQL string produced by an LLM tool call may be
handed to the database layer. Only a single read-only SELECT statement is
admitted.

This is a text classifier, not a SQL parser. Rules run in a fixed order and
the first one that matches decides the rejection reason:

1. empty input
2. more than one statement (a single trailing semicolon is tolerated)
3. injection idioms (comments, OR 1=1, UNION SELECT)
4. destructive leading verb (DROP, DELETE, UPDATE, ...)
5. anything whose leading token is not SELECT

Known gaps: encoded keywords, tautologies written with other operators
(OR 2>1), UNION ALL SELECT, and keywords inside string literals are not
caught here. The database connection must still use a read-only credential.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from src.core.exceptions import ConfigurationError, QueryRejectedError


class RejectionKind(str, Enum):
    """Stable reason codes reported back to the caller"""

    EMPTY_QUERY = "empty_query"
    MULTI_STATEMENT = "multi_statement"
    INJECTION_PATTERN = "injection_pattern"
    DESTRUCTIVE_OPERATION = "destructive_operation"
    NOT_SELECT = "not_select"


@dataclass(frozen=True)
class Accepted:
    """Query admitted for execution (trimmed, otherwise untouched)"""

    query: str

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class Rejected:
    """Query turned away, with a message safe to show to a user or model"""

    kind: RejectionKind
    message: str

    @property
    def accepted(self) -> bool:
        return False

    @property
    def reason(self) -> str:
        return self.kind.value


Decision = Accepted | Rejected


DESTRUCTIVE_KEYWORDS = frozenset({
    "drop", "delete", "truncate", "alter", "create",
    "update", "insert", "replace", "attach", "detach",
})

# Every pattern runs against the lower-cased, semicolon-stripped text
INJECTION_PATTERNS = (
    re.compile(r"--"),
    re.compile(r"/\*"),
    re.compile(r"\*/"),
    re.compile(r"\bor\s+1\s*=\s*1\b"),
    re.compile(r"\bunion\s+select\b"),
)

_KEYWORD_RE = re.compile(r"^[a-z_]+$")

MESSAGES = MappingProxyType({
    RejectionKind.EMPTY_QUERY: "Query is empty. Provide a single SELECT statement.",
    RejectionKind.MULTI_STATEMENT: (
        "Multiple SQL statements are not allowed. "
        "Send exactly one SELECT statement, optionally ending with a single semicolon."
    ),
    RejectionKind.INJECTION_PATTERN: (
        "Suspicious SQL detected: comments, 'OR 1=1' tautologies and UNION SELECT are not allowed."
    ),
    RejectionKind.DESTRUCTIVE_OPERATION: (
        "'{keyword}' statements are not allowed. Queries are read-only; use SELECT only."
    ),
    RejectionKind.NOT_SELECT: "Only SELECT queries are allowed.",
})


@dataclass(frozen=True)
class GatePolicy:
    """
    Immutable rule data for the gate.

    Attributes:
        destructive_keywords: Leading verbs rejected as destructive
        pattern_rules: Rejection kind -> compiled patterns that trigger it
    """

    destructive_keywords: frozenset[str]
    pattern_rules: Mapping[RejectionKind, tuple[re.Pattern, ...]]


def build_policy(extra_destructive_keywords: Iterable[str] = ()) -> GatePolicy:
    """
    Build a gate policy, optionally blocking more leading verbs.

    Args:
        extra_destructive_keywords: Additional verbs (e.g. "grant", "merge")

    Returns:
        Frozen GatePolicy

    Raises:
        ConfigurationError: If a keyword is not a single bare word or is "select"
    """
    extra = set()
    for keyword in extra_destructive_keywords:
        normalized = keyword.strip().lower()
        if not _KEYWORD_RE.match(normalized):
            raise ConfigurationError(f"Invalid destructive keyword: {keyword!r}")
        if normalized == "select":
            raise ConfigurationError("'select' cannot be listed as a destructive keyword")
        extra.add(normalized)

    return GatePolicy(
        destructive_keywords=DESTRUCTIVE_KEYWORDS | frozenset(extra),
        pattern_rules=MappingProxyType({RejectionKind.INJECTION_PATTERN: INJECTION_PATTERNS}),
    )


DEFAULT_POLICY = build_policy()


def _leading_token(text: str) -> str:
    parts = text.split(None, 1)
    return parts[0] if parts else ""


def _reject(kind: RejectionKind, **fields) -> Rejected:
    return Rejected(kind=kind, message=MESSAGES[kind].format(**fields))


def admit(raw_query: str, policy: GatePolicy = DEFAULT_POLICY) -> Decision:
    """
    Decide whether a candidate SQL string may be executed.

    Args:
        raw_query: Untrusted SQL text from an LLM tool call
        policy: Rule data to apply (defaults to the built-in policy)

    Returns:
        Accepted with the trimmed original text, or Rejected with a reason
    """
    candidate = raw_query.strip()
    if not candidate:
        return _reject(RejectionKind.EMPTY_QUERY)

    inspected = candidate.lower()
    if inspected.endswith(";"):
        inspected = inspected[:-1]

    if ";" in inspected:
        return _reject(RejectionKind.MULTI_STATEMENT)

    for kind, patterns in policy.pattern_rules.items():
        if any(pattern.search(inspected) for pattern in patterns):
            return _reject(kind)

    leading = _leading_token(inspected)
    if leading in policy.destructive_keywords:
        return _reject(RejectionKind.DESTRUCTIVE_OPERATION, keyword=leading.upper())

    if leading != "select":
        return _reject(RejectionKind.NOT_SELECT)

    return Accepted(query=candidate)


def require_admitted(raw_query: str, policy: GatePolicy = DEFAULT_POLICY) -> str:
    """
    Return the admitted query or raise QueryRejectedError.

    For call sites that prefer exception flow over inspecting the decision.
    """
    decision = admit(raw_query, policy)
    if isinstance(decision, Rejected):
        raise QueryRejectedError(decision)
    return decision.query
