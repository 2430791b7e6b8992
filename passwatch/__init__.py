"""Passwatch -- live password feedback.

Heuristic strength scoring on every keystroke, plus a debounced,
privacy-preserving breach check against the Pwned Passwords range API
(k-anonymity: only 5 hex characters of the SHA-1 digest leave the client).
"""

from passwatch.breach import (
    NOT_FOUND,
    UNAVAILABLE,
    BreachLookupClient,
    BreachResult,
    Outcome,
    RangeQueryKey,
    check_breach,
    parse_range_response,
    sha1_hex,
)
from passwatch.errors import MalformedResponse, NetworkFailure, PasswatchError
from passwatch.orchestrator import (
    DEBOUNCE_SECONDS,
    BreachStatus,
    CheckOrchestrator,
    CheckState,
    PanelState,
    describe,
)
from passwatch.strength import ScoreResult, score

__all__ = [
    "DEBOUNCE_SECONDS",
    "NOT_FOUND",
    "UNAVAILABLE",
    "BreachLookupClient",
    "BreachResult",
    "BreachStatus",
    "CheckOrchestrator",
    "CheckState",
    "MalformedResponse",
    "NetworkFailure",
    "Outcome",
    "PanelState",
    "PasswatchError",
    "RangeQueryKey",
    "ScoreResult",
    "check_breach",
    "describe",
    "parse_range_response",
    "score",
    "sha1_hex",
]
