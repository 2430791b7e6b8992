"""Heuristic password strength scoring."""

import re
from dataclasses import dataclass

MAX_SUGGESTIONS = 5

# (pattern, points, suggestion) -- evaluated independently, in this order.
_CLASS_RULES = [
    (re.compile(r"[A-Z]"), 15, "Add uppercase letters"),
    (re.compile(r"[a-z]"), 15, "Add lowercase letters"),
    (re.compile(r"\d", re.ASCII), 15, "Include numbers"),
    (re.compile(r"[^A-Za-z0-9]"), 25, "Add special characters"),
]


@dataclass(frozen=True)
class ScoreResult:
    score: int  # 0-100
    suggestions: tuple[str, ...] = ()

    @property
    def surfaced(self) -> tuple[str, ...]:
        """Suggestions shown to the user, capped at :data:`MAX_SUGGESTIONS`."""
        return self.suggestions[:MAX_SUGGESTIONS]

    @property
    def band(self) -> str:
        if self.score < 40:
            return "weak"
        if self.score < 80:
            return "fair"
        return "strong"


def score(password: str) -> ScoreResult:
    """Score *password* on a 0-100 scale and list what would improve it.

    Points are cumulative:
        length >= 12       -- 30   (8-11 chars: 15)
        uppercase letter   -- 15
        lowercase letter   -- 15
        decimal digit      -- 15
        anything else      -- 25

    The empty string scores 0 with no suggestions; the "longer" hint is only
    given for 1-7 character passwords.
    """
    if not password:
        return ScoreResult(0)

    points = 0
    suggestions: list[str] = []

    if len(password) >= 12:
        points += 30
    elif len(password) >= 8:
        points += 15
    else:
        suggestions.append("Make it longer (≥12 chars)")

    for pattern, award, hint in _CLASS_RULES:
        if pattern.search(password):
            points += award
        else:
            suggestions.append(hint)

    return ScoreResult(min(points, 100), tuple(suggestions))
