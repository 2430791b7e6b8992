"""Per-keystroke coordination of strength scoring and breach lookups.

Scoring runs synchronously on every keystroke.  Breach lookups are debounced:
each keystroke re-arms a single quiet-period timer, and only when it fires is
a lookup started.  Every keystroke bumps a sequence number; a lookup that
completes under an older number is discarded, since an HTTP request already
in flight cannot be pulled back.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Protocol

from passwatch.breach import BreachLookupClient, BreachResult, Outcome, sha1_hex
from passwatch.strength import ScoreResult, score

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.7


class BreachStatus(Enum):
    UNKNOWN = "unknown"
    CHECKING = "checking"
    NOT_FOUND = "not-found"
    FOUND = "found"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


class CheckState(Enum):
    IDLE = "idle"
    SCORING = "scoring"
    AWAITING_QUIET = "awaiting-quiet"
    CHECKING = "checking"
    SETTLED = "settled"


_MESSAGES = {
    BreachStatus.UNKNOWN: "",
    BreachStatus.CHECKING: "Checking breaches…",
    BreachStatus.NOT_FOUND: "Good -- this password was not found in the breach database.",
    BreachStatus.UNAVAILABLE: "Breach status unavailable right now. Try again later.",
    BreachStatus.ERROR: "Couldn't check this password for breaches.",
}


def describe(result: BreachResult) -> tuple[BreachStatus, str]:
    """Map a lookup result to the status and message shown to the user.

    Counts use fixed comma grouping (``3,533,661``) regardless of the process
    locale.
    """
    if result.outcome is Outcome.FOUND:
        return BreachStatus.FOUND, (
            f"This password has appeared {result.count:,} times in breaches"
            " -- choose a different password."
        )
    if result.outcome is Outcome.NOT_FOUND:
        return BreachStatus.NOT_FOUND, _MESSAGES[BreachStatus.NOT_FOUND]
    return BreachStatus.UNAVAILABLE, _MESSAGES[BreachStatus.UNAVAILABLE]


# ── Presentation ───────────────────────────────────────────────────────────


class PresentationSink(Protocol):
    def show_strength(self, result: ScoreResult) -> None: ...

    def show_breach(self, status: BreachStatus, message: str) -> None: ...


@dataclass
class PanelState:
    """Headless sink holding whatever was published last."""

    score: int = 0
    suggestions: list[str] = field(default_factory=list)
    status: BreachStatus = BreachStatus.UNKNOWN
    message: str = ""
    history: list[tuple[BreachStatus, str]] = field(default_factory=list)

    def show_strength(self, result: ScoreResult) -> None:
        self.score = result.score
        self.suggestions = list(result.surfaced)

    def show_breach(self, status: BreachStatus, message: str) -> None:
        self.status = status
        self.message = message
        self.history.append((status, message))


# ── Orchestrator ───────────────────────────────────────────────────────────


class CheckOrchestrator:
    """Drive one password field.

    Call :meth:`on_input` with the full field value after every keystroke,
    from inside a running event loop.  Use :meth:`wait_idle` to let pending
    work finish (tests, CLI replay).
    """

    def __init__(
        self,
        sink: PresentationSink,
        client: BreachLookupClient | None = None,
        *,
        delay: float = DEBOUNCE_SECONDS,
        digest: Callable[[str], str] = sha1_hex,
    ):
        self.sink = sink
        self.client = client or BreachLookupClient()
        self.delay = delay
        self.digest = digest
        self.state = CheckState.IDLE
        self._seq = 0
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def current_seq(self) -> int:
        return self._seq

    def on_input(self, password: str) -> ScoreResult:
        self._seq += 1
        self._cancel_timer()

        self.state = CheckState.SCORING
        result = score(password)
        self.sink.show_strength(result)

        if not password:
            self.sink.show_breach(BreachStatus.UNKNOWN, _MESSAGES[BreachStatus.UNKNOWN])
            self.state = CheckState.SETTLED
            return result

        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.delay, self._fire, self._seq, password)
        self.state = CheckState.AWAITING_QUIET
        return result

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, seq: int, password: str) -> None:
        self._timer = None
        task = asyncio.get_running_loop().create_task(self._check(seq, password))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _check(self, seq: int, password: str) -> None:
        if seq != self._seq:
            logger.debug("Skipping breach check #%d superseded before it started", seq)
            return

        self.state = CheckState.CHECKING
        self.sink.show_breach(BreachStatus.CHECKING, _MESSAGES[BreachStatus.CHECKING])

        try:
            result = await self.client.lookup(self.digest(password))
        except Exception as exc:
            logger.warning("Breach check #%d failed: %s", seq, type(exc).__name__)
            status, message = BreachStatus.ERROR, _MESSAGES[BreachStatus.ERROR]
        else:
            status, message = describe(result)

        if seq != self._seq:
            logger.debug("Discarding stale breach check #%d (current #%d)", seq, self._seq)
            return

        self.sink.show_breach(status, message)
        self.state = CheckState.SETTLED

    async def wait_idle(self) -> None:
        """Wait until no timer is armed and no lookup is in flight."""
        while self._timer is not None or self._tasks:
            if self._tasks:
                await asyncio.gather(*self._tasks)
            else:
                await asyncio.sleep(self.delay / 2 or 0.001)

    def close(self) -> None:
        """Cancel the quiet-period timer and discard any lookup still in flight."""
        self._seq += 1
        self._cancel_timer()
