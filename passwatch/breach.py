"""Breach checking against the Pwned Passwords range API (k-anonymity).

Only the first 5 hex characters of the SHA-1 digest are ever sent over the
network.  The password, the full digest and the 35-character suffix stay on
the client; matching happens locally against the returned suffix list.
"""

import hashlib
import logging
import re
from dataclasses import dataclass
from enum import Enum

import httpx
import requests

from passwatch.errors import MalformedResponse, NetworkFailure

logger = logging.getLogger(__name__)

RANGE_API = "https://api.pwnedpasswords.com/range"
REQUEST_TIMEOUT = 10
USER_AGENT = "passwatch/1.0"
PREFIX_LENGTH = 5

_HEADERS = {"User-Agent": USER_AGENT, "Add-Padding": "true"}
_NON_DIGITS = re.compile(r"\D")


# ── Digest glue ────────────────────────────────────────────────────────────


def sha1_hex(text: str) -> str:
    """Return the SHA-1 of *text* (UTF-8) as 40 uppercase hex characters."""
    return hashlib.sha1(text.encode("utf-8")).hexdigest().upper()


@dataclass(frozen=True)
class RangeQueryKey:
    prefix: str
    suffix: str

    @classmethod
    def from_digest(cls, digest: str) -> "RangeQueryKey":
        digest = digest.upper()
        if len(digest) != 40:
            raise ValueError(f"Expected a 40-character hex digest, got {len(digest)} characters")
        return cls(digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:])


# ── Results ────────────────────────────────────────────────────────────────


class Outcome(Enum):
    NOT_FOUND = "not-found"
    FOUND = "found"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class BreachResult:
    outcome: Outcome
    count: int = 0

    @classmethod
    def found(cls, count: int) -> "BreachResult":
        """Build a result for *count* occurrences; zero collapses to NOT_FOUND."""
        if count <= 0:
            return NOT_FOUND
        return cls(Outcome.FOUND, count)

    @property
    def breached(self) -> bool:
        return self.outcome is Outcome.FOUND


NOT_FOUND = BreachResult(Outcome.NOT_FOUND)
UNAVAILABLE = BreachResult(Outcome.UNAVAILABLE)


# ── Response parsing ───────────────────────────────────────────────────────


def parse_count(raw: str) -> int:
    """Strip everything but digits from *raw*; anything left unparsable is 0."""
    digits = _NON_DIGITS.sub("", raw)
    return int(digits) if digits else 0


def parse_range_response(body: str, suffix: str) -> BreachResult:
    """Find *suffix* in a range response body of ``SUFFIX:COUNT`` lines.

    Lines may end in CRLF or LF.  Lines that do not match are never inspected
    beyond their suffix, so noise elsewhere in the body is harmless.  A
    matching line without a count field raises :exc:`MalformedResponse`.
    """
    for line in body.splitlines():
        if not line:
            continue
        hash_suffix, sep, count = line.partition(":")
        if hash_suffix != suffix:
            continue
        if not sep:
            raise MalformedResponse("Matching range line has no count field")
        return BreachResult.found(parse_count(count))
    return NOT_FOUND


# ── Async client (orchestrated, per keystroke) ─────────────────────────────


class BreachLookupClient:
    """Asynchronous range-query client.

    ``lookup`` never raises for network or protocol trouble; it returns
    :data:`UNAVAILABLE` instead.  Pass *client* to share a
    connection pool or to substitute a fake transport.
    """

    def __init__(
        self,
        base_url: str = RANGE_API,
        *,
        timeout: float = REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    async def lookup(self, digest: str) -> BreachResult:
        key = RangeQueryKey.from_digest(digest)
        try:
            body = await self._fetch_range(key.prefix)
            return parse_range_response(body, key.suffix)
        except (NetworkFailure, MalformedResponse) as exc:
            logger.warning("Range lookup for prefix %s unavailable: %s", key.prefix, exc)
            return UNAVAILABLE

    async def _fetch_range(self, prefix: str) -> str:
        url = f"{self.base_url}/{prefix}"
        try:
            if self._client is not None:
                resp = await self._client.get(url, headers=_HEADERS, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout, headers=_HEADERS) as client:
                    resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise NetworkFailure(f"{type(exc).__name__} while fetching range") from exc

        if resp.status_code != 200:
            raise NetworkFailure(f"HTTP {resp.status_code}")
        return resp.text


# ── Sync lookup (one-shot CLI path) ────────────────────────────────────────


def check_breach(
    password: str,
    *,
    base_url: str = RANGE_API,
    timeout: float = REQUEST_TIMEOUT,
) -> BreachResult:
    """Return how often *password* appears in known data breaches.

    Same protocol as :class:`BreachLookupClient`, performed with a blocking
    request.  Failures come back as :data:`UNAVAILABLE`.
    """
    key = RangeQueryKey.from_digest(sha1_hex(password))
    try:
        resp = requests.get(
            f"{base_url.rstrip('/')}/{key.prefix}",
            headers=_HEADERS,
            timeout=timeout,
        )
    except requests.RequestException as exc:
        logger.warning("Range lookup for prefix %s failed: %s", key.prefix, type(exc).__name__)
        return UNAVAILABLE

    if resp.status_code != 200:
        logger.warning("Range lookup for prefix %s returned HTTP %s", key.prefix, resp.status_code)
        return UNAVAILABLE

    try:
        return parse_range_response(resp.text, key.suffix)
    except MalformedResponse as exc:
        logger.warning("Range lookup for prefix %s unusable: %s", key.prefix, exc)
        return UNAVAILABLE
