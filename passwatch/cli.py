"""Passwatch command-line interface.

Usage examples:
    python -m passwatch check mypassword
    python -m passwatch check -f passwords.txt --offline
    python -m passwatch type 'correct horse' --interval 0.2
"""

import argparse
import asyncio
import logging
import sys

from passwatch.breach import check_breach
from passwatch.orchestrator import (
    DEBOUNCE_SECONDS,
    BreachStatus,
    CheckOrchestrator,
    PanelState,
    describe,
)
from passwatch.strength import ScoreResult, score

_LABELS = {
    BreachStatus.UNKNOWN: "Unknown",
    BreachStatus.CHECKING: "Checking",
    BreachStatus.NOT_FOUND: "Safe",
    BreachStatus.FOUND: "BREACHED",
    BreachStatus.UNAVAILABLE: "Unavailable",
    BreachStatus.ERROR: "Error",
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passwatch",
        description="Score passwords and check them against known data breaches.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    # ── check ──────────────────────────────────────────────────────────
    check_p = sub.add_parser(
        "check", help="Score passwords and look them up once",
    )
    check_p.add_argument("passwords", nargs="*", help="Passwords to check")
    check_p.add_argument(
        "-f", "--file",
        help="Read passwords from a file (one per line)",
    )
    check_p.add_argument(
        "--offline",
        action="store_true",
        help="Skip the breach lookup and only score",
    )

    # ── type ───────────────────────────────────────────────────────────
    type_p = sub.add_parser(
        "type", help="Replay a password keystroke by keystroke",
    )
    type_p.add_argument("password", help="Password to type")
    type_p.add_argument(
        "--interval", type=float, default=0.15,
        help="Seconds between keystrokes (default: 0.15)",
    )
    type_p.add_argument(
        "--delay", type=float, default=DEBOUNCE_SECONDS,
        help=f"Quiet period before a lookup (default: {DEBOUNCE_SECONDS})",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "check":
        return _cmd_check(args)
    if args.command == "type":
        return _cmd_type(args)

    parser.print_help()
    return 0


def _mask(password: str) -> str:
    return password[:1] + "*" * (len(password) - 1)


def _strength_lines(report: ScoreResult) -> list[str]:
    filled = report.score // 20
    bar = "#" * filled + "-" * (5 - filled)
    lines = [f"Strength: [{bar}] {report.score}/100 ({report.band})"]
    lines.extend(f"! {s}" for s in report.surfaced)
    return lines


def _cmd_check(args: argparse.Namespace) -> int:
    passwords = list(args.passwords)

    if args.file:
        with open(args.file, encoding="utf-8") as f:
            passwords.extend(line.rstrip("\r\n") for line in f if line.strip())

    if not passwords:
        print("Error: provide passwords as arguments or via --file", file=sys.stderr)
        return 1

    breached = False
    for pwd in passwords:
        if args.offline:
            status, message = BreachStatus.UNKNOWN, "breach lookup skipped"
        else:
            result = check_breach(pwd)
            breached = breached or result.breached
            status, message = describe(result)

        print(f"  {_LABELS[status]:<11} '{_mask(pwd)}' -- {message}")
        for line in _strength_lines(score(pwd)):
            print(f"              {line}")

    return 1 if breached else 0


class _PrintingPanel(PanelState):
    """Panel that echoes every publication to stdout."""

    def show_strength(self, result: ScoreResult) -> None:
        super().show_strength(result)
        print(f"  {result.score:>3}/100  {', '.join(result.surfaced) or 'Strength: Strong'}")

    def show_breach(self, status: BreachStatus, message: str) -> None:
        super().show_breach(status, message)
        suffix = f" -- {message}" if message else ""
        print(f"  [{status.value}]{suffix}")


async def _replay(password: str, interval: float, delay: float) -> PanelState:
    panel = _PrintingPanel()
    orchestrator = CheckOrchestrator(panel, delay=delay)
    for i in range(1, len(password) + 1):
        orchestrator.on_input(password[:i])
        await asyncio.sleep(interval)
    await orchestrator.wait_idle()
    return panel


def _cmd_type(args: argparse.Namespace) -> int:
    panel = asyncio.run(_replay(args.password, args.interval, args.delay))
    return 1 if panel.status is BreachStatus.FOUND else 0


if __name__ == "__main__":
    sys.exit(main())
