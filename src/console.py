"""Tagged diagnostic messages written to stderr, away from the data stream."""

from __future__ import annotations

import sys

QUIET = False


def set_quiet(quiet: bool) -> None:
    """Mute informational and rate-limit messages; warnings and errors still print."""
    global QUIET
    QUIET = bool(quiet)


def info(msg: str) -> None:
    """Progress message, muted by quiet mode."""
    if not QUIET:
        print(f"[info] {msg}", file=sys.stderr)


def rate_limit(msg: str) -> None:
    """Rate-limit sleep notice, muted by quiet mode."""
    if not QUIET:
        print(f"[rate-limit] {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    """Non-fatal failure; always printed."""
    print(f"[warn] {msg}", file=sys.stderr)


def error(msg: str) -> None:
    """Fatal failure; always printed."""
    print(f"[error] {msg}", file=sys.stderr)


__all__ = ["QUIET", "set_quiet", "info", "rate_limit", "warn", "error"]
