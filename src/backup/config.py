"""Command-line configuration for the issue backup entry point."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import List, Optional

from src import console
from src.retrieval.config import ISSUE_STATE, ISSUE_STATES, TOKEN_ENV_NAME

EXAMPLE = f"""
Example:

  issue-backup --owner USER --repo REPO --token ACCESS_TOKEN > issues.json

To create a personal access token on GitHub visit https://github.com/settings/tokens

If the environment variable {TOKEN_ENV_NAME} is set, the access token will be read from there.
"""


@dataclass(frozen=True)
class BackupSettings:
    """Resolved runtime settings for one repository backup."""

    owner: str
    repo: str
    token: Optional[str]
    state: str
    quiet: bool


def build_arg_parser() -> argparse.ArgumentParser:
    """Return the CLI parser used by the backup entry point."""

    parser = argparse.ArgumentParser(
        prog="issue-backup",
        description="Store a backup of GitHub issues and issue comments in JSON format on stdout.",
        epilog=EXAMPLE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--owner", default="", help="owner name (GitHub user or organization)")
    parser.add_argument("--repo", default="", help="repository name")
    parser.add_argument("--token", default="", help="GitHub OAuth personal access token")
    parser.add_argument("--state", default=ISSUE_STATE, choices=ISSUE_STATES,
                        help="which issues to back up (default: %(default)s)")
    parser.add_argument("-q", "--quiet", action="store_true", help="suppress non-error messages")
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments; accepts argv overrides for testing."""

    parser = build_arg_parser()
    return parser.parse_args(argv)


def resolve_token(flag_token: Optional[str]) -> Optional[str]:
    """Prefer the environment variable over the --token flag."""

    env_token = os.getenv(TOKEN_ENV_NAME)
    if env_token is not None:
        console.info(f"using OAuth token from {TOKEN_ENV_NAME} environment variable")
        return env_token or None
    return flag_token or None


def resolve_settings(args: Optional[argparse.Namespace] = None) -> BackupSettings:
    """Return immutable settings built from parsed arguments."""

    args = args or parse_args()
    return BackupSettings(
        owner=(args.owner or "").strip(),
        repo=(args.repo or "").strip(),
        token=resolve_token(args.token),
        state=args.state,
        quiet=bool(args.quiet),
    )


__all__ = [
    "EXAMPLE",
    "BackupSettings",
    "build_arg_parser",
    "parse_args",
    "resolve_token",
    "resolve_settings",
]
