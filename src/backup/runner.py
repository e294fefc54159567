"""Entry point that streams every issue of a repository, followed by its comments, as JSON."""

from __future__ import annotations

import json
import os
import sys
from typing import Any, List, Optional, TextIO

from src import console
from src.retrieval.collectors import get_issue_comments, get_issues
from src.retrieval.config import ISSUE_STATE, TOKEN_ENV_NAME
from src.retrieval.http_client import GitHubClient

from .config import build_arg_parser, parse_args, resolve_settings


def write_record(out: TextIO, value: Any) -> None:
    """Write one JSON value followed by a blank separator line."""
    out.write(json.dumps(value, indent=2, ensure_ascii=False))
    out.write("\n\n")
    out.flush()


def discard_stdout() -> None:
    """Point stdout at devnull so the interpreter's exit flush cannot fail again."""
    try:
        fd = sys.stdout.fileno()
    except (AttributeError, OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, fd)
    os.close(devnull)


def backup_issues(client: GitHubClient,
                  owner: str,
                  repo: str,
                  *,
                  out: Optional[TextIO] = None,
                  state: str = ISSUE_STATE) -> None:
    """Emit each issue of `owner/repo` and, when it has any, the array of its comments."""
    if not owner or not repo:
        raise ValueError(f"owner and repository are required, got {owner!r}/{repo!r}")
    if out is None:
        out = sys.stdout

    issues = get_issues(client, owner, repo, state=state)
    for issue in issues:
        number = issue.get("number")
        console.info(f"issue #{number}")
        write_record(out, issue)

        comment_count = issue.get("comments") or 0
        if comment_count > 0:
            console.info(f"{comment_count} comments of issue #{number}")
            comments = get_issue_comments(client, owner, repo, number)
            write_record(out, comments)


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point; exits with status 1 on bad flags or a failed backup."""

    args = parse_args(argv)
    console.set_quiet(args.quiet)
    settings = resolve_settings(args)

    if not settings.owner:
        console.error("owner name not specified; see --owner flag")
        build_arg_parser().print_usage(sys.stderr)
        sys.exit(1)
    if not settings.repo:
        console.error("repository name not specified; see --repo flag")
        build_arg_parser().print_usage(sys.stderr)
        sys.exit(1)
    if not settings.token:
        console.warn(
            f"OAuth token not specified; use --token flag or set {TOKEN_ENV_NAME} environment variable"
        )

    client = GitHubClient(settings.token)
    try:
        backup_issues(client, settings.owner, settings.repo, state=settings.state)
    except BrokenPipeError as exc:
        discard_stdout()
        console.error(f"{settings.owner}/{settings.repo}: {exc}")
        sys.exit(1)
    except Exception as exc:
        console.error(f"{settings.owner}/{settings.repo}: {exc}")
        sys.exit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
