"""Issue and comment collectors built on the shared page walker."""

from __future__ import annotations

from typing import Any, Dict, List

from .config import ISSUE_STATE
from .http_client import GitHubClient, fetch_all_pages


def get_issues(client: GitHubClient,
               owner: str,
               repo: str,
               *,
               state: str = ISSUE_STATE) -> List[Dict[str, Any]]:
    """Return every issue of `owner/repo` in API order; pull requests are kept verbatim."""
    return fetch_all_pages(
        lambda page: client.list_issues(owner, repo, page, state=state),
        f"issues of {owner}:{repo}",
    )


def get_issue_comments(client: GitHubClient,
                       owner: str,
                       repo: str,
                       number: int) -> List[Dict[str, Any]]:
    """Return the comments of issue `number` in API order."""
    return fetch_all_pages(
        lambda page: client.list_issue_comments(owner, repo, number, page),
        f"comments of {owner}:{repo} for issue #{number}",
    )


__all__ = ["get_issues", "get_issue_comments"]
