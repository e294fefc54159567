"""GitHub REST client, rate-limit backoff, and page walking for the issue backup."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union
from urllib.parse import parse_qs, urlparse

import requests

from src import console

from .config import BASE_URL, PER_PAGE, REQUEST_TIMEOUT, USER_AGENT


@dataclass(frozen=True)
class Page:
    """One successfully fetched page and the number of the page after it, if any."""

    records: List[Dict[str, Any]] = field(default_factory=list)
    next_page: Optional[int] = None


@dataclass(frozen=True)
class RateLimited:
    """The API quota is exhausted until the epoch timestamp `reset`."""

    reset: float
    message: str = ""

    def __str__(self) -> str:
        return self.message or f"rate limit exceeded until {self.reset:.0f}"


@dataclass(frozen=True)
class FetchError:
    """Any other failure; ends pagination for the resource."""

    message: str

    def __str__(self) -> str:
        return self.message


PageOutcome = Union[Page, RateLimited, FetchError]


def error_message(resp: requests.Response) -> str:
    """Return a short, human-readable message for a GitHub error response."""
    try:
        body = resp.json()
    except ValueError:
        body = {"text": (resp.text or "")[:300]}
    if not isinstance(body, dict):
        body = {}
    msg = body.get("message") or body.get("error") or body.get("text")
    return f"HTTP {resp.status_code}: {msg}" if msg else f"HTTP {resp.status_code}"


def next_page_number(resp: requests.Response) -> Optional[int]:
    """Extract the `page` parameter of the Link rel="next" URL."""
    links = getattr(resp, "links", None) or {}
    url = (links.get("next") or {}).get("url")
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get("page") or []
    if not values or not values[0].isdigit():
        return None
    return int(values[0])


def is_rate_limited(resp: requests.Response) -> bool:
    """Return True when GitHub reports the primary quota as exhausted."""
    headers = resp.headers or {}
    return resp.status_code in (403, 429) and headers.get("X-RateLimit-Remaining") == "0"


def rate_limit_reset(resp: requests.Response) -> float:
    """Return the epoch reset time, or 0 when the header is missing or garbled."""
    reset = (resp.headers or {}).get("X-RateLimit-Reset")
    if reset and str(reset).isdigit():
        return float(reset)
    return 0.0


class GitHubClient:
    """Authenticated access to the two paginated issue listings."""

    def __init__(self,
                 token: Optional[str] = None,
                 *,
                 base_url: str = BASE_URL,
                 timeout: float = REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github.v3+json",
                "User-Agent": USER_AGENT,
            }
        )
        if token:
            self.session.headers["Authorization"] = f"token {token}"

    def close(self) -> None:
        """Release the pooled connections of the underlying session."""
        self.session.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get_page(self, path: str, params: Dict[str, Any]) -> PageOutcome:
        """GET one page of a list endpoint and classify the response."""
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            return FetchError(f"GET {url}: {exc}")

        if is_rate_limited(resp):
            return RateLimited(reset=rate_limit_reset(resp), message=error_message(resp))
        if not 200 <= resp.status_code < 300:
            return FetchError(error_message(resp))
        try:
            batch = resp.json()
        except ValueError as exc:
            return FetchError(f"invalid JSON from {url}: {exc}")
        if not isinstance(batch, list):
            return FetchError(f"expected a JSON array from {url}, got {type(batch).__name__}")
        return Page(records=batch, next_page=next_page_number(resp))

    def list_issues(self, owner: str, repo: str, page: int, *, state: str = "all") -> PageOutcome:
        """Fetch one page of the repository's issues."""
        return self.get_page(
            f"/repos/{owner}/{repo}/issues",
            {"state": state, "per_page": PER_PAGE, "page": page},
        )

    def list_issue_comments(self, owner: str, repo: str, number: int, page: int) -> PageOutcome:
        """Fetch one page of the comments on issue `number`."""
        return self.get_page(
            f"/repos/{owner}/{repo}/issues/{number}/comments",
            {"per_page": PER_PAGE, "page": page},
        )


def wait_for_rate_limit_reset(outcome: PageOutcome) -> bool:
    """Sleep until the rate limit resets; return whether `outcome` was a rate-limit error."""
    if not isinstance(outcome, RateLimited):
        return False
    delta = outcome.reset - time.time()
    console.rate_limit(f"rate limit hit; sleeping for {max(0.0, delta):.0f}s before retrying")
    if delta > 0:
        time.sleep(delta)
    return True


def fetch_all_pages(fetch_page: Callable[[int], PageOutcome], what: str) -> List[Dict[str, Any]]:
    """Walk pages from 1 until the last one; a non-rate-limit failure keeps what was fetched."""
    results: List[Dict[str, Any]] = []
    page = 1
    count = 1
    while True:
        outcome = fetch_page(page)
        while wait_for_rate_limit_reset(outcome):
            outcome = fetch_page(page)
        if isinstance(outcome, FetchError):
            console.warn(
                f"unable to get {what} (page {count}); {outcome} "
                f"-> keeping {len(results)} records"
            )
            break  # partial results

        results.extend(outcome.records)
        if outcome.next_page is None:
            break
        page = outcome.next_page
        count += 1
    return results


__all__ = [
    "Page",
    "RateLimited",
    "FetchError",
    "PageOutcome",
    "GitHubClient",
    "error_message",
    "next_page_number",
    "is_rate_limited",
    "rate_limit_reset",
    "wait_for_rate_limit_reset",
    "fetch_all_pages",
]
