"""Central configuration constants for the issue backup retrieval workflow."""

from __future__ import annotations

import os

TOKEN_ENV_NAME = "ISSUE_BACKUP_GITHUB_TOKEN"
USER_AGENT = "issue-backup/1.0"
BASE_URL = "https://api.github.com"
PER_PAGE = 100
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "90"))
ISSUE_STATE = "all"
ISSUE_STATES = ("open", "closed", "all")

__all__ = [
    "TOKEN_ENV_NAME",
    "USER_AGENT",
    "BASE_URL",
    "PER_PAGE",
    "REQUEST_TIMEOUT",
    "ISSUE_STATE",
    "ISSUE_STATES",
]
