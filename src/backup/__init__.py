"""Repository issue backup: orchestration and command-line wiring."""

from .runner import backup_issues, main

__all__ = ["backup_issues", "main"]
