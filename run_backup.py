"""Convenience shim to run the issue backup from a source checkout."""

from __future__ import annotations

from src.backup.runner import main as backup_main


if __name__ == "__main__":
    backup_main()
