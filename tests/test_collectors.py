"""Tests for src.retrieval.collectors wiring client listings into the page walker.

Run with coverage to exercise the data collection logic:
    pytest tests/test_collectors.py --maxfail=1 -v --cov=src.retrieval.collectors --cov-report=term-missing
"""

from unittest.mock import MagicMock, patch

from src.retrieval import collectors
from src.retrieval.http_client import FetchError, Page


def test_get_issues_walks_all_pages():
    client = MagicMock()
    client.list_issues.side_effect = [
        Page([{"number": 1}], next_page=2),
        Page([{"number": 2, "pull_request": {}}]),
    ]
    issues = collectors.get_issues(client, "acme", "widgets")
    assert [i["number"] for i in issues] == [1, 2]
    pages = [call.args[2] for call in client.list_issues.call_args_list]
    assert pages == [1, 2]
    assert client.list_issues.call_args.kwargs == {"state": "all"}


def test_get_issues_passes_state():
    client = MagicMock()
    client.list_issues.return_value = Page([])
    assert collectors.get_issues(client, "o", "r", state="open") == []
    client.list_issues.assert_called_once_with("o", "r", 1, state="open")


def test_get_issue_comments_scopes_to_issue(capsys):
    client = MagicMock()
    client.list_issue_comments.side_effect = [Page([{"id": 1}], next_page=2), FetchError("HTTP 500")]
    comments = collectors.get_issue_comments(client, "o", "r", 42)
    assert comments == [{"id": 1}]
    client.list_issue_comments.assert_called_with("o", "r", 42, 2)
    assert "comments of o:r for issue #42 (page 2)" in capsys.readouterr().err


@patch("src.retrieval.collectors.fetch_all_pages", return_value=[{"id": 9}])
def test_get_issues_describes_resource(mock_fetch):
    assert collectors.get_issues(MagicMock(), "o", "r") == [{"id": 9}]
    assert mock_fetch.call_args.args[1] == "issues of o:r"
