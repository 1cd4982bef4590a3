"""Pytest configuration and fixtures for todotxt-mcp tests."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from todotxt_mcp.enums import FactKind, RemoteState
from todotxt_mcp.models.remote import IssueRef, PullRequestRef, RemoteFact


class FakeGateway:
    """
    In-memory Remote Gateway.

    Records every close and reviewer lookup so tests can assert on the calls
    the reconciler made.
    """

    def __init__(self, issues=None, authored=None, requested=None):
        self.issues = list(issues or [])
        self.authored = list(authored or [])
        self.requested = list(requested or [])
        self.closed: list[IssueRef] = []
        self.reviewed: set[str] = set()
        self.fail_close: set[str] = set()
        self.fail_fetch = False
        self.issue_filters: list[list[str]] = []

    def fetch_issues(self, status_filters):
        if self.fail_fetch:
            raise ConnectionError("network down")
        self.issue_filters.append(status_filters)
        return list(self.issues)

    def fetch_authored_prs(self):
        return list(self.authored)

    def fetch_review_requests(self):
        return list(self.requested)

    def close_issue(self, ref: IssueRef) -> None:
        if ref.url in self.fail_close:
            raise ConnectionError("close failed")
        self.closed.append(ref)
        # GitHub stamps its own updated_at on every close.
        self.issues = [
            f.model_copy(update={"state": RemoteState.CLOSED, "updated_at": datetime.now(timezone.utc)})
            if f.url == ref.url
            else f
            for f in self.issues
        ]

    def is_still_requested_reviewer(self, ref: PullRequestRef) -> bool:
        return ref.url not in self.reviewed


def make_fact(
    number=1,
    title="Fix login",
    state=RemoteState.OPEN,
    status="Planned",
    kind=FactKind.ISSUE,
    repo="acme/widgets",
    updated_at=datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc),
):
    segment = "issues" if kind == FactKind.ISSUE else "pull"
    return RemoteFact(
        url=f"https://github.com/{repo}/{segment}/{number}",
        title=title,
        state=state,
        updated_at=updated_at,
        status=status,
        kind=kind,
    )


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point the tools at an empty data directory."""
    monkeypatch.setenv("TODOTXT_MCP_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def mock_session():
    """A requests.Session stand-in whose responses are queued per test."""
    session = MagicMock()
    session.headers = {}
    return session


def mock_response(payload, links=None, status_code=200):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.links = links or {}
    resp.raise_for_status.return_value = None
    return resp
