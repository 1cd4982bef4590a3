"""Remote Gateway interface consumed by the sync reconciler."""

from __future__ import annotations

from typing import Protocol

from todotxt_mcp.models.remote import IssueRef, PullRequestRef, RemoteFact


class RemoteGateway(Protocol):
    """
    What the reconciler needs from a remote tracker.

    Implementations own authentication and transport. Fetch methods raise on
    failure; the reconciler turns that into a SyncError.
    """

    def fetch_issues(self, status_filters: list[str]) -> list[RemoteFact]: ...

    def fetch_authored_prs(self) -> list[RemoteFact]: ...

    def fetch_review_requests(self) -> list[RemoteFact]: ...

    def close_issue(self, ref: IssueRef) -> None: ...

    def is_still_requested_reviewer(self, ref: PullRequestRef) -> bool: ...
