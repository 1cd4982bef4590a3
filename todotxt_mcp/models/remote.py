"""Remote tracker models: normalized facts and per-record tracker references."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from todotxt_mcp.enums import FactKind, RemoteState
from todotxt_mcp.models.task import LABEL_ISSUE, LABEL_PR, LABEL_REPO, TaskRecord

GITHUB_URL = "https://github.com"


def extract_repo_from_url(url: str) -> str:
    """
    Extract ``owner/name`` from a GitHub issue or pull request URL.

    Args:
        url: URL such as https://github.com/acme/widgets/issues/12

    Returns:
        "acme/widgets", or an empty string if the URL is too short
    """
    parts = url.split("/")
    if len(parts) >= 5:
        return f"{parts[3]}/{parts[4]}"
    return ""


class RemoteFact(BaseModel):
    """Normalized snapshot of one remote issue or pull request."""

    url: str
    title: str
    state: RemoteState
    updated_at: datetime
    status: str | None = None
    kind: FactKind = FactKind.ISSUE

    @property
    def repo(self) -> str:
        return extract_repo_from_url(self.url)

    @property
    def number(self) -> str:
        return self.url.rstrip("/").rsplit("/", 1)[-1]

    @property
    def is_pull_request(self) -> bool:
        return self.kind in (FactKind.PULL_REQUEST, FactKind.REVIEW_REQUEST)


@dataclass(frozen=True)
class IssueRef:
    repo: str
    number: str

    @property
    def url(self) -> str:
        return f"{GITHUB_URL}/{self.repo}/issues/{self.number}"


@dataclass(frozen=True)
class PullRequestRef:
    repo: str
    number: str

    @property
    def url(self) -> str:
        return f"{GITHUB_URL}/{self.repo}/pull/{self.number}"


@dataclass(frozen=True)
class Untracked:
    url: None = None


TrackerRef = IssueRef | PullRequestRef | Untracked

UNTRACKED = Untracked()


def tracker_ref(record: TaskRecord) -> TrackerRef:
    """
    Work out which remote item, if any, a record mirrors.

    A record is tracked when it carries a ``repo`` label plus either an
    ``issue`` or a ``pr`` label. ``issue`` wins if both are present.
    """
    repo = record.label(LABEL_REPO)
    if not repo:
        return UNTRACKED
    if issue := record.label(LABEL_ISSUE):
        return IssueRef(repo=repo, number=issue)
    if pr := record.label(LABEL_PR):
        return PullRequestRef(repo=repo, number=pr)
    return UNTRACKED
