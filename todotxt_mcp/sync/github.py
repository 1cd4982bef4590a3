"""GitHub implementation of the Remote Gateway (REST + GraphQL via requests)."""

from __future__ import annotations

import logging
import netrc
import os
from pathlib import Path
from typing import Any

import requests

from todotxt_mcp.enums import FactKind, RemoteState
from todotxt_mcp.exceptions import ConfigurationError
from todotxt_mcp.models.config import AppConfig, SourceConfig
from todotxt_mcp.models.remote import IssueRef, PullRequestRef, RemoteFact

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
GRAPHQL_URL = f"{API_URL}/graphql"
NETRC_HOST = "github.com"
PER_PAGE = 100

PROJECT_ITEMS_QUERY = """
query($org: String!, $number: Int!, $cursor: String) {
  organization(login: $org) {
    projectV2(number: $number) {
      items(first: 100, after: $cursor) {
        pageInfo { hasNextPage endCursor }
        nodes {
          status: fieldValueByName(name: "Status") {
            ... on ProjectV2ItemFieldSingleSelectValue { name }
          }
          content {
            __typename
            ... on Issue { url }
          }
        }
      }
    }
  }
}
"""


def get_token(netrc_path: str | Path | None = None) -> str:
    """
    Find a GitHub token: GITHUB_TOKEN first, then the github.com entry in ~/.netrc.

    Raises:
        ConfigurationError: if neither source has a token
    """
    if token := os.getenv("GITHUB_TOKEN"):
        return token

    path = Path(netrc_path) if netrc_path else Path.home() / ".netrc"
    if not path.exists():
        raise ConfigurationError(
            "no GitHub token found: set GITHUB_TOKEN environment variable or add github.com entry to ~/.netrc"
        )
    try:
        auth = netrc.netrc(str(path)).authenticators(NETRC_HOST)
    except (netrc.NetrcParseError, OSError) as e:
        raise ConfigurationError(f"failed to parse .netrc file: {e}") from e
    if auth is None:
        raise ConfigurationError("no github.com entry found in .netrc file")
    if not auth[2]:
        raise ConfigurationError("no password found for github.com in .netrc file")
    return auth[2]


def _fact(item: dict[str, Any], kind: FactKind, status: str | None = None) -> RemoteFact:
    return RemoteFact(
        url=item["html_url"],
        title=item.get("title") or "",
        state=RemoteState(item.get("state", "open")),
        updated_at=item["updated_at"],
        status=status,
        kind=kind,
    )


class GitHubGateway:
    """
    Remote Gateway for one GitHub organization project.

    Every request is a blocking call bounded by ``timeout``. HTTP errors are
    raised as ``requests.HTTPError``.
    """

    def __init__(
        self,
        organization: str,
        project_number: int,
        token: str | None = None,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self.organization = organization
        self.project_number = project_number
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Authorization"] = f"Bearer {token or get_token()}"
        self.session.headers["Accept"] = "application/vnd.github+json"
        self._login: str | None = None

    @classmethod
    def for_source(cls, source: SourceConfig, config: AppConfig) -> GitHubGateway:
        return cls(source.organization, source.project_number, timeout=config.github.timeout)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        if not url.startswith("http"):
            url = f"{API_URL}{url}"
        resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        resp.raise_for_status()
        return resp

    def _paginate(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        items: list[dict[str, Any]] = []
        url: str | None = path
        first = True
        while url:
            resp = self._request("GET", url, params=params if first else None)
            items.extend(resp.json() or [])
            url = (resp.links or {}).get("next", {}).get("url")
            first = False
        return items

    def _search(self, query: str) -> list[dict[str, Any]]:
        resp = self._request(
            "GET",
            "/search/issues",
            params={"q": query, "sort": "updated", "order": "desc", "per_page": PER_PAGE},
        )
        return resp.json().get("items", [])

    def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        payload = self._request("POST", GRAPHQL_URL, json={"query": query, "variables": variables}).json()
        if payload.get("errors"):
            messages = "; ".join(e.get("message", "") for e in payload["errors"])
            raise requests.HTTPError(f"GraphQL error: {messages}")
        return payload["data"]

    @property
    def login(self) -> str:
        if self._login is None:
            self._login = self._request("GET", "/user").json()["login"]
        return self._login

    # ------------------------------------------------------------------
    # Gateway operations
    # ------------------------------------------------------------------

    def _assigned_issues(self) -> list[dict[str, Any]]:
        items = self._paginate(
            f"/orgs/{self.organization}/issues",
            {"filter": "assigned", "state": "all", "per_page": PER_PAGE},
        )
        # The issues endpoint also lists pull requests.
        return [i for i in items if "pull_request" not in i]

    def _project_statuses(self) -> dict[str, str]:
        statuses: dict[str, str] = {}
        cursor: str | None = None
        while True:
            data = self._graphql(
                PROJECT_ITEMS_QUERY,
                {"org": self.organization, "number": self.project_number, "cursor": cursor},
            )
            items = data["organization"]["projectV2"]["items"]
            for node in items["nodes"]:
                content = node.get("content") or {}
                if content.get("__typename") != "Issue":
                    continue
                status = (node.get("status") or {}).get("name") or ""
                statuses[content["url"]] = status
            if not items["pageInfo"]["hasNextPage"]:
                break
            cursor = items["pageInfo"]["endCursor"]
        return statuses

    def fetch_issues(self, status_filters: list[str]) -> list[RemoteFact]:
        assigned = self._assigned_issues()
        logger.info("Found %d issue(s) assigned to %s", len(assigned), self.login)
        if not assigned:
            return []

        statuses = self._project_statuses()
        wanted = [f.casefold() for f in status_filters]
        facts: list[RemoteFact] = []
        for issue in assigned:
            status = statuses.get(issue["html_url"])
            if status is None:
                continue
            if wanted and status.casefold() not in wanted:
                continue
            facts.append(_fact(issue, FactKind.ISSUE, status))
        logger.info("Found %d assigned issue(s) matching status filters", len(facts))
        return facts

    def fetch_authored_prs(self) -> list[RemoteFact]:
        items = self._search(f"is:pr author:{self.login} org:{self.organization}")
        return [_fact(i, FactKind.PULL_REQUEST) for i in items]

    def fetch_review_requests(self) -> list[RemoteFact]:
        items = self._search(f"is:pr is:open review-requested:{self.login} org:{self.organization}")
        return [_fact(i, FactKind.REVIEW_REQUEST) for i in items]

    def close_issue(self, ref: IssueRef) -> None:
        self._request("PATCH", f"/repos/{ref.repo}/issues/{ref.number}", json={"state": "closed"})

    def is_still_requested_reviewer(self, ref: PullRequestRef) -> bool:
        reviews = self._paginate(f"/repos/{ref.repo}/pulls/{ref.number}/reviews", {"per_page": PER_PAGE})
        return not any((r.get("user") or {}).get("login") == self.login for r in reviews)
