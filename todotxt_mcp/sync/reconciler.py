"""Two-way reconciliation between the local todo list and a remote tracker.

One call to sync_source() is one full cycle for one source:

1. determine cursor: ``None`` means first sync, the remote wins by default
2. check remote delta: did anything change remotely since the cursor?
3. push local (only with a cursor and no remote changes): close remote issues
   for locally completed todos, mark them ``synced:true``
4. fetch facts: assigned issues (status filtered), authored PRs, review requests
5. merge facts into the local records
6. persist the merged records
7. hand back the new cursor; the caller stores it only after step 6 succeeded

Arbitration: with remote changes since the cursor, remote fields overwrite
local ones. Without them, local priority and done state win and only the
title is refreshed. Pull requests and review requests are read-only here, so
the remote always wins for them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path

from todotxt_mcp.enums import FactKind, RemoteState
from todotxt_mcp.exceptions import SyncError
from todotxt_mcp.models.config import AppConfig, SourceConfig
from todotxt_mcp.models.remote import IssueRef, PullRequestRef, RemoteFact, tracker_ref
from todotxt_mcp.models.task import (
    LABEL_ISSUE,
    LABEL_PR,
    LABEL_REPO,
    LABEL_SYNCED,
    LABEL_URL,
    TaskRecord,
)
from todotxt_mcp.store import RecordStore
from todotxt_mcp.sync.cursor import CursorStore
from todotxt_mcp.sync.gateway import RemoteGateway

logger = logging.getLogger(__name__)

GITHUB_PROJECT = "github"
IN_PROGRESS_STATUS = "in progress"
REVIEW_PREFIX = "Review: "
SYNCED_TRUE = "true"


@dataclass
class MergeOutcome:
    """Result of merging facts into local records."""

    records: list[TaskRecord]
    created: list[TaskRecord] = field(default_factory=list)
    updated: list[TaskRecord] = field(default_factory=list)


@dataclass
class SyncResult:
    """Result of one sync cycle for one source."""

    source: str
    records: list[TaskRecord]
    cursor: datetime
    has_remote_updates: bool
    remote_authoritative: bool
    pushed: list[TaskRecord] = field(default_factory=list)
    created: list[TaskRecord] = field(default_factory=list)
    updated: list[TaskRecord] = field(default_factory=list)


def status_matches(status: str | None, filters: Iterable[str]) -> bool:
    """Case-insensitive substring match; no filters means everything matches."""
    filters = [f.casefold() for f in filters if f.strip()]
    if not filters:
        return True
    current = (status or "").casefold()
    return any(f in current for f in filters)


def derive_priority(fact: RemoteFact) -> str | None:
    if fact.status and fact.status.casefold() == IN_PROGRESS_STATUS:
        return "A"
    return None


def fact_description(fact: RemoteFact) -> str:
    if fact.kind == FactKind.REVIEW_REQUEST:
        return REVIEW_PREFIX + fact.title
    return fact.title


def has_remote_updates(facts: Iterable[RemoteFact], cursor: datetime | None) -> bool:
    if cursor is None:
        return False
    for fact in facts:
        if fact.updated_at > cursor:
            logger.info("Found remote update: %s updated at %s (after %s)", fact.title, fact.updated_at, cursor)
            return True
    return False


def record_from_fact(fact: RemoteFact, today: date) -> TaskRecord:
    done = fact.state == RemoteState.CLOSED
    number_label = LABEL_PR if fact.is_pull_request else LABEL_ISSUE
    return TaskRecord(
        done=done,
        completion_date=today if done else None,
        priority=derive_priority(fact),
        description=fact_description(fact),
        projects=[GITHUB_PROJECT],
        labels={
            LABEL_REPO: fact.repo,
            number_label: fact.number,
            LABEL_URL: fact.url,
        },
    )


def apply_remote(record: TaskRecord, fact: RemoteFact, today: date) -> None:
    """Overwrite local fields with the remote ones (remote is authoritative)."""
    if fact.state == RemoteState.CLOSED and not record.done:
        record.done = True
        record.completion_date = today
    elif fact.state == RemoteState.OPEN and record.done:
        record.completion_date = None
        record.done = False

    record.description = fact_description(fact)
    record.priority = derive_priority(fact)
    if GITHUB_PROJECT not in record.projects:
        record.projects.append(GITHUB_PROJECT)
    record.labels[LABEL_URL] = fact.url
    if fact.repo:
        record.labels.setdefault(LABEL_REPO, fact.repo)


def apply_local_wins(record: TaskRecord, fact: RemoteFact) -> None:
    """Refresh only the title; local priority and done state are kept."""
    record.description = fact_description(fact)
    if fact.repo:
        record.labels.setdefault(LABEL_REPO, fact.repo)


def merge_facts(
    records: list[TaskRecord],
    facts: Iterable[RemoteFact],
    remote_updates: bool,
    today: date,
) -> MergeOutcome:
    """
    Merge remote facts into local records.

    Args:
        records: Current local records; matched ones are updated in place
        facts: Remote facts in fetch order
        remote_updates: True if the remote changed since the last sync
        today: Completion date for todos that become done

    Returns:
        MergeOutcome with the full record list (existing order kept, new
        records appended) and the created/updated subsets
    """
    by_url: dict[str, TaskRecord] = {}
    for record in records:
        if (url := tracker_ref(record).url) is not None:
            by_url.setdefault(url, record)

    outcome = MergeOutcome(records=list(records))
    for fact in facts:
        existing = by_url.get(fact.url)
        if existing is None:
            logger.debug("Creating todo for %s", fact.url)
            created = record_from_fact(fact, today)
            by_url[fact.url] = created
            outcome.records.append(created)
            outcome.created.append(created)
            continue

        logger.debug("Updating todo for %s", fact.url)
        if remote_updates or fact.is_pull_request:
            apply_remote(existing, fact, today)
        else:
            apply_local_wins(existing, fact)
        outcome.updated.append(existing)

    return outcome


def push_completed(records: Iterable[TaskRecord], gateway: RemoteGateway) -> list[TaskRecord]:
    """
    Close remote issues for todos completed locally.

    Pull requests are never closed from here. A failed close is logged and
    the todo stays unsynced, so the next cycle retries it.

    Returns:
        The records that were closed remotely and marked ``synced:true``
    """
    pushed: list[TaskRecord] = []
    for record in records:
        if not record.done or record.label(LABEL_SYNCED) == SYNCED_TRUE:
            continue
        ref = tracker_ref(record)
        if not isinstance(ref, IssueRef):
            continue
        try:
            gateway.close_issue(ref)
        except Exception as e:
            logger.warning("Failed to close remote issue %s for todo '%s': %s", ref.url, record.description, e)
            continue
        record.labels[LABEL_SYNCED] = SYNCED_TRUE
        pushed.append(record)
        logger.info("Closed remote issue %s", ref.url)
    return pushed


def _still_requested(gateway: RemoteGateway, fact: RemoteFact) -> bool:
    ref = PullRequestRef(repo=fact.repo, number=fact.number)
    try:
        return gateway.is_still_requested_reviewer(ref)
    except Exception as e:
        logger.warning("Failed to check review state of %s, keeping it: %s", fact.url, e)
        return True


def fetch_facts(gateway: RemoteGateway, source: SourceConfig) -> list[RemoteFact]:
    """
    Fetch the three fact groups for a source.

    Raises:
        SyncError: if any group cannot be fetched
    """
    try:
        issues = gateway.fetch_issues(list(source.status_filters))
    except Exception as e:
        raise SyncError(f"failed to fetch issues for '{source.name}': {e}") from e
    try:
        authored = gateway.fetch_authored_prs()
    except Exception as e:
        raise SyncError(f"failed to fetch authored pull requests for '{source.name}': {e}") from e
    try:
        requested = gateway.fetch_review_requests()
    except Exception as e:
        raise SyncError(f"failed to fetch review requests for '{source.name}': {e}") from e

    issues = [f for f in issues if status_matches(f.status, source.status_filters)]
    requested = [f for f in requested if _still_requested(gateway, f)]
    logger.info(
        "Fetched %d issue(s), %d authored PR(s), %d review request(s) for '%s'",
        len(issues),
        len(authored),
        len(requested),
        source.name,
    )
    return issues + authored + requested


def sync_source(
    store: RecordStore,
    gateway: RemoteGateway,
    source: SourceConfig,
    cursor: datetime | None,
    now: datetime | None = None,
) -> SyncResult:
    """
    Run one full sync cycle for one source.

    Args:
        store: Local record store; read once and written once
        gateway: Remote tracker access
        source: Source configuration (name, status filters)
        cursor: Last successful sync for this source, None for the first run
        now: Clock override for completion dates; the returned cursor is always
            taken after the store was saved

    Returns:
        SyncResult whose ``cursor`` is the value to persist for the next run

    Raises:
        SyncError: if fetching fails; nothing is written in that case
    """
    now = now or datetime.now(timezone.utc)
    today = now.astimezone().date()

    records = store.load()
    facts: list[RemoteFact] | None = None
    remote_updates = False
    pushed: list[TaskRecord] = []

    if cursor is not None:
        logger.info("Checking for remote updates to '%s' since %s", source.name, cursor.isoformat())
        facts = fetch_facts(gateway, source)
        remote_updates = has_remote_updates(facts, cursor)

    if remote_updates:
        logger.info("Remote updated since last sync, accepting remote changes")
    elif cursor is not None:
        logger.info("No remote updates since last sync, pushing local changes first")
        pushed = push_completed(records, gateway)
        if pushed:
            facts = None
    else:
        logger.info("First sync for '%s', remote is authoritative", source.name)

    if facts is None:
        facts = fetch_facts(gateway, source)

    remote_wins = remote_updates or cursor is None
    outcome = merge_facts(records, facts, remote_wins, today)
    store.save(outcome.records)
    # Our own closes stamp remote updated_at; the cursor has to come after them.
    synced_at = datetime.now(timezone.utc)

    return SyncResult(
        source=source.name,
        records=outcome.records,
        cursor=synced_at,
        has_remote_updates=remote_updates,
        remote_authoritative=remote_wins,
        pushed=pushed,
        created=outcome.created,
        updated=outcome.updated,
    )


GatewayFactory = Callable[[SourceConfig, AppConfig], RemoteGateway]


def sync_all(
    directory: str | Path,
    config: AppConfig,
    gateway_factory: GatewayFactory,
    names: Iterable[str] | None = None,
) -> list[SyncResult]:
    """
    Sync every configured source (or only ``names``) in order.

    Each source's cursor is advanced right after its own cycle succeeded; the
    first failure stops the run and leaves that cursor untouched.
    """
    sources = [config.get_source(n) for n in names] if names else config.all_sources()
    store = RecordStore(directory)
    cursors = CursorStore.in_directory(directory)

    results: list[SyncResult] = []
    for source in sources:
        logger.info(
            "Syncing %s project %d (statuses: %s)",
            source.organization,
            source.project_number,
            ", ".join(source.status_filters) or "any",
        )
        gateway = gateway_factory(source, config)
        result = sync_source(store, gateway, source, cursors.read(source.name))
        cursors.write(source.name, result.cursor)
        results.append(result)
    return results
