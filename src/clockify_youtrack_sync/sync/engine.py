"""Sync engine for reconciling Clockify entries with YouTrack work items."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from clockify_youtrack_sync.date_range import DateRange
from clockify_youtrack_sync.sync.normalizer import NormalizedEntry, normalize
from clockify_youtrack_sync.sync.patterns import embed_marker
from clockify_youtrack_sync.sync.resolver import MarkerIndex, SyncStateResolver
from clockify_youtrack_sync.youtrack.models import WorkItemPayload, WorkItemType

if TYPE_CHECKING:
    from clockify_youtrack_sync.clockify.client import ClockifyClient
    from clockify_youtrack_sync.youtrack.client import YouTrackClient

logger = logging.getLogger(__name__)

WorkTypeMap = Mapping[str, str]


class SyncAction(str, Enum):
    """Outcome of reconciling one entry."""

    NO_ISSUE = "no_issue"
    ALREADY_SYNCED = "already_synced"
    CREATE = "create"


class SyncDecision(BaseModel):
    """Decision for one entry; ``payload`` is set only for CREATE."""

    model_config = ConfigDict(frozen=True)

    action: SyncAction
    entry: NormalizedEntry
    payload: WorkItemPayload | None = None


class SyncResult:
    """Results from a sync operation."""

    def __init__(self) -> None:
        """Initialize sync result."""
        self.created = 0
        self.already_synced = 0
        self.no_issue = 0
        self.decisions: list[SyncDecision] = []

    def add(self, decision: SyncDecision) -> None:
        """Record a decision."""
        self.decisions.append(decision)
        if decision.action is SyncAction.CREATE:
            self.created += 1
        elif decision.action is SyncAction.ALREADY_SYNCED:
            self.already_synced += 1
        else:
            self.no_issue += 1

    def __str__(self) -> str:
        """String representation of results."""
        return (
            f"Created: {self.created}, "
            f"Already synced: {self.already_synced}, "
            f"No issue: {self.no_issue}"
        )


def build_work_type_map(work_types: Iterable[WorkItemType]) -> WorkTypeMap:
    """Map lower-cased, trimmed work type names to their ids.

    A later type with the same name replaces an earlier one.
    """
    mapping = {work_type.name.lower().strip(): work_type.id for work_type in work_types}
    return MappingProxyType(mapping)


def decide(entry: NormalizedEntry, work_types: WorkTypeMap, markers: frozenset[str]) -> SyncDecision:
    """Decide what to do with one entry.

    Args:
        entry: Normalized time entry.
        work_types: Work type name to id mapping.
        markers: Sync markers already present on the entry's issue.

    Returns:
        NO_ISSUE without an issue key, ALREADY_SYNCED if the entry's marker is
        present, otherwise CREATE with the work item to post.
    """
    if not entry.issue_id:
        return SyncDecision(action=SyncAction.NO_ISSUE, entry=entry)

    if entry.entry_id in markers:
        return SyncDecision(action=SyncAction.ALREADY_SYNCED, entry=entry)

    work_type_id = work_types.get(entry.category) if entry.category else None
    payload = WorkItemPayload(
        description=embed_marker(entry.description, entry.entry_id),
        duration_minutes=entry.duration_minutes,
        date=entry.start_date,
        work_type_id=work_type_id,
    )
    return SyncDecision(action=SyncAction.CREATE, entry=entry, payload=payload)


def _display_date(entry: NormalizedEntry) -> str:
    return entry.start_date.date().isoformat() if entry.start_date else "unknown date"


class SyncEngine:
    """Main synchronization engine."""

    def __init__(
        self,
        clockify_client: "ClockifyClient",
        youtrack_client: "YouTrackClient",
        workspace_id: str | None = None,
        user_id: str | None = None,
        resolver: SyncStateResolver | None = None,
    ) -> None:
        """Initialize sync engine.

        Args:
            clockify_client: Clockify API client.
            youtrack_client: YouTrack API client.
            workspace_id: Clockify workspace. Defaults to the user's default workspace.
            user_id: Clockify user. Defaults to the token's user.
            resolver: Sync state resolver. Built from youtrack_client if omitted.
        """
        self.clockify = clockify_client
        self.youtrack = youtrack_client
        self.workspace_id = workspace_id
        self.user_id = user_id
        self.resolver = resolver or SyncStateResolver(youtrack_client)

    async def sync(self, date_range: DateRange, dry_run: bool = False) -> SyncResult:
        """Synchronize billable Clockify entries in a date range to YouTrack.

        Args:
            date_range: Window of Clockify entries to sync.
            dry_run: If True, decide and log without creating work items.

        Returns:
            Sync results.

        Raises:
            httpx.HTTPError: If any API request fails.
            SyncError: If a work item would be invalid or paging stalls.
        """
        logger.info(f"Syncing entries from {date_range}")

        workspace_id, user_id = await self._resolve_clockify_user()
        raw_entries = await self.clockify.get_billable_entries(workspace_id, user_id, date_range)
        work_types = build_work_type_map(await self.youtrack.list_work_item_types())

        entries = [normalize(raw) for raw in raw_entries]
        issue_ids = [entry.issue_id for entry in entries if entry.issue_id]
        marker_index = await self.resolver.index_synced_markers(issue_ids)

        result = await self.reconcile(entries, work_types, marker_index, dry_run=dry_run)
        logger.info(f"Sync complete: {result}")
        return result

    async def reconcile(
        self,
        entries: Sequence[NormalizedEntry],
        work_types: WorkTypeMap,
        marker_index: MarkerIndex,
        dry_run: bool = False,
    ) -> SyncResult:
        """Decide every entry against a marker snapshot and create missing work items.

        Work items created here do not change the decisions of later entries.

        Args:
            entries: Normalized entries.
            work_types: Work type name to id mapping.
            marker_index: Issue key to markers already present.
            dry_run: If True, don't actually create work items.

        Returns:
            Sync results with one decision per entry, in order.
        """
        result = SyncResult()
        prefix = "[DRY RUN] " if dry_run else ""

        for entry in entries:
            markers = marker_index.get(entry.issue_id, frozenset()) if entry.issue_id else frozenset()
            decision = decide(entry, work_types, markers)
            display_date = _display_date(entry)

            if decision.action is SyncAction.NO_ISSUE:
                logger.warning(f"{prefix}No issue: {entry.description} on {display_date}")
            elif decision.action is SyncAction.ALREADY_SYNCED:
                logger.info(f"{prefix}Skipping: {entry.description} ({entry.issue_id}) on {display_date}")
            else:
                if not dry_run:
                    await self.youtrack.create_work_item(entry.issue_id, decision.payload)
                logger.info(f"{prefix}Synced: {entry.description} ({entry.issue_id}) on {display_date}")

            result.add(decision)

        return result

    async def _resolve_clockify_user(self) -> tuple[str, str]:
        if self.workspace_id and self.user_id:
            return self.workspace_id, self.user_id

        user = await self.clockify.get_current_user()
        self.workspace_id = self.workspace_id or user["defaultWorkspace"]
        self.user_id = self.user_id or user["id"]
        logger.debug(f"Using Clockify workspace {self.workspace_id} and user {self.user_id}")
        return self.workspace_id, self.user_id
