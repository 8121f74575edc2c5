"""Lookup of entries already synced to YouTrack."""

import asyncio
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from clockify_youtrack_sync.exceptions import PaginationError
from clockify_youtrack_sync.sync.patterns import extract_marker

if TYPE_CHECKING:
    from clockify_youtrack_sync.youtrack.client import YouTrackClient

logger = logging.getLogger(__name__)

MarkerIndex = Mapping[str, frozenset[str]]


class SyncStateResolver:
    """Builds the per-issue set of sync markers from live work items."""

    DEFAULT_PAGE_SIZE = 5000

    def __init__(self, youtrack: "YouTrackClient", page_size: int = DEFAULT_PAGE_SIZE) -> None:
        """Initialize resolver.

        Args:
            youtrack: Client used to list work items.
            page_size: Number of work items requested per page.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        self.youtrack = youtrack
        self.page_size = page_size

    async def fetch_markers(self, issue_id: str) -> frozenset[str]:
        """Collect the sync markers of all work items on an issue.

        Pages are requested one after another until a page shorter than the
        page size comes back.

        Args:
            issue_id: Issue key.

        Returns:
            Markers found in work item texts. Items without one are ignored.

        Raises:
            PaginationError: If a full page repeats the previous one.
            httpx.HTTPError: If API request fails.
        """
        markers: set[str] = set()
        skip = 0
        previous_page = None

        while True:
            page = await self.youtrack.list_work_items(issue_id, skip=skip, top=self.page_size)
            logger.debug(f"Fetched {len(page)} work items of {issue_id} at offset {skip}")

            if len(page) < self.page_size:
                markers.update(self._markers_of(page))
                break

            if previous_page is not None and page == previous_page:
                raise PaginationError(
                    f"Work items of {issue_id} did not advance past offset {skip}"
                )

            markers.update(self._markers_of(page))
            previous_page = page
            skip += self.page_size

        return frozenset(markers)

    async def index_synced_markers(self, issue_ids: Iterable[str]) -> MarkerIndex:
        """Fetch markers for several issues concurrently.

        Args:
            issue_ids: Issue keys; duplicates are fetched once.

        Returns:
            Read-only mapping of issue key to its markers.
        """
        unique_ids = list(dict.fromkeys(issue_ids))
        results = await asyncio.gather(*(self.fetch_markers(issue_id) for issue_id in unique_ids))
        index = dict(zip(unique_ids, results))
        logger.info(f"Indexed sync markers of {len(index)} issues")
        return MappingProxyType(index)

    @staticmethod
    def _markers_of(page) -> set[str]:
        markers = set()
        for item in page:
            marker = extract_marker(item.text)
            if marker:
                markers.add(marker)
        return markers
