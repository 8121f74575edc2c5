"""Tests for the sync state resolver."""

import httpx
import pytest

from clockify_youtrack_sync.exceptions import PaginationError
from clockify_youtrack_sync.sync import SyncStateResolver
from clockify_youtrack_sync.youtrack import YouTrackWorkItem

from tests.fakes import ENTRY_ID, OTHER_ENTRY_ID, FakeYouTrack


def marker_id(n: int) -> str:
    return f"{n:024d}"


class StuckYouTrack:
    """Returns the same full page whatever the offset."""

    def __init__(self, page: list[YouTrackWorkItem]) -> None:
        self.page = page
        self.calls = 0

    async def list_work_items(self, issue_id: str, skip: int, top: int) -> list[YouTrackWorkItem]:
        self.calls += 1
        return list(self.page)


class FailingYouTrack:
    async def list_work_items(self, issue_id: str, skip: int, top: int) -> list[YouTrackWorkItem]:
        raise httpx.ConnectError("connection refused")


class TestFetchMarkers:
    """Test paging through the work items of one issue."""

    @pytest.mark.asyncio
    async def test_single_short_page(self, fake_youtrack: FakeYouTrack) -> None:
        """Test that a short first page ends paging."""
        fake_youtrack.work_items["ABC-1"] = [
            YouTrackWorkItem(text=f"Work [{ENTRY_ID}]", date=1),
            YouTrackWorkItem(text="Logged by hand", date=2),
            YouTrackWorkItem(text=None, date=3),
        ]
        resolver = SyncStateResolver(fake_youtrack, page_size=5)

        markers = await resolver.fetch_markers("ABC-1")

        assert markers == frozenset({ENTRY_ID})
        assert fake_youtrack.page_requests == [("ABC-1", 0, 5)]

    @pytest.mark.asyncio
    async def test_full_page_then_empty_page(self, fake_youtrack: FakeYouTrack) -> None:
        """Test termination after a full page followed by an empty one."""
        fake_youtrack.work_items["ABC-1"] = [
            YouTrackWorkItem(text=f"Item [{marker_id(n)}]") for n in range(3)
        ]
        resolver = SyncStateResolver(fake_youtrack, page_size=3)

        markers = await resolver.fetch_markers("ABC-1")

        assert markers == frozenset(marker_id(n) for n in range(3))
        assert fake_youtrack.page_requests == [("ABC-1", 0, 3), ("ABC-1", 3, 3)]

    @pytest.mark.asyncio
    async def test_several_pages(self, fake_youtrack: FakeYouTrack) -> None:
        """Test that markers of every page are collected."""
        fake_youtrack.work_items["ABC-1"] = [
            YouTrackWorkItem(text=f"Item [{marker_id(n)}]") for n in range(7)
        ]
        resolver = SyncStateResolver(fake_youtrack, page_size=3)

        markers = await resolver.fetch_markers("ABC-1")

        assert len(markers) == 7
        assert [skip for _, skip, _ in fake_youtrack.page_requests] == [0, 3, 6]

    @pytest.mark.asyncio
    async def test_repeated_full_page_raises(self) -> None:
        """Test that an API ignoring the offset does not loop forever."""
        youtrack = StuckYouTrack([YouTrackWorkItem(text=f"[{marker_id(n)}]") for n in range(2)])
        resolver = SyncStateResolver(youtrack, page_size=2)

        with pytest.raises(PaginationError):
            await resolver.fetch_markers("ABC-1")

        assert youtrack.calls == 2

    def test_page_size_must_be_positive(self, fake_youtrack: FakeYouTrack) -> None:
        """Test rejecting a zero page size."""
        with pytest.raises(ValueError):
            SyncStateResolver(fake_youtrack, page_size=0)


class TestIndexSyncedMarkers:
    """Test building the marker index for several issues."""

    @pytest.mark.asyncio
    async def test_index_per_issue(self, fake_youtrack: FakeYouTrack) -> None:
        """Test that markers are kept per issue and duplicates fetched once."""
        fake_youtrack.work_items["ABC-1"] = [YouTrackWorkItem(text=f"A [{ENTRY_ID}]")]
        fake_youtrack.work_items["XYZ-9"] = [YouTrackWorkItem(text=f"B [{OTHER_ENTRY_ID}]")]
        resolver = SyncStateResolver(fake_youtrack)

        index = await resolver.index_synced_markers(["ABC-1", "XYZ-9", "ABC-1", "NEW-1"])

        assert dict(index) == {
            "ABC-1": frozenset({ENTRY_ID}),
            "XYZ-9": frozenset({OTHER_ENTRY_ID}),
            "NEW-1": frozenset(),
        }
        assert len(fake_youtrack.page_requests) == 3

    @pytest.mark.asyncio
    async def test_index_is_read_only(self, fake_youtrack: FakeYouTrack) -> None:
        """Test that the index cannot be modified."""
        index = await SyncStateResolver(fake_youtrack).index_synced_markers(["ABC-1"])

        with pytest.raises(TypeError):
            index["XYZ-1"] = frozenset()

    @pytest.mark.asyncio
    async def test_failure_propagates(self) -> None:
        """Test that API errors are not swallowed."""
        resolver = SyncStateResolver(FailingYouTrack())

        with pytest.raises(httpx.ConnectError):
            await resolver.index_synced_markers(["ABC-1"])
