"""Clockify API client."""

import logging
from typing import Any

import httpx

from clockify_youtrack_sync.clockify.models import ClockifyTimeEntry
from clockify_youtrack_sync.date_range import DateRange

logger = logging.getLogger(__name__)


class ClockifyClient:
    """Async client for the Clockify API."""

    BASE_URL = "https://api.clockify.me/api/v1"
    PAGE_SIZE = 5000

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Clockify client.

        Args:
            api_key: Clockify API key.
            base_url: Override for the API base URL.
            transport: Optional httpx transport, used by tests.

        Raises:
            ValueError: If no API key is given.
        """
        if not api_key:
            raise ValueError("Clockify API key not provided")

        self.client = httpx.AsyncClient(
            base_url=base_url or self.BASE_URL,
            headers={"X-Api-Key": api_key},
            timeout=30.0,
            transport=transport,
        )

    async def get_current_user(self) -> dict[str, Any]:
        """Get current authenticated user.

        Returns:
            User information, including ``id`` and ``defaultWorkspace``.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        response = await self.client.get("/user")
        response.raise_for_status()
        return response.json()

    async def get_time_entries(
        self,
        workspace_id: str,
        user_id: str,
        date_range: DateRange,
    ) -> list[ClockifyTimeEntry]:
        """Get hydrated time entries for a user within a date range.

        Pages through the result until a short page is returned.

        Args:
            workspace_id: Workspace ID.
            user_id: User ID.
            date_range: Window to fetch.

        Returns:
            List of time entries.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        entries: list[ClockifyTimeEntry] = []
        page = 1

        while True:
            params: dict[str, Any] = {
                **date_range.to_params(),
                "hydrated": "true",
                "page": page,
                "page-size": self.PAGE_SIZE,
            }
            response = await self.client.get(
                f"/workspaces/{workspace_id}/user/{user_id}/time-entries",
                params=params,
            )
            response.raise_for_status()
            data = response.json() or []

            for item in data:
                entries.append(ClockifyTimeEntry(**item))

            logger.debug(f"Fetched {len(data)} Clockify entries from page {page}")
            if len(data) < self.PAGE_SIZE:
                break
            page += 1

        return entries

    async def get_billable_entries(
        self,
        workspace_id: str,
        user_id: str,
        date_range: DateRange,
    ) -> list[ClockifyTimeEntry]:
        """Get only the billable time entries within a date range."""
        entries = await self.get_time_entries(workspace_id, user_id, date_range)
        billable = [entry for entry in entries if entry.billable]
        logger.info(f"Found {len(billable)} billable of {len(entries)} Clockify entries")
        return billable

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "ClockifyClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Context manager exit."""
        await self.close()
