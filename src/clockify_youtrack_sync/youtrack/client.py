"""YouTrack API client."""

import logging
from typing import Any

import httpx

from clockify_youtrack_sync.exceptions import InvalidWorkItemError
from clockify_youtrack_sync.youtrack.models import WorkItemPayload, WorkItemType, YouTrackWorkItem
from clockify_youtrack_sync.sync.patterns import has_marker

logger = logging.getLogger(__name__)


class YouTrackClient:
    """Async client for the YouTrack REST API."""

    def __init__(
        self,
        base_url: str,
        token: str,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize YouTrack client.

        Args:
            base_url: REST API root, e.g. ``https://example.youtrack.cloud/api``.
            token: Permanent token used as bearer credential.
            transport: Optional httpx transport, used by tests.

        Raises:
            ValueError: If base URL or token is missing.
        """
        if not base_url:
            raise ValueError("YouTrack base URL not provided")
        if not token:
            raise ValueError("YouTrack token not provided")

        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
            timeout=30.0,
            transport=transport,
        )

    async def get_current_user(self) -> dict[str, Any]:
        """Get the user the token belongs to.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        response = await self.client.get("/users/me", params={"fields": "id,login,name"})
        response.raise_for_status()
        return response.json()

    async def list_work_items(self, issue_id: str, skip: int, top: int) -> list[YouTrackWorkItem]:
        """Get one page of work items attached to an issue.

        Args:
            issue_id: Issue key, e.g. ``ABC-123``.
            skip: Number of items to skip.
            top: Maximum number of items to return.

        Returns:
            Work items of the page, in API order.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        response = await self.client.get(
            f"/issues/{issue_id}/timeTracking/workItems",
            params={"fields": "text,date", "$skip": skip, "$top": top},
        )
        response.raise_for_status()
        return [YouTrackWorkItem(**item) for item in response.json() or []]

    async def create_work_item(self, issue_id: str, payload: WorkItemPayload) -> dict[str, Any]:
        """Create a work item on an issue.

        Args:
            issue_id: Issue key.
            payload: Work item to create.

        Returns:
            Created work item as returned by the API.

        Raises:
            InvalidWorkItemError: If the description carries no sync marker.
            httpx.HTTPError: If API request fails.
        """
        if not has_marker(payload.description):
            raise InvalidWorkItemError(
                f"Refusing to create work item on {issue_id} without a sync marker: "
                f"{payload.description!r}"
            )

        response = await self.client.post(
            f"/issues/{issue_id}/timeTracking/workItems",
            json=payload.to_api_dict(),
        )
        response.raise_for_status()
        return response.json()

    async def list_work_item_types(self) -> list[WorkItemType]:
        """List the work item types configured for time tracking.

        Raises:
            httpx.HTTPError: If API request fails.
        """
        response = await self.client.get(
            "/admin/timeTrackingSettings/workItemTypes",
            params={"fields": "id,name"},
        )
        response.raise_for_status()
        return [WorkItemType(**item) for item in response.json() or []]

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "YouTrackClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Context manager exit."""
        await self.close()
