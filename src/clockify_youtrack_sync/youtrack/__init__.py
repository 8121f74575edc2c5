"""YouTrack API integration."""

from clockify_youtrack_sync.youtrack.client import YouTrackClient
from clockify_youtrack_sync.youtrack.models import (
    WorkItemPayload,
    WorkItemType,
    YouTrackWorkItem,
)

__all__ = [
    "YouTrackClient",
    "WorkItemPayload",
    "WorkItemType",
    "YouTrackWorkItem",
]
