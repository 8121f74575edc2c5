"""Pydantic models for YouTrack time tracking API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class YouTrackWorkItem(BaseModel):
    """YouTrack issue work item, as returned with ``fields=text,date``."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    date: int | None = None


class WorkItemType(BaseModel):
    """YouTrack work item type."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str


class WorkItemPayload(BaseModel):
    """Body of a work item to create on an issue."""

    model_config = ConfigDict(frozen=True)

    description: str
    duration_minutes: float | None = None
    date: datetime | None = None
    work_type_id: str | None = None

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API-compatible dictionary.

        Absent duration, date and work type are left out of the body.

        Returns:
            Dictionary for API submission.
        """
        payload: dict[str, Any] = {"text": self.description}

        if self.duration_minutes is not None:
            payload["duration"] = {"minutes": self.duration_minutes}
        if self.date is not None:
            payload["date"] = int(self.date.timestamp() * 1000)
        if self.work_type_id:
            payload["type"] = {"id": self.work_type_id}

        return payload
