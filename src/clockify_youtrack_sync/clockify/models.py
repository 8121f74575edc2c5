"""Pydantic models for Clockify API responses."""

from pydantic import BaseModel, ConfigDict, Field


class ClockifyTag(BaseModel):
    """Clockify tag model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str


class ClockifyTask(BaseModel):
    """Clockify task model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str | None = None


class ClockifyTimeInterval(BaseModel):
    """Start, end and ISO 8601 duration of a time entry."""

    start: str | None = None
    end: str | None = None
    duration: str | None = None


class ClockifyTimeEntry(BaseModel):
    """Hydrated Clockify time entry model."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    description: str | None = None
    billable: bool = False
    tags: list[ClockifyTag] | None = None
    task: ClockifyTask | None = None
    time_interval: ClockifyTimeInterval = Field(
        default_factory=ClockifyTimeInterval, alias="timeInterval"
    )
