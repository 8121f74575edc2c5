"""Normalization of Clockify time entries."""

import logging
import re
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from clockify_youtrack_sync.clockify.models import ClockifyTimeEntry
from clockify_youtrack_sync.sync.patterns import extract_issue_id

logger = logging.getLogger(__name__)

_NUMBER = r"(\d+(?:\.\d+)?)"
DURATION_PATTERN = re.compile(
    rf"^P(?:{_NUMBER}W)?(?:{_NUMBER}D)?"
    rf"(?:T(?:{_NUMBER}H)?(?:{_NUMBER}M)?(?:{_NUMBER}S)?)?$"
)

_MINUTES_PER_UNIT = (7 * 24 * 60, 24 * 60, 60, 1, 1 / 60)

_INSTANT = TypeAdapter(datetime)


class NormalizedEntry(BaseModel):
    """Canonical shape of a billable time entry."""

    model_config = ConfigDict(frozen=True)

    entry_id: str
    description: str = ""
    category: str | None = None
    issue_id: str | None = None
    start_date: datetime | None = None
    duration_minutes: float | None = Field(default=None, ge=0)


def parse_duration_minutes(duration_str: str | None) -> float | None:
    """Parse an ISO 8601 duration string to minutes.

    Args:
        duration_str: Duration such as ``PT1H30M``, ``PT45S`` or ``P1DT2H``.

    Returns:
        Total minutes as a float, or None if missing or not a duration.
    """
    if not duration_str:
        return None

    text = duration_str.strip().upper()
    match = DURATION_PATTERN.match(text)
    # "P", "PT" and "P1DT" match the pattern but carry no valid duration
    if not match or text.endswith(("P", "T")):
        return None

    total = 0.0
    for value, minutes_per_unit in zip(match.groups(), _MINUTES_PER_UNIT):
        if value:
            total += float(value) * minutes_per_unit
    return total


def parse_instant(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Naive timestamps are taken as UTC. Returns None if missing or invalid.
    """
    if not value:
        return None
    try:
        parsed = _INSTANT.validate_python(value.strip())
    except ValidationError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def normalize(raw: ClockifyTimeEntry) -> NormalizedEntry:
    """Convert a Clockify time entry into a NormalizedEntry.

    Fields that cannot be derived are left as None; this never raises for a
    parsed entry.
    """
    category = None
    if raw.tags:
        category = raw.tags[0].name.lower().strip() or None

    issue_id = extract_issue_id(raw.task.name) if raw.task else None

    duration_minutes = parse_duration_minutes(raw.time_interval.duration)
    if raw.time_interval.duration and duration_minutes is None:
        logger.debug(f"Unparseable duration {raw.time_interval.duration!r} on entry {raw.id}")

    return NormalizedEntry(
        entry_id=raw.id,
        description=raw.description or "",
        category=category,
        issue_id=issue_id,
        start_date=parse_instant(raw.time_interval.start),
        duration_minutes=duration_minutes,
    )
