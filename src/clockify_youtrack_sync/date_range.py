"""Selection of the UTC date window to synchronize."""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict


class DateRange(BaseModel):
    """Half-open UTC interval ``[start, end)``."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    def to_params(self) -> dict[str, str]:
        """Render the range as Clockify query parameters."""
        return {
            "start": _format_instant(self.start),
            "end": _format_instant(self.end),
        }

    def __str__(self) -> str:
        return f"{_format_instant(self.start)} - {_format_instant(self.end)}"


def _format_instant(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def start_of_day(now: datetime) -> datetime:
    """Truncate ``now`` to midnight UTC.

    Naive datetimes are taken to be UTC already.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    now = now.astimezone(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def select_range(
    now: datetime,
    today: bool = False,
    last_n_days: int | None = None,
) -> DateRange:
    """Pick the sync window relative to ``now``.

    Args:
        now: Reference instant.
        today: Sync from midnight today to midnight tomorrow.
        last_n_days: Sync the N full days before today.

    Returns:
        The selected range. Yesterday when no option is given.

    Raises:
        ValueError: If last_n_days is not positive.
    """
    midnight = start_of_day(now)

    if today:
        return DateRange(start=midnight, end=midnight + timedelta(days=1))

    if last_n_days is not None:
        if last_n_days < 1:
            raise ValueError(f"last_n_days must be at least 1, got {last_n_days}")
        return DateRange(start=midnight - timedelta(days=last_n_days), end=midnight)

    return DateRange(start=midnight - timedelta(days=1), end=midnight)
