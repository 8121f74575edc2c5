"""Clockify API integration."""

from clockify_youtrack_sync.clockify.client import ClockifyClient
from clockify_youtrack_sync.clockify.models import (
    ClockifyTag,
    ClockifyTask,
    ClockifyTimeEntry,
    ClockifyTimeInterval,
)

__all__ = [
    "ClockifyClient",
    "ClockifyTag",
    "ClockifyTask",
    "ClockifyTimeEntry",
    "ClockifyTimeInterval",
]
