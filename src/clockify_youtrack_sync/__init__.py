"""Idempotent sync of billable Clockify time entries to YouTrack work items."""

__version__ = "0.1.0"
