"""Exceptions raised by the synchronizer."""


class SyncError(Exception):
    """Base class for synchronizer errors."""


class ConfigurationError(SyncError):
    """A required setting or credential is missing."""


class InvalidWorkItemError(SyncError):
    """A work item payload would not be recognized as synced on the next run."""


class PaginationError(SyncError):
    """Paging through an API result did not advance."""
