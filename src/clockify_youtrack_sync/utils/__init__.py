"""Utility modules for the synchronizer."""

from clockify_youtrack_sync.utils.logging import get_logger, setup_logging
from clockify_youtrack_sync.utils.storage import StorageManager

__all__ = ["get_logger", "setup_logging", "StorageManager"]
