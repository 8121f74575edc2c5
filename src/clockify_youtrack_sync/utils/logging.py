"""Logging configuration for the synchronizer."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from clockify_youtrack_sync.utils.storage import DEFAULT_CONFIG_DIR

LOG_FILE_NAME = "clockify-youtrack-sync.log"


def setup_logging(
    log_level: int = logging.INFO,
    config_dir: Path | None = None,
    console: Console | None = None,
) -> Path:
    """Configure logging for the application.

    Decisions and progress go to the console through rich; everything at
    ``log_level`` and above is also appended to a log file.

    Args:
        log_level: Logging level (e.g., logging.INFO, logging.DEBUG).
        config_dir: Directory to store the log file. Defaults to ~/.clockify-youtrack-sync/
        console: Rich console to log to. Defaults to stderr.

    Returns:
        Path of the log file.
    """
    config_dir = config_dir or DEFAULT_CONFIG_DIR
    config_dir.mkdir(parents=True, exist_ok=True)
    log_file = config_dir / LOG_FILE_NAME

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(log_level)
    file_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(file_handler)

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
