"""Structured logging setup for Taskigt."""

import os
from pathlib import Path
from typing import Any, Optional, TextIO

import structlog

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

# Open log file of the current configuration
_log_stream: Optional[TextIO] = None


def configure_logging(log_dir: Optional[Path] = None) -> Path:
    """
    Configure structlog for JSON logging to ~/.cache/taskigt/logs/taskigt.log.

    Log level can be controlled via TASKIGT_LOG_LEVEL environment variable:
    - Set to "DEBUG" to see tree-level events (parses, grafts)
    - Defaults to "INFO" if not set

    Log levels:
    - DEBUG: Document parses, grafts, storage reads
    - INFO: User intents (edit, add, delete, fold), save/restore
    - WARNING: Rejected operations (root removal)
    - ERROR: Storage failures

    Args:
        log_dir: Directory for the log file (default: ~/.cache/taskigt/logs)

    Returns:
        Path of the log file

    Example:
        TASKIGT_LOG_LEVEL=DEBUG taskigt show notes.txt
        tail -f ~/.cache/taskigt/logs/taskigt.log | jq .
    """
    if log_dir is None:
        log_dir = Path.home() / ".cache" / "taskigt" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskigt.log"

    log_level = os.environ.get("TASKIGT_LOG_LEVEL", "INFO").upper()
    if log_level not in VALID_LEVELS:
        log_level = "INFO"

    global _log_stream
    close_logging()
    _log_stream = open(log_file, "a", encoding="utf-8")

    # Module-level loggers must follow later reconfiguration
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=_log_stream),
        cache_logger_on_first_use=False,
    )
    return log_file


def close_logging() -> None:
    """Close the log file opened by configure_logging and restore defaults."""
    global _log_stream
    if _log_stream is None:
        return
    structlog.reset_defaults()
    _log_stream.close()
    _log_stream = None


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Structured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("item_added", parent=0, position=3)
    """
    return structlog.get_logger(name)
