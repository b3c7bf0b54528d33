"""
Structured logging configuration using structlog.

Provides JSON-structured logs that are queryable and include:
- Timestamp
- Log level
- Logger name
- Pipeline stage and set sizes
- Memory usage
"""

import logging
import sys
from typing import Any, Dict, Optional

import psutil
import structlog


def get_memory_usage() -> float:
    """Get current process memory usage in MB."""
    process = psutil.Process()
    return process.memory_info().rss / 1024 / 1024


def configure_structlog(log_level: str = "INFO", log_file: Optional[str] = None):
    """
    Route reclassification logs to stderr, or append them to `log_file`.

    Stage and failure events from StageLogger are rendered as one JSON
    object per line; plain module loggers pass their message through.
    """
    handler_kwargs: Dict[str, Any] = {"filename": str(log_file)} if log_file else {"stream": sys.stderr}

    # Set up standard logging; module loggers use it directly
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, log_level.upper()),
        force=True,
        **handler_kwargs,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured structlog logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


class StageLogger:
    """
    Logger for pipeline stages with memory tracking.
    """

    def __init__(self, name: str, **context: Any):
        """Initialize stage logger, binding `context` to every event."""
        self.logger = get_logger(name).bind(**context)

    def log_stage(self, stage: str, metadata: Optional[Dict] = None):
        """
        Log completion of a pipeline stage.

        Args:
            stage: Stage name (e.g., "load", "merge", "write")
            metadata: Additional metadata to log (counts, paths)
        """
        log_data = {
            "stage": stage,
            "memory_mb": get_memory_usage()
        }

        if metadata:
            log_data.update(metadata)

        self.logger.info("pipeline_stage", **log_data)

    def log_validation_failure(self, index: int, kind: str, message: str):
        """
        Log a single consistency failure.

        Args:
            index: Component index that failed
            kind: Failure kind name
            message: Operator-facing message
        """
        self.logger.error(
            "validation_failure",
            component=index,
            kind=kind,
            message=message,
        )

    def log_abort(self, reason: str, metadata: Optional[Dict] = None):
        """Log that the run stopped without writing artifacts."""
        log_data = {"reason": reason, "memory_mb": get_memory_usage()}
        if metadata:
            log_data.update(metadata)
        self.logger.error("run_aborted", **log_data)
