"""Logging utilities for Imprint."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics from a pipeline run."""

    applied_count: int = 0
    input_size: tuple[int, int] | None = None
    output_size: tuple[int, int] | None = None
    output_bytes: int = 0
    operation_times_ms: list[tuple[str, float]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def slowest_operation(self) -> tuple[str, float] | None:
        """Name and duration of the slowest operation, if any ran."""
        if not self.operation_times_ms:
            return None
        return max(self.operation_times_ms, key=lambda item: item[1])


PACKAGE_LOGGER = "imprint"

# Handlers installed by configure_logging, replaced on every call
_installed_handlers: list[logging.Handler] = []


def _reset_handlers(package_logger: logging.Logger) -> None:
    while _installed_handlers:
        handler = _installed_handlers.pop()
        package_logger.removeHandler(handler)
        handler.close()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Unlike a batch tool, imprint is mostly used as a library, so handlers
    go on the "imprint" logger rather than the root logger, and a log file
    is only written when one is requested. Calling this again replaces the
    handlers from the previous call and closes them.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    _reset_handlers(package_logger)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _installed_handlers.append(console_handler)

    for handler in _installed_handlers:
        package_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger(PACKAGE_LOGGER)
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
        started=datetime.now().isoformat(timespec="seconds"),
    )

    return logger


class ProcessingLogger:
    """Logger for tracking pipeline progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_decoded(self, width: int, height: int, mode: str) -> None:
        """Log the decoded input image."""
        self._logger.info("Image decoded", width=width, height=height, mode=mode)
        self._stats.input_size = (width, height)

    def log_operation_start(self, index: int, operation: str) -> None:
        """Log start of an operation."""
        self._logger.debug("Applying operation", index=index, operation=operation)

    def log_operation_complete(
        self,
        index: int,
        operation: str,
        size: tuple[int, int],
        duration_ms: float,
    ) -> None:
        """Log a completed operation."""
        self._logger.info(
            "Operation applied",
            index=index,
            operation=operation,
            width=size[0],
            height=size[1],
            duration_ms=round(duration_ms, 2),
        )
        self._stats.applied_count += 1
        self._stats.operation_times_ms.append((operation, duration_ms))

    def log_encoded(self, size: tuple[int, int], byte_count: int) -> None:
        """Log the encoded output image."""
        self._logger.info(
            "Image encoded",
            width=size[0],
            height=size[1],
            bytes=byte_count,
        )
        self._stats.output_size = size
        self._stats.output_bytes = byte_count

    def log_failure(self, stage: str, error: Exception) -> None:
        """Log a pipeline failure."""
        self._logger.error(
            "Pipeline failed",
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
