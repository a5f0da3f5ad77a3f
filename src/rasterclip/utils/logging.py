"""Logging utilities for Rasterclip."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class ProcessingStats:
    """Statistics from a batch run."""

    processed_count: int = 0
    error_count: int = 0
    output_count: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    item_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None
    was_cancelled: bool = False
    cancelled_count: int = 0

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_item_time_ms(self) -> float | None:
        """Average per-item time, or None when nothing was timed."""
        if not self.item_timings_ms:
            return None
        return sum(self.item_timings_ms) / len(self.item_timings_ms)

    @property
    def min_item_time_ms(self) -> float | None:
        """Fastest item time."""
        return min(self.item_timings_ms) if self.item_timings_ms else None

    @property
    def max_item_time_ms(self) -> float | None:
        """Slowest item time."""
        return max(self.item_timings_ms) if self.item_timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)
        _installed_handlers.append(console_handler)

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

    logger = structlog.get_logger("rasterclip")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking batch progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_item_start(self, index: int, kind: str) -> None:
        """Log start of item processing."""
        self._logger.debug("Processing item", index=index, kind=kind)

    def log_item_complete(
        self,
        index: int,
        output_count: int,
        duration_ms: float,
    ) -> None:
        """Log successful item processing."""
        self._logger.info(
            "Item processed",
            index=index,
            outputs=output_count,
            duration_ms=round(duration_ms, 3),
        )
        self._stats.processed_count += 1
        self._stats.output_count += output_count
        self._stats.item_timings_ms.append(duration_ms)

    def log_item_error(
        self,
        index: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log item processing error."""
        self._logger.error(
            "Item processing failed",
            index=index,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((index, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
