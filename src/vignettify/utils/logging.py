"""Logging utilities for Vignettify."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

_HANDLER_MARK = "_vignettify_handler"


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    chunk_count: int = 0
    processed_chunks: int = 0
    error_count: int = 0
    preserved_pixels: int = 0
    blended_pixels: int = 0
    border_pixels: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    chunk_timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def total_pixels(self) -> int:
        """Pixels classified so far."""
        return self.preserved_pixels + self.blended_pixels + self.border_pixels

    @property
    def avg_chunk_time_ms(self) -> float | None:
        """Mean chunk compositing time."""
        if not self.chunk_timings_ms:
            return None
        return sum(self.chunk_timings_ms) / len(self.chunk_timings_ms)

    @property
    def min_chunk_time_ms(self) -> float | None:
        """Fastest chunk."""
        return min(self.chunk_timings_ms) if self.chunk_timings_ms else None

    @property
    def max_chunk_time_ms(self) -> float | None:
        """Slowest chunk."""
        return max(self.chunk_timings_ms) if self.chunk_timings_ms else None


def _replace_handler(root_logger: logging.Logger, handler: logging.Handler) -> None:
    # Reconfiguring must not stack handlers from earlier runs
    for existing in list(root_logger.handlers):
        if getattr(existing, _HANDLER_MARK, None) == getattr(handler, _HANDLER_MARK):
            root_logger.removeHandler(existing)
            existing.close()
    root_logger.addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    if log_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = Path(f"vignettify_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )
    setattr(file_handler, _HANDLER_MARK, "file")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    _replace_handler(root_logger, file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_MARK, "console")
    _replace_handler(root_logger, console_handler)

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

    logger = structlog.get_logger("vignettify")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking compositing progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_table_built(
        self,
        shape: str,
        steps: int,
        inner_axes: tuple[float, float],
        outer_axes: tuple[float, float],
    ) -> None:
        """Log the derived gradation table."""
        self._logger.debug(
            "Gradation table built",
            shape=shape,
            steps=steps,
            inner=[round(v, 2) for v in inner_axes],
            outer=[round(v, 2) for v in outer_axes],
        )

    def log_chunk_start(self, row_start: int, row_count: int) -> None:
        """Log start of chunk compositing."""
        self._logger.debug("Compositing chunk", row_start=row_start, rows=row_count)

    def log_chunk_complete(
        self,
        row_start: int,
        preserved: int,
        blended: int,
        border: int,
        duration_ms: float,
    ) -> None:
        """Log successful chunk compositing."""
        self._logger.info(
            "Chunk composited",
            row_start=row_start,
            preserved=preserved,
            blended=blended,
            border=border,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_chunks += 1
        self._stats.preserved_pixels += preserved
        self._stats.blended_pixels += blended
        self._stats.border_pixels += border
        self._stats.chunk_timings_ms.append(duration_ms)

    def log_chunk_error(
        self,
        row_start: int,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log chunk compositing error."""
        self._logger.error(
            "Chunk compositing failed",
            row_start=row_start,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((f"rows@{row_start}", str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
