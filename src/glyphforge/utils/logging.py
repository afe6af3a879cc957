"""Logging utilities for GlyphForge."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog

from glyphforge.domain import VectorizeStatus


@dataclass
class ProcessingStats:
    """Statistics from a batch build."""

    ok_count: int = 0
    placeholder_count: int = 0
    trimmed_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    warnings: list[tuple[str, str]] = field(default_factory=list)
    timings_ms: list[float] = field(default_factory=list)
    was_cancelled: bool = False
    cancelled_count: int = 0
    start_time: float | None = None
    end_time: float | None = None

    @property
    def processed_count(self) -> int:
        """Images that produced a glyph, degraded or not."""
        return self.ok_count + self.placeholder_count + self.trimmed_count

    @property
    def degraded_count(self) -> int:
        return self.placeholder_count + self.trimmed_count

    @property
    def avg_image_time_ms(self) -> float | None:
        if not self.timings_ms:
            return None
        return sum(self.timings_ms) / len(self.timings_ms)

    @property
    def min_image_time_ms(self) -> float | None:
        return min(self.timings_ms) if self.timings_ms else None

    @property
    def max_image_time_ms(self) -> float | None:
        return max(self.timings_ms) if self.timings_ms else None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    def record_status(self, status: VectorizeStatus) -> None:
        """Count one finished image by outcome."""
        if status is VectorizeStatus.OK:
            self.ok_count += 1
        elif status is VectorizeStatus.PLACEHOLDER:
            self.placeholder_count += 1
        else:
            self.trimmed_count += 1


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
        log_file = Path(f"glyphforge_{timestamp}.log")

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

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

    logger = structlog.get_logger("glyphforge")
    logger.info("Logging initialized", log_file=str(log_file), level=file_level)

    return logger


class ProcessingLogger:
    """Logger for tracking batch progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_image_start(self, image_name: str) -> None:
        """Log start of image vectorization."""
        self._logger.debug("Vectorizing image", image=image_name)

    def log_image_complete(
        self,
        image_name: str,
        codepoint: str,
        status: VectorizeStatus,
        size: int,
        duration_ms: float,
    ) -> None:
        """Log a finished image; degraded outcomes are logged as warnings."""
        log = self._logger.warning if status.degraded else self._logger.info
        log(
            "Image vectorized",
            image=image_name,
            codepoint=codepoint,
            status=status.value,
            size=size,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.record_status(status)

    def log_degradation(self, image_name: str, reason: str) -> None:
        """Record why a glyph was degraded."""
        self._logger.warning("Glyph degraded", image=image_name, reason=reason)
        self._stats.warnings.append((image_name, reason))

    def log_image_error(
        self,
        image_name: str,
        error: Exception | str,
        traceback: str | None = None,
    ) -> None:
        """Log an image that produced no glyph."""
        self._logger.error(
            "Image vectorization failed",
            image=image_name,
            error=str(error),
            error_type=type(error).__name__ if isinstance(error, Exception) else None,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((image_name, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
