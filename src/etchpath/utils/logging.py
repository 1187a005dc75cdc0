"""Logging utilities for Etchpath."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Marks handlers installed here so repeated configuration replaces them
_HANDLER_TAG = "_etchpath_handler"


@dataclass
class ProcessingStats:
    """Statistics from processing run."""

    image_path: str | None = None
    image_format: str | None = None
    width: int = 0
    height: int = 0
    mode: str | None = None
    black_pixels: int = 0
    feature_count: int = 0
    element_count: int = 0
    etch_length_mm: float = 0.0
    estimated_ms: int = 0
    distance_mm: float = 0.0
    output_path: str | None = None
    stage_timings_ms: dict[str, float] = field(default_factory=dict)
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def error_count(self) -> int:
        return len(self.errors)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
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
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_TAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_TAG, True)
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        setattr(console_handler, _HANDLER_TAG, True)
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

    logger = structlog.get_logger("etchpath")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking pipeline stages and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_image_loaded(self, image_path: str, width: int, height: int, fmt: str) -> None:
        """Log a decoded source image."""
        self._logger.info(
            "Image loaded",
            image=image_path,
            width=width,
            height=height,
            format=fmt,
        )
        self._stats.image_path = image_path
        self._stats.image_format = fmt
        self._stats.width = width
        self._stats.height = height

    def log_binarized(self, threshold: float, black_pixels: int) -> None:
        """Log a binarization result."""
        self._logger.debug(
            "Raster binarized",
            threshold=threshold,
            black_pixels=black_pixels,
        )
        self._stats.black_pixels = black_pixels

    def log_route(
        self,
        mode: str,
        feature_count: int,
        element_count: int,
        etch_length_mm: float,
        duration_ms: float,
    ) -> None:
        """Log a computed route.

        Args:
            mode: Etch mode
            feature_count: Lines (raster) or bodies (stencil) found
            element_count: Moves or paths in the main sequence
            etch_length_mm: Laser-on length of one pass in millimeters
            duration_ms: Time spent routing
        """
        self._logger.info(
            "Route computed",
            mode=mode,
            features=feature_count,
            elements=element_count,
            etch_length_mm=round(etch_length_mm, 3),
            duration_ms=round(duration_ms, 2),
        )
        self._stats.mode = mode
        self._stats.feature_count = feature_count
        self._stats.element_count = element_count
        self._stats.etch_length_mm = etch_length_mm
        self._stats.stage_timings_ms["route"] = duration_ms

    def log_estimate(self, milliseconds: int, distance_mm: float) -> None:
        """Log a run time estimate."""
        self._logger.info(
            "Estimate computed",
            estimated_ms=milliseconds,
            distance_mm=round(distance_mm, 3),
        )
        self._stats.estimated_ms = milliseconds
        self._stats.distance_mm = distance_mm

    def log_export(self, output_path: str, duration_ms: float) -> None:
        """Log a written program."""
        self._logger.info(
            "Program exported",
            output=output_path,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.output_path = output_path
        self._stats.stage_timings_ms["export"] = duration_ms

    def log_error(
        self,
        stage: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a failed pipeline stage."""
        self._logger.error(
            "Processing failed",
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.errors.append((stage, str(error)))

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats

    def reset(self) -> None:
        """Start a fresh set of statistics."""
        self._stats = ProcessingStats()
