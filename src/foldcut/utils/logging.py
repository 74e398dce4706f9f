"""Logging utilities for Foldcut."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

LOG_PROCESSORS: list[structlog.types.Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.processors.JSONRenderer(),
]


@dataclass
class RunStats:
    """Statistics over engine runs."""

    run_count: int = 0
    failure_count: int = 0
    mountain_count: int = 0
    valley_count: int = 0
    durations_ms: list[float] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def last_duration_ms(self) -> float | None:
        """Duration of the most recent successful run."""
        return self.durations_ms[-1] if self.durations_ms else None

    @property
    def avg_duration_ms(self) -> float | None:
        """Average duration of successful runs."""
        if not self.durations_ms:
            return None
        return sum(self.durations_ms) / len(self.durations_ms)


def get_logger(name: str = "foldcut") -> structlog.stdlib.BoundLogger:
    """Structured logger that writes through the stdlib logger ``name``.

    Output only appears where stdlib handlers are installed, so library
    code stays quiet until ``configure_logging`` is called.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=LOG_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


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

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=LOG_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("foldcut")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RunLogger:
    """Logger for tracking engine runs and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RunStats()

    def log_run_start(self, shape_count: int, preferred_outer_id: str | None) -> None:
        """Log start of an engine run."""
        self._logger.debug(
            "Run started",
            shapes=shape_count,
            preferred_outer=preferred_outer_id,
        )

    def log_ring_classification(self, outer_id: str | None, hole_count: int) -> None:
        """Log ring builder results."""
        self._logger.debug("Rings built", outer=outer_id, holes=hole_count)

    def log_run_complete(
        self,
        mountains: int,
        valleys: int,
        skeleton_vertices: int,
        duration_ms: float,
    ) -> None:
        """Log successful run."""
        self._logger.info(
            "Run complete",
            mountains=mountains,
            valleys=valleys,
            skeleton_vertices=skeleton_vertices,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.run_count += 1
        self._stats.mountain_count += mountains
        self._stats.valley_count += valleys
        self._stats.durations_ms.append(duration_ms)

    def log_run_failed(self, error: Exception) -> None:
        """Log a failed run."""
        self._logger.warning(
            "Run failed",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.failure_count += 1
        self._stats.errors.append((type(error).__name__, str(error)))

    @property
    def stats(self) -> RunStats:
        """Get current run statistics."""
        return self._stats
