"""Logging utilities for Shapetap."""

import logging
from dataclasses import dataclass
from pathlib import Path

import structlog

# Handlers installed by configure_logging, replaced on reconfiguration
_installed_handlers: list[logging.Handler] = []


@dataclass
class SessionStats:
    """Statistics from an editing session."""

    shapes_added: int = 0
    shapes_removed: int = 0
    moves: int = 0
    selections: int = 0
    hit_tests: int = 0
    misses: int = 0

    @property
    def hit_rate(self) -> float:
        """Fraction of hit tests that found a shape."""
        if self.hit_tests == 0:
            return 0.0
        return (self.hit_tests - self.misses) / self.hit_tests


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
        quiet: If True, suppress console output except errors

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

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
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

    logger = structlog.get_logger("shapetap")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


def get_logger(name: str = "shapetap") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger routed through the stdlib logger ``name``.

    Before ``configure_logging`` runs, the stdlib logger is wrapped directly
    so events still respect stdlib levels instead of printing to stdout.
    """
    if structlog.is_configured():
        return structlog.get_logger(name)
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


class SessionLogger:
    """Logger for tracking shape edits and hit testing."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else get_logger("shapetap.session")
        self._stats = SessionStats()

    def log_shape_added(self, index: int, kind: str) -> None:
        """Log a shape appended to the collection."""
        self._logger.debug("Shape added", index=index, kind=kind)
        self._stats.shapes_added += 1

    def log_shape_removed(self, index: int, was_selected: bool) -> None:
        """Log a shape removed from the collection."""
        self._logger.debug("Shape removed", index=index, was_selected=was_selected)
        self._stats.shapes_removed += 1

    def log_selection(self, previous: int | None, current: int | None) -> None:
        self._logger.debug("Selection changed", previous=previous, current=current)
        self._stats.selections += 1

    def log_move(self, index: int, dx: float, dy: float) -> None:
        self._logger.debug("Shape moved", index=index, dx=dx, dy=dy)
        self._stats.moves += 1

    def log_hit_test(self, x: float, y: float, index: int | None) -> None:
        """Log a hit test and whether it found a shape."""
        self._logger.debug("Hit test", x=x, y=y, index=index)
        self._stats.hit_tests += 1
        if index is None:
            self._stats.misses += 1

    def log_error(self, operation: str, error: Exception) -> None:
        """Log a failed operation."""
        self._logger.error(
            "Operation failed",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
        )

    @property
    def stats(self) -> SessionStats:
        """Get current session statistics."""
        return self._stats
