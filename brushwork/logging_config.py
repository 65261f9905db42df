"""
Centralized logging configuration for brushwork.

Provides debug logging to file for every generation pass.
Log file: <log_dir>/brushwork.log (with rotation)

Usage:
    from brushwork.logging_config import setup_logging
    setup_logging(log_dir)  # Call once at startup

All brushwork.* loggers write DEBUG to file, WARNING+ to console.
"""

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path


# Global configuration
LOG_FILE_NAME = "brushwork.log"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5  # Keep 5 backup files

ROOT_LOGGER = "brushwork"

_logging_initialized = False


def setup_logging(
    log_dir: Path | str,
    log_level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
) -> Path:
    """
    Configure the logging system for brushwork.

    Args:
        log_dir: Directory for the log file (created if missing)
        log_level: Level for file logging (default: DEBUG)
        console_level: Level for console output (default: WARNING)

    Returns:
        Path to the log file
    """
    global _logging_initialized

    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / LOG_FILE_NAME

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)  # Capture all levels

    # Clear any existing handlers (for re-initialization)
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()

    file_formatter = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d | %(levelname)-8s | %(name)-35s | %(funcName)-25s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_LOG_SIZE,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(file_formatter)
    root_logger.addHandler(file_handler)

    # Console handler (less verbose)
    console_formatter = logging.Formatter(
        fmt="%(levelname)-8s | %(name)-25s | %(message)s"
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(console_formatter)
    root_logger.addHandler(console_handler)

    if not _logging_initialized:
        root_logger.info("=" * 80)
        root_logger.info(f"brushwork logging initialized at {datetime.now().isoformat()}")
        root_logger.info(f"Log file: {log_file.absolute()}")
        root_logger.info("=" * 80)
        _logging_initialized = True

    return log_file


# =============================================================================
# Structured Logging Helpers
# =============================================================================


def log_brush(
    logger: logging.Logger,
    brush_name: str,
    zone: str,
    status: str,
    details: str | None = None,
) -> None:
    """Log one brush pass over a zone."""
    details_str = f" | {details}" if details else ""
    logger.debug(f"BRUSH | {brush_name} | zone={zone} | {status}{details_str}")


def log_region(
    logger: logging.Logger,
    seed: int,
    x: tuple[int, int],
    y: tuple[int, int],
    status: str,
    duration_ms: float | None = None,
) -> None:
    """Log a region generation request."""
    duration_str = f" | {duration_ms:.1f}ms" if duration_ms is not None else ""
    logger.info(f"REGION | seed={seed} | x={x[0]}..{x[1]} | y={y[0]}..{y[1]} | {status}{duration_str}")
