"""Logging setup for hoarder_client."""

import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import Config

# Track whether logging has been initialized to prevent double-init
_initialized = False
_log_path: Path | None = None


def _resolve_log_path(config: Config) -> Path:
    log_config = config.logging
    if log_config.file:
        return Path(log_config.file)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(log_config.log_dir) / f"hoarder_{timestamp}.log"


def setup_logging(config: Config, verbose: bool = False) -> None:
    """
    Configure logging for the hoarder_client package.

    Args:
        config: Application configuration with logging settings
        verbose: If True, override config level to DEBUG
    """
    global _initialized, _log_path
    if _initialized:
        return
    _initialized = True

    log_config = config.logging

    level_str = "DEBUG" if verbose else log_config.level.upper()
    level = getattr(logging, level_str, logging.INFO)

    logger = logging.getLogger("hoarder_client")
    logger.setLevel(level)
    logger.handlers.clear()

    log_format = "[%(levelname)s] %(asctime)s.%(msecs)03d [%(name)s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    if log_config.output in ("console", "both"):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        logger.addHandler(console_handler)

    if log_config.output in ("file", "both"):
        file_path = _resolve_log_path(config)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        if log_config.rotate:
            file_handler = RotatingFileHandler(
                file_path,
                maxBytes=log_config.max_size_mb * 1024 * 1024,
                backupCount=log_config.backup_count,
            )
        else:
            file_handler = logging.FileHandler(file_path)

        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        logger.addHandler(file_handler)
        _log_path = file_path.resolve()

    # Suppress noisy third-party loggers
    for noisy_logger in ("httpx", "httpcore"):
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


def get_log_path() -> Path | None:
    """Path of the active log file, or None when logging only to console."""
    return _log_path


def reset_logging() -> None:
    """Reset logging state for testing purposes."""
    global _initialized, _log_path
    _initialized = False
    _log_path = None
    logger = logging.getLogger("hoarder_client")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
