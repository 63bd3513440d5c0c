"""
Logging setup for RLCE.

Usage in modules:
    from rlce.logging_setup import get_logger
    logger = get_logger(__name__)

The root "rlce" logger is configured once, on the first get_logger() call,
from settings.log_level and settings.log_file. Call setup_logging() directly
to override them (the CLI does this for --verbose).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rlce.config import settings

ROOT_LOGGER_NAME = "rlce"

_root_configured = False


def setup_logging(
        level: Optional[str] = None,
        log_file: Optional[str | Path] = None,
        force: bool = False,
) -> logging.Logger:
    """
    Configure the package logger with a console handler and an optional file handler.

    Args:
        level: Level name (e.g. "DEBUG", "INFO"). Defaults to settings.log_level
        log_file: Path of a log file. Defaults to settings.log_file (None = console only)
        force: Reconfigure even if logging was already set up

    Returns:
        The configured package logger
    """
    global _root_configured

    root = logging.getLogger(ROOT_LOGGER_NAME)

    # Only configure once (idempotent)
    if _root_configured and not force:
        return root

    level_name = (level or settings.log_level).upper()
    level_value = logging.getLevelName(level_name)
    if isinstance(level_value, str):  # Unknown level name
        level_value = logging.INFO
    root.setLevel(level_value)

    # Remove any existing handlers (in case of reconfiguration)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    # Console handler - simple format
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root.addHandler(console_handler)

    # File handler - detailed format
    log_file = log_file if log_file is not None else settings.log_file
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        root.addHandler(file_handler)

    _root_configured = True

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for the given module name.
    Configures the package logger on first call.

    Usage:
        logger = get_logger(__name__)
    """
    if not _root_configured:
        setup_logging()

    return logging.getLogger(name)
