"""Logging for msitables: one namespace logger writing to stderr and an optional file."""

import logging
import sys
from pathlib import Path
from typing import List, Optional
from .settings import get_settings

LOGGER_NAMESPACE = "msitables"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def _handlers(log_file: Optional[Path]) -> List[logging.Handler]:
    # stdout carries CLI results, diagnostics go to stderr.
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    return handlers


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None,
) -> logging.Logger:
    """
    (Re)configure the ``msitables`` logger.

    Values not passed in fall back to Settings. Calling this again replaces
    the handlers installed by an earlier call.

    Args:
        level: Level name such as DEBUG or WARNING
        log_file: Also append records to this file
        format_string: logging format; DEFAULT_FORMAT when omitted

    Returns:
        The configured namespace logger

    Raises:
        ValueError: If the level name is unknown
    """
    settings = get_settings()
    numeric_level = _resolve_level(level or settings.log_level)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    logger = logging.getLogger(LOGGER_NAMESPACE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    for handler in _handlers(log_file or settings.log_file):
        handler.setLevel(numeric_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(numeric_level)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` placed under the msitables namespace."""
    if not logging.getLogger(LOGGER_NAMESPACE).handlers:
        setup_logging()
    if name == LOGGER_NAMESPACE or name.startswith(f"{LOGGER_NAMESPACE}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
