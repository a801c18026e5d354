"""
Logging configuration for pagemodel.

Every pagemodel module logs through ``logging.getLogger(__name__)``, so all
records land under the ``pagemodel`` logger. Content resolution is traced at
DEBUG: cache hits, factory calls, module instantiation and wait polling.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional

LIBRARY_LOGGER = "pagemodel"

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Browser drivers are chatty at DEBUG
QUIET_LOGGERS = ('playwright', 'asyncio')


def _to_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    resolution_level: Optional[str] = None,
) -> None:
    """Configure logging for an application or test run using pagemodel.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path, parent directories are created
        format_string: Optional custom format string
        resolution_level: Level of the ``pagemodel`` loggers alone, e.g.
            "DEBUG" to trace content resolution while the rest of the
            application stays at ``level``. Defaults to ``level``.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=_to_level(level),
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
        force=True,
    )

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    if resolution_level is None:
        library_logger.setLevel(logging.NOTSET)
    else:
        library_logger.setLevel(_to_level(resolution_level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
