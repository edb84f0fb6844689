"""
Logging configuration for tablemeta.

Every module logs through a loguru logger bound with its own name
(``get_logger(__name__)``); the handlers print that bound name rather than
loguru's record name, so introspection warnings point at the provider or
orchestrator that raised them.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Logger

DEFAULT_LOGGER_NAME = "tablemeta"

_RECORD_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} | {message}"
_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru's handlers with tablemeta's console and file handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional); parent directories are created
        rotation: Log file rotation size
        retention: Log file retention period
    """
    logger.remove()
    # records logged through the bare loguru logger still need extra[name]
    logger.configure(extra={"name": DEFAULT_LOGGER_NAME})

    logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level=level,
            format=_RECORD_FORMAT,
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
        )


def get_logger(name: str | None = None) -> "Logger":
    """
    Get a logger bound to a module name.

    The name fills the {extra[name]} field of the handlers installed by
    setup_logging.

    Args:
        name: Logger name (module name); defaults to "tablemeta"

    Returns:
        Bound loguru logger
    """
    return logger.bind(name=name or DEFAULT_LOGGER_NAME)
