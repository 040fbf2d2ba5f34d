"""Logging setup shared by the API, the pipeline and the CLI.

Modules log through children of the ``image-variants`` service logger
(``image-variants.api``, ``image-variants.pipeline``), so the handler and
level are configured once and ``LOG_LEVEL`` applies to all of them.
"""

import os
import sys
import logging
from typing import Optional

SERVICE_LOGGER = "image-variants"

LOG_FORMATS = {
    "structured": (
        "%(asctime)s | %(name)s | %(levelname)-8s | "
        "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
    ),
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logger(
    name: str = SERVICE_LOGGER,
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Attach a stdout handler to ``name`` and set its level.

    Args:
        name: Logger name (defaults to the service logger)
        level: Log level override (defaults to LOG_LEVEL, then INFO)
        format_type: "structured" or "simple"; LOG_FORMAT takes precedence

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    if not logger.handlers:
        format_name = os.getenv("LOG_FORMAT", format_type).lower()
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                LOG_FORMATS.get(format_name, LOG_FORMATS["structured"]),
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)

    logger.propagate = False
    return logger


def get_logger(name: str = SERVICE_LOGGER) -> logging.Logger:
    """
    Logger for ``name``.

    Children of the service logger get no handler of their own and
    propagate to the configured service logger.
    """
    if not name.startswith(f"{SERVICE_LOGGER}."):
        return setup_logger(name)
    setup_logger(SERVICE_LOGGER)
    return logging.getLogger(name)


logger = setup_logger()
