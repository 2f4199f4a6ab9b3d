"""
Logging setup for Shelf Archive.

All modules log through loguru's shared ``logger``; this only swaps sinks.
"""

import sys
from typing import Any, Optional

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "INFO", sink: Optional[Any] = None) -> int:
    """
    Replace loguru's default handler.

    Args:
        level: Minimum level to emit
        sink: Destination (defaults to stderr)

    Returns:
        Handler id from ``logger.add``
    """
    logger.remove()
    return logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT)
