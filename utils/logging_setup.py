"""
Logging Setup
loguru sink configuration shared by the deployment entry points
"""

import sys
from loguru import logger


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO"):
    """
    Route all log output to stderr

    stdout is left to the deployment result line.

    Args:
        level: Minimum level to emit
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
