"""
Configures the loguru logger for the API process.
"""

import sys
from typing import Optional

from loguru import logger


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Console sink at `level`, plus a rotating file sink when `log_file` is set."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())

    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            level=level.upper(),
            encoding="utf-8",
        )
