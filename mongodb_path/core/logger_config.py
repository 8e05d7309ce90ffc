"""
Logging setup for scripts. Library modules only do `from loguru import logger`;
the sink and level are decided once here by whoever runs the process.
"""
import sys
from typing import Optional

from loguru import logger

from mongodb_path.core.settings import settings

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}:{function}:{line} | <level>{message}</level>"


def configure_logging(level: Optional[str] = None) -> None:
    """Replace loguru's default handler with a single stderr sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
