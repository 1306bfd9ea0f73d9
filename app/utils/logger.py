"""
Logging configuration
"""
from loguru import logger
import sys
from app.config import get_settings

settings = get_settings()

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)


def setup_logger(log_level: str = settings.log_level, log_dir: str = settings.log_dir):
    """
    Configure the shared loguru logger.

    Console output always; daily rotated files under `log_dir` unless it is
    empty (LOG_DIR= for containers that only collect stdout).
    """
    logger.remove()  # Remove default handler

    logger.add(sys.stdout, colorize=True, format=CONSOLE_FORMAT, level=log_level)

    if log_dir:
        # Request log: source selection, degradations, dropped records
        logger.add(
            f"{log_dir}/vendor_analytics_{{time:YYYY-MM-DD}}.log",
            rotation="00:00",
            retention="30 days",
            compression="zip",
            level="INFO"
        )
        # Upstream failures only
        logger.add(
            f"{log_dir}/upstream_errors_{{time:YYYY-MM-DD}}.log",
            rotation="00:00",
            retention="90 days",
            level="ERROR"
        )

    return logger


# Initialize logger
log = setup_logger()
