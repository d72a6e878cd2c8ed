"""Logging setup"""

import logging
import sys

from line_webhook.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = None):
    """
    Configure root logging once at startup
    
    Args:
        level: Log level name; defaults to settings.LOG_LEVEL
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True
    )
    
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def mask_secret(value: str) -> str:
    """Mask a secret for safe logging"""
    if not value:
        return "NOT SET"
    if len(value) <= 4:
        return "***"
    return f"{value[:2]}***{value[-2:]}"
