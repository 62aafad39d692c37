"""Logging configuration for the application."""
import logging
import sys
from app.config import settings


def resolve_log_level() -> int:
    """LOG_LEVEL wins when set; otherwise DEBUG in development, INFO elsewhere."""
    if settings.log_level:
        return getattr(logging, settings.log_level.upper(), logging.INFO)
    return logging.DEBUG if settings.is_development else logging.INFO


logger = logging.getLogger("app")
logger.setLevel(resolve_log_level())

handler = logging.StreamHandler(sys.stdout)
handler.setFormatter(logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
))

if not logger.handlers:
    logger.addHandler(handler)

# Keep account events out of uvicorn's root handlers
logger.propagate = False

__all__ = ["logger"]
