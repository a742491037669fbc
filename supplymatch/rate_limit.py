"""Shared rate limiter for the scoring endpoints.

In-memory storage by default; point RATE_LIMIT_STORAGE_URI at a shared
backend (e.g. redis://) to share limits across workers.
"""

from loguru import logger
from slowapi import Limiter
from slowapi.util import get_remote_address

from .config import get_settings

settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
    storage_uri=settings.rate_limit_storage_uri or None,
)

logger.debug(
    f"Rate limiter configured: {settings.rate_limit_default} "
    f"(enabled={settings.rate_limit_enabled}, storage={settings.rate_limit_storage_uri or 'memory://'})"
)
