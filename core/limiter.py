"""
core/limiter.py -- Shared slowapi rate limiter instance.

Imported by api/main.py (mounted as middleware), api/routes/auth.py and
web/routes.py (per-route login limits with @limiter.limit()).

default_limits is the global limit SlowAPIMiddleware applies to every route
without its own @limiter.limit(). A single shared instance means all routes
share one in-memory counter store.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import get_settings

_settings = get_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_settings.global_rate_limit],
    storage_uri="memory://",
)
