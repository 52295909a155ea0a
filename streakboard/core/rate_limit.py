"""
Per-client rate limit, shared by every /api route (one bucket per client
address, not one per endpoint). Routes opt in with ``@api_limit`` and take a
``request: Request`` argument; /health stays unlimited.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from streakboard.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.RATE_LIMIT_ENABLED,
)

api_limit = limiter.shared_limit(settings.RATE_LIMIT, scope="api")
