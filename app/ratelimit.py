from __future__ import annotations

import hashlib
import logging

from fastapi import HTTPException, Request

from app.config import settings
from app.redis_client import redis_client

log = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too many requests. Please try again later."

def _hash(s: str) -> str:
    return hashlib.sha256(s.encode("utf-8")).hexdigest()[:24]

# fixed-window limiter using redis INCR + EXPIRE
def rate_limit(name: str, limit_per_window: int, window_seconds: int):
    async def _dep(request: Request) -> None:
        if not settings.rate_limit_enabled:
            return

        ip = (request.client.host if request.client else "unknown").strip()
        key = f"rl:{name}:{_hash(ip)}"

        try:
            pipe = redis_client.pipeline()
            pipe.incr(key)
            pipe.expire(key, window_seconds, nx=True)
            count, _ = pipe.execute()
        except Exception as e:
            # fail-open if redis is down
            log.warning("rate limiter unavailable, allowing request: %s", e.__class__.__name__)
            return

        if int(count) > int(limit_per_window):
            raise HTTPException(status_code=429, detail=TOO_MANY_REQUESTS)

    return _dep

api_rate_limit = rate_limit(
    "api",
    limit_per_window=settings.rate_limit_api_per_window,
    window_seconds=settings.rate_limit_api_window_seconds,
)
