"""
Shared Redis connection for the language cache backend.

Only created when LANGUAGE_CACHE_BACKEND is "redis"; the in-memory cache
needs no connection at all.
"""
from typing import Optional

import redis.asyncio as redis

from receptionist.config.constants import REDIS_SOCKET_TIMEOUT_SEC
from receptionist.config.settings import Settings, settings

_redis: Optional[redis.Redis] = None


def build_redis_url(config: Settings = settings) -> str:
    auth = f":{config.REDIS_PASSWORD}@" if config.REDIS_PASSWORD else ""
    return f"redis://{auth}{config.REDIS_HOST}:{config.REDIS_PORT}/{config.REDIS_DB}"


async def get_redis() -> redis.Redis:
    global _redis
    if _redis is None:
        # Cached values are short language codes, decode them to str
        _redis = redis.Redis.from_url(
            build_redis_url(),
            decode_responses=True,
            socket_timeout=REDIS_SOCKET_TIMEOUT_SEC,
            socket_connect_timeout=REDIS_SOCKET_TIMEOUT_SEC,
        )
    return _redis


async def close_redis():
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
