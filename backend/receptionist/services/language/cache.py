"""
Language Cache

Caches detected language codes keyed by utterance text so repeated phrases
("yes", "hola", "tomorrow at ten") never hit the detection provider twice
within the TTL.

Two backends share one interface:
- LanguageCache: in-process LRU bounded by size, entries expire after TTL
- RedisLanguageCache: shared across workers, expiry handled by Redis (SET EX)

A backend error is treated as a miss; the resolver never fails because of
its cache.
"""
from collections import OrderedDict
from typing import Callable, Optional, Tuple
import hashlib
import logging
import time

import redis.asyncio as redis

from receptionist.config.constants import (
    LANGUAGE_CACHE_TTL_SEC,
    LANGUAGE_CACHE_MAX_SIZE,
    LANGUAGE_CACHE_KEY_PREFIX,
)
from receptionist.services.metrics import language_cache_lookups

logger = logging.getLogger(__name__)


def get_cache_key(text: str) -> str:
    """
    Generate cache key for an utterance.

    Whitespace and case are normalized so "Hola " and "hola" share an entry.

    Returns:
        Prefixed 16-character hex hash
    """
    normalized = " ".join(text.split()).lower()
    return LANGUAGE_CACHE_KEY_PREFIX + hashlib.md5(normalized.encode()).hexdigest()[:16]


class LanguageCache:
    """LRU cache of detected languages with per-entry expiry."""

    def __init__(
        self,
        maxsize: int = LANGUAGE_CACHE_MAX_SIZE,
        ttl_sec: float = LANGUAGE_CACHE_TTL_SEC,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize language cache.

        Args:
            maxsize: Maximum number of cached detections
            ttl_sec: Seconds an entry stays valid after it is stored
            clock: Monotonic time source (injectable for tests)
        """
        self._cache: "OrderedDict[str, Tuple[str, float]]" = OrderedDict()
        self._maxsize = maxsize
        self._ttl_sec = ttl_sec
        self._clock = clock
        self._hits = 0
        self._misses = 0

    async def get(self, text: str) -> Optional[str]:
        key = get_cache_key(text)
        entry = self._cache.get(key)
        if entry is not None:
            language_code, expires_at = entry
            if self._clock() < expires_at:
                self._cache.move_to_end(key)
                self._hits += 1
                language_cache_lookups.labels(result="hit").inc()
                logger.debug(f"Language cache HIT for key {key} -> {language_code}")
                return language_code
            # Expired entries are evicted lazily on access
            del self._cache[key]

        self._misses += 1
        language_cache_lookups.labels(result="miss").inc()
        logger.debug(f"Language cache MISS for key {key}")
        return None

    async def set(self, text: str, language_code: str) -> None:
        key = get_cache_key(text)

        if len(self._cache) >= self._maxsize and key not in self._cache:
            oldest_key, _ = self._cache.popitem(last=False)
            logger.debug(f"Language cache evicted oldest entry: {oldest_key}")

        self._cache[key] = (language_code, self._clock() + self._ttl_sec)
        self._cache.move_to_end(key)
        logger.debug(f"Language cache PUT for key {key} ({language_code})")

    def get_stats(self) -> dict:
        """
        Get cache statistics.

        Returns:
            Dict with hits, misses, hit_rate, size
        """
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0

        return {
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 2),
            "cache_size": len(self._cache),
            "max_size": self._maxsize
        }

    def clear(self):
        """Clear all cached entries."""
        self._cache.clear()
        logger.info("Language cache cleared")


class RedisLanguageCache:
    """Language cache stored in Redis, shared by every worker process."""

    def __init__(self, client: redis.Redis, ttl_sec: int = LANGUAGE_CACHE_TTL_SEC):
        self._redis = client
        self._ttl_sec = ttl_sec

    async def get(self, text: str) -> Optional[str]:
        key = get_cache_key(text)
        try:
            value = await self._redis.get(key)
        except redis.RedisError as e:
            logger.warning(f"Language cache read failed, treating as miss: {e}")
            language_cache_lookups.labels(result="miss").inc()
            return None

        if value is None:
            language_cache_lookups.labels(result="miss").inc()
            return None

        language_cache_lookups.labels(result="hit").inc()
        if isinstance(value, bytes):
            value = value.decode()
        logger.info(f"Language cache hit: {value}")
        return value

    async def set(self, text: str, language_code: str) -> None:
        key = get_cache_key(text)
        try:
            await self._redis.set(key, language_code, ex=self._ttl_sec)
            logger.info(f"Language cached: {language_code}")
        except redis.RedisError as e:
            logger.warning(f"Language cache write failed: {e}")
