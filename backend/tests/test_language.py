"""
Tests for language detection caching and resolution.
"""
from unittest.mock import AsyncMock

import fakeredis
import pytest
from redis.exceptions import RedisError

from receptionist.services.exceptions import LanguageDetectionError
from receptionist.services.language import (
    LanguageCache,
    RedisLanguageCache,
    LanguageResolver,
    get_cache_key,
)
from tests.helpers import FakeDetector


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_cache_key_normalizes_case_and_whitespace():
    assert get_cache_key("Hola ") == get_cache_key("hola")
    assert get_cache_key("buenos   dias") == get_cache_key("Buenos dias")
    assert get_cache_key("hola").startswith("lang:")
    assert get_cache_key("hola") != get_cache_key("hello")


@pytest.mark.asyncio
async def test_memory_cache_expires_after_ttl():
    clock = FakeClock()
    cache = LanguageCache(ttl_sec=3600, clock=clock)

    await cache.set("bonjour", "fr")
    clock.now += 3599
    assert await cache.get("bonjour") == "fr"

    clock.now += 2
    assert await cache.get("bonjour") is None
    assert cache.get_stats()["cache_size"] == 0


@pytest.mark.asyncio
async def test_memory_cache_evicts_least_recently_used():
    cache = LanguageCache(maxsize=2)

    await cache.set("uno", "es")
    await cache.set("one", "en")
    await cache.get("uno")
    await cache.set("eins", "de")

    assert await cache.get("one") is None
    assert await cache.get("uno") == "es"
    assert await cache.get("eins") == "de"


@pytest.mark.asyncio
async def test_memory_cache_stats_and_clear():
    cache = LanguageCache()
    await cache.set("ciao", "it")
    await cache.get("ciao")
    await cache.get("hallo")

    stats = cache.get_stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["hit_rate_percent"] == 50.0

    cache.clear()
    assert cache.get_stats()["cache_size"] == 0


@pytest.mark.asyncio
async def test_redis_cache_round_trip_with_ttl():
    client = fakeredis.FakeAsyncRedis(decode_responses=True)
    cache = RedisLanguageCache(client, ttl_sec=3600)

    assert await cache.get("olá") is None
    await cache.set("olá", "pt")

    assert await cache.get("Olá") == "pt"
    ttl = await client.ttl(get_cache_key("olá"))
    assert 0 < ttl <= 3600


@pytest.mark.asyncio
async def test_redis_cache_errors_are_misses():
    client = AsyncMock()
    client.get.side_effect = RedisError("connection refused")
    client.set.side_effect = RedisError("connection refused")
    cache = RedisLanguageCache(client)

    assert await cache.get("hola") is None
    # Write failures are logged, never raised
    await cache.set("hola", "es")


@pytest.mark.asyncio
async def test_hint_short_circuits_detection_and_cache():
    detector = FakeDetector(language_code="es")
    cache = LanguageCache()
    resolver = LanguageResolver(detector, cache)

    assert await resolver.resolve("quiero una cita", hint="fr") == "fr"
    assert detector.calls == []
    assert cache.get_stats()["misses"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "   "])
async def test_no_text_returns_default(text):
    detector = FakeDetector()
    resolver = LanguageResolver(detector, LanguageCache(), default_language="en")

    assert await resolver.resolve(text) == "en"
    assert detector.calls == []


@pytest.mark.asyncio
async def test_cache_hit_skips_detection():
    detector = FakeDetector(language_code="es")
    resolver = LanguageResolver(detector, LanguageCache())

    assert await resolver.resolve("quiero una cita mañana") == "es"
    assert await resolver.resolve("Quiero una cita  mañana") == "es"
    assert len(detector.calls) == 1


@pytest.mark.asyncio
async def test_expired_entry_triggers_new_detection():
    clock = FakeClock()
    detector = FakeDetector(language_code="es")
    resolver = LanguageResolver(detector, LanguageCache(ttl_sec=3600, clock=clock))

    await resolver.resolve("hola")
    clock.now += 3601
    await resolver.resolve("hola")

    assert len(detector.calls) == 2


@pytest.mark.asyncio
async def test_detection_failure_falls_back_without_caching():
    detector = FakeDetector(error=LanguageDetectionError("quota exceeded"))
    cache = LanguageCache()
    resolver = LanguageResolver(detector, cache, default_language="en")

    assert await resolver.resolve("hola") == "en"
    assert await cache.get("hola") is None

    detector.error = None
    assert await resolver.resolve("hola") == "es"
    assert len(detector.calls) == 2


@pytest.mark.asyncio
async def test_detection_timeout_falls_back():
    detector = FakeDetector(delay=1)
    resolver = LanguageResolver(detector, LanguageCache(), default_language="en", timeout_sec=0.01)

    assert await resolver.resolve("hola") == "en"


@pytest.mark.asyncio
async def test_undetermined_language_falls_back():
    detector = FakeDetector(language_code="und")
    resolver = LanguageResolver(detector, LanguageCache(), default_language="en")

    assert await resolver.resolve("mmm") == "en"


@pytest.mark.asyncio
async def test_low_confidence_rejected_when_threshold_set():
    detector = FakeDetector(language_code="it", confidence=0.4)
    cache = LanguageCache()
    resolver = LanguageResolver(detector, cache, default_language="en", min_confidence=0.7)

    assert await resolver.resolve("ok") == "en"
    assert await cache.get("ok") is None


@pytest.mark.asyncio
async def test_low_confidence_accepted_without_threshold():
    detector = FakeDetector(language_code="it", confidence=0.4)
    resolver = LanguageResolver(detector, LanguageCache())

    assert await resolver.resolve("ok") == "it"


@pytest.mark.asyncio
async def test_no_detector_returns_default():
    resolver = LanguageResolver(None, LanguageCache(), default_language="de")

    assert await resolver.resolve("hello there") == "de"
