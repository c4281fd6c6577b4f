"""
Tests for wiring the pipeline from settings.
"""
import httpx
import pytest

from receptionist.config.settings import Settings
from receptionist.services.factory import build_services
from receptionist.services.language import LanguageCache


@pytest.mark.asyncio
async def test_build_services_with_minimal_settings():
    settings = Settings(
        _env_file=None,
        GOOGLE_PROJECT_ID=None,
        GOOGLE_API_KEY=None,
        EASY_APPOINTMENTS_URL=None,
        EASY_APPOINTMENTS_API_KEY=None,
        ULTRAVOX_TTS_URL=None,
        LANGUAGE_CACHE_BACKEND="memory",
        DEFAULT_LANGUAGE="es",
    )
    client = httpx.AsyncClient()

    services = await build_services(settings, http_client=client)

    pipeline = services.pipeline
    assert pipeline.default_language == "es"
    assert pipeline.resolver.detector is None
    assert isinstance(pipeline.resolver.cache, LanguageCache)
    assert not pipeline.translator.enabled
    assert not pipeline.orchestrator.scheduler.configured
    assert pipeline.synthesizer.synthesizer is None
    assert services.aggregator.scorer is None
    assert services.uses_redis is False

    await services.close()
    assert client.is_closed


@pytest.mark.asyncio
async def test_build_services_with_endpoints_configured():
    settings = Settings(
        _env_file=None,
        GOOGLE_PROJECT_ID=None,
        GOOGLE_API_KEY="api-key",
        EASY_APPOINTMENTS_URL="https://book.example.com",
        EASY_APPOINTMENTS_API_KEY="secret",
        ULTRAVOX_TTS_URL="https://tts.example.com/tts",
        DEFAULT_APPOINTMENT_DURATION=45,
        LANGUAGE_CACHE_BACKEND="memory",
    )

    services = await build_services(settings, http_client=httpx.AsyncClient())

    assert services.pipeline.orchestrator.scheduler.configured
    assert services.pipeline.orchestrator.duration.total_seconds() == 45 * 60
    assert services.pipeline.synthesizer.synthesizer is not None
    assert services.aggregator.scorer is not None

    await services.close()
