"""
Composition root - builds every capability object from settings.

Each collaborator is optional: a missing setting disables that capability
and the pipeline falls back as documented for the component (default
language, untranslated text, placeholder audio, no sentiment).
"""

import logging
from dataclasses import dataclass
from typing import Optional
from zoneinfo import ZoneInfo

import httpx

from receptionist.config.redis import get_redis, close_redis
from receptionist.config.settings import Settings
from receptionist.services.analytics import AnalyticsRecorder
from receptionist.services.booking import BookingOrchestrator, EasyAppointmentsScheduler, TemporalExtractor
from receptionist.services.core.repositories import CustomerRepository, AnalyticsRepository
from receptionist.services.language import LanguageCache, RedisLanguageCache, LanguageResolver
from receptionist.services.pipeline import PipelineController
from receptionist.services.sentiment import GoogleSentimentScorer
from receptionist.services.session import SessionAggregator
from receptionist.services.translation import TranslationAdapter
from receptionist.services.tts_service import HttpSpeechSynthesizer, ResponseSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything the API layer needs, plus what must be closed on shutdown."""
    pipeline: PipelineController
    aggregator: SessionAggregator
    http_client: httpx.AsyncClient
    uses_redis: bool = False

    async def close(self):
        await self.http_client.aclose()
        if self.uses_redis:
            await close_redis()


def _build_gcp_translation(settings: Settings):
    if not settings.GOOGLE_PROJECT_ID:
        logger.warning("GOOGLE_PROJECT_ID not set. Translation features disabled.")
        return None
    try:
        from receptionist.services.gcp import GCPTranslationService
        service = GCPTranslationService(settings.GOOGLE_PROJECT_ID)
    except Exception as e:
        logger.error(f"Error initializing Google Translate client: {e}")
        return None
    logger.info("Google Translate Client Initialized.")
    return service


async def build_services(settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> Services:
    http_client = http_client or httpx.AsyncClient()

    gcp = _build_gcp_translation(settings)

    uses_redis = settings.LANGUAGE_CACHE_BACKEND == "redis"
    if uses_redis:
        cache = RedisLanguageCache(await get_redis())
        logger.info("Language cache: Redis")
    else:
        cache = LanguageCache()
        logger.info("Language cache: in-memory")

    translator = TranslationAdapter(gcp)
    resolver = LanguageResolver(
        detector=gcp,
        cache=cache,
        default_language=settings.DEFAULT_LANGUAGE,
        min_confidence=settings.LANGUAGE_MIN_CONFIDENCE,
    )

    if not (settings.EASY_APPOINTMENTS_URL and settings.EASY_APPOINTMENTS_API_KEY):
        logger.warning("EASY_APPOINTMENTS_URL or EASY_APPOINTMENTS_API_KEY not set. Booking will fail.")
    scheduler = EasyAppointmentsScheduler(
        settings.EASY_APPOINTMENTS_URL,
        settings.EASY_APPOINTMENTS_API_KEY,
        http_client,
    )

    orchestrator = BookingOrchestrator(
        directory=CustomerRepository(),
        extractor=TemporalExtractor(),
        scheduler=scheduler,
        translator=translator,
        service_id=settings.DEFAULT_APPOINTMENT_SERVICE_ID,
        provider_id=settings.DEFAULT_APPOINTMENT_PROVIDER_ID,
        duration_minutes=settings.DEFAULT_APPOINTMENT_DURATION,
        timezone=ZoneInfo(settings.TIMEZONE),
    )

    if settings.ULTRAVOX_TTS_URL:
        synthesizer = ResponseSynthesizer(HttpSpeechSynthesizer(settings.ULTRAVOX_TTS_URL, http_client))
    else:
        logger.warning("ULTRAVOX_TTS_URL not set. Placeholder TTS will be used.")
        synthesizer = ResponseSynthesizer(None)

    pipeline = PipelineController(
        resolver=resolver,
        translator=translator,
        orchestrator=orchestrator,
        synthesizer=synthesizer,
        recorder=AnalyticsRecorder(AnalyticsRepository()),
        default_language=settings.DEFAULT_LANGUAGE,
    )

    scorer = None
    if settings.GOOGLE_API_KEY:
        scorer = GoogleSentimentScorer(settings.GOOGLE_API_KEY, http_client)
    else:
        logger.warning("GOOGLE_API_KEY not set. Sentiment analysis disabled.")

    return Services(
        pipeline=pipeline,
        aggregator=SessionAggregator(scorer=scorer),
        http_client=http_client,
        uses_redis=uses_redis,
    )
