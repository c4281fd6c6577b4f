"""
Pipeline Controller - one voice turn from request to spoken response.

Stages run strictly in sequence, each awaited before the next:
    language -> booking (lookup, extraction, scheduling) -> localization -> synthesis

Every path, including unexpected errors, ends with exactly one synthesized
response. The analytics record is built here but written by the caller
after the response has been sent (see AnalyticsRecorder).
"""

import logging
from dataclasses import dataclass
from typing import Optional

from receptionist.config.constants import (
    CANONICAL_LANGUAGE,
    MISSING_CALLER_MESSAGE,
    CUSTOMER_NOT_FOUND_MESSAGE,
    LOOKUP_FAILED_MESSAGE,
    NOT_PARSED_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    PARSING_FAILED_REASON,
    SERVER_ERROR_REASON,
)
from receptionist.schemas.summary import Sentiment
from receptionist.schemas.voice import VoiceRequest
from receptionist.services.analytics import AnalyticsRecord, AnalyticsRecorder
from receptionist.services.booking.orchestrator import (
    BookingOrchestrator,
    BookingOutcome,
    BookingState,
    FailureStage,
)
from receptionist.services.language.resolver import LanguageResolver
from receptionist.services.metrics import booking_outcomes, pipeline_stage_latency
from receptionist.services.translation.adapter import TranslationAdapter
from receptionist.services.tts_service import ResponseSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """What the HTTP layer needs to answer the caller and record the call."""
    status_code: int
    voice_response: str
    language: str
    outcome: Optional[BookingOutcome] = None
    analytics: Optional[AnalyticsRecord] = None


class PipelineController:
    """Sequences the booking pipeline and applies the fallback policy."""

    def __init__(
        self,
        resolver: LanguageResolver,
        translator: TranslationAdapter,
        orchestrator: BookingOrchestrator,
        synthesizer: ResponseSynthesizer,
        recorder: AnalyticsRecorder,
        *,
        default_language: str = "en",
        canonical_language: str = CANONICAL_LANGUAGE,
    ):
        self.resolver = resolver
        self.translator = translator
        self.orchestrator = orchestrator
        self.synthesizer = synthesizer
        self.recorder = recorder
        self.default_language = default_language
        self.canonical_language = canonical_language

    async def handle(self, request: VoiceRequest) -> PipelineResult:
        summary = request.interaction
        hint = summary.detected_language if summary else None

        if not request.phone_number:
            logger.error("[Pipeline] Missing caller_id/From in request.")
            language = hint or self.default_language
            message = await self.translator.translate(MISSING_CALLER_MESSAGE, self.canonical_language, language)
            voice_response = await self.synthesizer.speak(message, language)
            return PipelineResult(status_code=400, voice_response=voice_response, language=language)

        language = hint or self.default_language
        outcome: Optional[BookingOutcome] = None
        failure_reason: Optional[str] = None

        try:
            with pipeline_stage_latency.labels(stage="language").time():
                language = await self.resolver.resolve(request.speech_text, hint)

            with pipeline_stage_latency.labels(stage="booking").time():
                outcome = await self.orchestrator.run(request.phone_number, request.speech_text, language)

            message = await self._localized_message(outcome, language)
            status_code = 500 if outcome.state is BookingState.BOOKING_FAILED else 200
            booking_outcomes.labels(outcome=outcome.state.value).inc()
        except Exception as e:
            logger.exception(f"[Pipeline] Error processing /voice request: {e}")
            booking_outcomes.labels(outcome="error").inc()
            message = await self.translator.translate(GENERIC_ERROR_MESSAGE, self.canonical_language, language)
            status_code = 500
            failure_reason = SERVER_ERROR_REASON.format(error=e)

        with pipeline_stage_latency.labels(stage="synthesis").time():
            voice_response = await self.synthesizer.speak(message, language)

        return PipelineResult(
            status_code=status_code,
            voice_response=voice_response,
            language=language,
            outcome=outcome,
            analytics=self._analytics_record(request, language, outcome, failure_reason),
        )

    async def record(self, result: PipelineResult) -> None:
        """Persist the result's analytics record, if it has one. Never raises."""
        if result.analytics is not None:
            await self.recorder.record(result.analytics)

    async def _localized_message(self, outcome: BookingOutcome, language: str) -> str:
        if outcome.state is BookingState.BOOKED:
            return outcome.confirmation_text

        if outcome.state is BookingState.CUSTOMER_MISSING:
            text = CUSTOMER_NOT_FOUND_MESSAGE
        elif outcome.state is BookingState.NOT_PARSED:
            text = NOT_PARSED_MESSAGE
        elif outcome.failure_stage is FailureStage.LOOKUP:
            text = LOOKUP_FAILED_MESSAGE
        else:
            text = GENERIC_ERROR_MESSAGE

        return await self.translator.translate(text, self.canonical_language, language)

    def _analytics_record(
        self,
        request: VoiceRequest,
        language: str,
        outcome: Optional[BookingOutcome],
        failure_reason: Optional[str],
    ) -> Optional[AnalyticsRecord]:
        customer = outcome.customer if outcome else None
        # Without a customer there is no subscriber to attribute the call to
        if customer is None:
            return None

        summary = request.interaction
        if summary and summary.transcript:
            transcript = summary.transcript_text
        else:
            transcript = f"Caller: {request.speech_text or 'N/A'}\n"

        if failure_reason is None and not outcome.booked:
            if outcome.state is BookingState.NOT_PARSED:
                failure_reason = PARSING_FAILED_REASON
            else:
                failure_reason = outcome.failure_reason

        return AnalyticsRecord(
            subscriber_email=customer.email,
            call_id=request.call_id,
            duration=request.duration,
            sentiment=summary.sentiment if summary else Sentiment.NEUTRAL,
            transcript=transcript,
            detected_language=language,
            appointment_booked=failure_reason is None and outcome.booked,
            appointment_id=outcome.appointment_id,
            appointment_time=outcome.appointment.start if outcome.booked else None,
            failure_reason=failure_reason,
        )
