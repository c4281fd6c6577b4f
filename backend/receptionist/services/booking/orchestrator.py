"""
Booking Orchestrator - the booking state machine for one voice turn.

    Start -> CustomerLookup -> CustomerMissing
                            -> CustomerFound -> TimeExtraction -> NotParsed
                                                               -> Parsed -> Booking -> Booked
                                                                                    -> BookingFailed

Every run ends in exactly one terminal state. The scheduler is called at
most once; a failed call is reported, never retried.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from enum import Enum
from typing import Optional

from receptionist.config.constants import (
    CANONICAL_LANGUAGE,
    CONFIRMATION_TEMPLATE,
    APPOINTMENT_NOTES_TEMPLATE,
    DIRECTORY_TIMEOUT_SEC,
    SCHEDULER_TIMEOUT_SEC,
    SCHEDULER_NOT_CONFIGURED_REASON,
    SERVER_ERROR_REASON,
)
from receptionist.models.customer import Customer
from receptionist.services.booking.temporal import TemporalExtractor
from receptionist.services.exceptions import CustomerLookupError, SchedulingError
from receptionist.services.protocols import CustomerDirectoryProtocol, SchedulerProtocol
from receptionist.services.translation.adapter import TranslationAdapter

logger = logging.getLogger(__name__)


class BookingState(str, Enum):
    CUSTOMER_MISSING = "customer_missing"
    NOT_PARSED = "not_parsed"
    BOOKED = "booked"
    BOOKING_FAILED = "booking_failed"


class FailureStage(str, Enum):
    LOOKUP = "lookup"
    SCHEDULING = "scheduling"
    INTERNAL = "internal"


@dataclass(frozen=True)
class AppointmentRequest:
    """Everything the scheduler needs for one appointment."""
    customer_id: int
    service_id: str
    provider_id: int
    start: datetime
    end: datetime
    notes: str


@dataclass
class BookingOutcome:
    """Terminal state of one orchestrator run."""
    state: BookingState
    customer: Optional[Customer] = None
    appointment: Optional[AppointmentRequest] = None
    appointment_id: Optional[str] = None
    confirmation_text: Optional[str] = None
    failure_reason: Optional[str] = None
    failure_stage: Optional[FailureStage] = None

    @property
    def booked(self) -> bool:
        return self.state is BookingState.BOOKED


def format_confirmation(start: datetime) -> str:
    """English confirmation sentence, e.g. '... for Tuesday, October 20, 2026 at 10:00 AM.'"""
    date_text = f"{start:%A, %B} {start.day}, {start.year}"
    hour = start.hour % 12 or 12
    time_text = f"{hour}:{start.minute:02d} {'AM' if start.hour < 12 else 'PM'}"
    return CONFIRMATION_TEMPLATE.format(date=date_text, time=time_text)


class BookingOrchestrator:
    """Looks up the caller, extracts a start time and books it."""

    def __init__(
        self,
        directory: CustomerDirectoryProtocol,
        extractor: TemporalExtractor,
        scheduler: Optional[SchedulerProtocol],
        translator: TranslationAdapter,
        *,
        service_id: str,
        provider_id: int,
        duration_minutes: int = 30,
        canonical_language: str = CANONICAL_LANGUAGE,
        timezone: Optional[tzinfo] = None,
        lookup_timeout_sec: float = DIRECTORY_TIMEOUT_SEC,
        scheduler_timeout_sec: float = SCHEDULER_TIMEOUT_SEC,
    ):
        self.directory = directory
        self.extractor = extractor
        self.scheduler = scheduler
        self.translator = translator
        self.service_id = service_id
        self.provider_id = provider_id
        self.duration = timedelta(minutes=duration_minutes)
        self.canonical_language = canonical_language
        self.timezone = timezone
        self.lookup_timeout_sec = lookup_timeout_sec
        self.scheduler_timeout_sec = scheduler_timeout_sec

    async def run(
        self,
        phone_number: str,
        speech_text: Optional[str],
        language: str,
        reference: Optional[datetime] = None,
    ) -> BookingOutcome:
        # --- CustomerLookup ---
        try:
            customer = await asyncio.wait_for(
                self.directory.get_by_phone(phone_number),
                timeout=self.lookup_timeout_sec
            )
        except asyncio.TimeoutError:
            logger.error(f"[Booking] Customer lookup timed out after {self.lookup_timeout_sec}s")
            return BookingOutcome(
                state=BookingState.BOOKING_FAILED,
                failure_reason=f"Customer lookup timed out after {self.lookup_timeout_sec}s",
                failure_stage=FailureStage.LOOKUP,
            )
        except CustomerLookupError as e:
            logger.error(f"[Booking] Database error fetching customer: {e}")
            return BookingOutcome(
                state=BookingState.BOOKING_FAILED,
                failure_reason=str(e),
                failure_stage=FailureStage.LOOKUP,
            )

        if customer is None:
            logger.info(f"[Booking] Customer not found for phone number: {phone_number}")
            return BookingOutcome(state=BookingState.CUSTOMER_MISSING)

        logger.info(f"[Booking] Found customer: ID={customer.id}, Email={customer.email}")

        try:
            return await self._book(customer, speech_text, language, reference)
        except Exception as e:
            logger.exception(f"[Booking] Unexpected error booking for customer {customer.id}: {e}")
            return BookingOutcome(
                state=BookingState.BOOKING_FAILED,
                customer=customer,
                failure_reason=SERVER_ERROR_REASON.format(error=e),
                failure_stage=FailureStage.INTERNAL,
            )

    async def _book(
        self,
        customer: Customer,
        speech_text: Optional[str],
        language: str,
        reference: Optional[datetime],
    ) -> BookingOutcome:
        # --- TimeExtraction ---
        reference = reference or datetime.now(self.timezone)
        start = None
        if speech_text:
            text_to_parse = await self.translator.translate(speech_text, language, self.canonical_language)
            start = self.extractor.extract(text_to_parse, reference)

        if start is None:
            logger.info("[Booking] Appointment not booked (could not parse date/time)")
            return BookingOutcome(state=BookingState.NOT_PARSED, customer=customer)

        logger.info(f"[Booking] Parsed appointment time: {start.isoformat()}")

        # --- Booking ---
        appointment = AppointmentRequest(
            customer_id=customer.id,
            service_id=self.service_id,
            provider_id=self.provider_id,
            start=start,
            end=start + self.duration,
            notes=APPOINTMENT_NOTES_TEMPLATE.format(speech=speech_text),
        )

        if self.scheduler is None:
            logger.error("[Booking] No scheduling backend configured")
            return self._failed(customer, appointment, SCHEDULER_NOT_CONFIGURED_REASON)

        try:
            appointment_id = await asyncio.wait_for(
                self.scheduler.create_appointment(
                    customer_id=appointment.customer_id,
                    service_id=appointment.service_id,
                    provider_id=appointment.provider_id,
                    start=appointment.start,
                    end=appointment.end,
                    notes=appointment.notes,
                ),
                timeout=self.scheduler_timeout_sec
            )
        except asyncio.TimeoutError:
            logger.error(f"[Booking] Scheduling call timed out after {self.scheduler_timeout_sec}s")
            return self._failed(
                customer, appointment,
                f"Scheduling request timed out after {self.scheduler_timeout_sec}s"
            )
        except SchedulingError as e:
            logger.error(f"[Booking] Scheduling failed: {e}")
            return self._failed(customer, appointment, str(e))

        confirmation = format_confirmation(start)
        localized = await self.translator.translate(confirmation, self.canonical_language, language)

        return BookingOutcome(
            state=BookingState.BOOKED,
            customer=customer,
            appointment=appointment,
            appointment_id=appointment_id,
            confirmation_text=localized,
        )

    def _failed(self, customer: Customer, appointment: AppointmentRequest, reason: str) -> BookingOutcome:
        return BookingOutcome(
            state=BookingState.BOOKING_FAILED,
            customer=customer,
            appointment=appointment,
            failure_reason=reason,
            failure_stage=FailureStage.SCHEDULING,
        )
