"""
Tests for the booking state machine.
"""
from datetime import datetime, timedelta

import pytest

from receptionist.config.constants import SCHEDULER_NOT_CONFIGURED_REASON
from receptionist.services.booking import (
    BookingOrchestrator,
    BookingState,
    FailureStage,
    TemporalExtractor,
    format_confirmation,
)
from receptionist.services.exceptions import (
    CustomerLookupError,
    SchedulingError,
    SchedulerNotConfiguredError,
)
from receptionist.services.translation import TranslationAdapter
from tests.helpers import FakeDirectory, FakeScheduler, FakeTranslator, make_customer

PHONE = "+15551234567"
REFERENCE = datetime(2026, 10, 19, 9, 0)
CONFIRMATION = "Okay, your appointment is booked for Tuesday, October 20, 2026 at 10:00 AM."


def build_orchestrator(directory=None, scheduler=None, translator=None, **kwargs):
    return BookingOrchestrator(
        directory=directory or FakeDirectory([make_customer(phone_number=PHONE)]),
        extractor=TemporalExtractor(),
        scheduler=scheduler,
        translator=TranslationAdapter(translator or FakeTranslator()),
        service_id="default_service",
        provider_id=1,
        **kwargs,
    )


async def test_books_appointment():
    scheduler = FakeScheduler(appointment_id="42")
    orchestrator = build_orchestrator(scheduler=scheduler)

    outcome = await orchestrator.run(PHONE, "book me for tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKED
    assert outcome.booked
    assert outcome.appointment_id == "42"
    assert outcome.confirmation_text == CONFIRMATION
    assert outcome.customer.id == 7
    assert scheduler.calls == [{
        "customer_id": 7,
        "service_id": "default_service",
        "provider_id": 1,
        "start": datetime(2026, 10, 20, 10, 0),
        "end": datetime(2026, 10, 20, 10, 30),
        "notes": 'Booked via Voice Agent. Original request: "book me for tomorrow at 10am"',
    }]


async def test_duration_sets_end():
    scheduler = FakeScheduler()
    orchestrator = build_orchestrator(scheduler=scheduler, duration_minutes=45)

    outcome = await orchestrator.run(PHONE, "Friday at 3pm", "en", reference=REFERENCE)

    assert outcome.appointment.end - outcome.appointment.start == timedelta(minutes=45)


async def test_spanish_caller_is_parsed_in_english_and_confirmed_in_spanish():
    translator = FakeTranslator({
        ("mañana a las 10am", "es", "en"): "tomorrow at 10am",
        (CONFIRMATION, "en", "es"): "Bien, su cita está reservada para el martes 20 de octubre a las 10:00.",
    })
    orchestrator = build_orchestrator(scheduler=FakeScheduler(), translator=translator)

    outcome = await orchestrator.run(PHONE, "mañana a las 10am", "es", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKED
    assert outcome.appointment.start == datetime(2026, 10, 20, 10, 0)
    assert outcome.confirmation_text.startswith("Bien, su cita")
    assert translator.calls == [
        ("mañana a las 10am", "es", "en"),
        (CONFIRMATION, "en", "es"),
    ]


async def test_english_caller_needs_no_translation():
    translator = FakeTranslator()
    orchestrator = build_orchestrator(scheduler=FakeScheduler(), translator=translator)

    await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert translator.calls == []


async def test_unknown_caller():
    scheduler = FakeScheduler()
    orchestrator = build_orchestrator(directory=FakeDirectory([]), scheduler=scheduler)

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.CUSTOMER_MISSING
    assert outcome.customer is None
    assert scheduler.calls == []


async def test_lookup_error_fails_at_lookup_stage():
    directory = FakeDirectory(error=CustomerLookupError("Customer lookup failed: connection refused"))
    orchestrator = build_orchestrator(directory=directory, scheduler=FakeScheduler())

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKING_FAILED
    assert outcome.failure_stage is FailureStage.LOOKUP
    assert outcome.failure_reason == "Customer lookup failed: connection refused"
    assert outcome.customer is None


async def test_lookup_timeout_fails_at_lookup_stage():
    directory = FakeDirectory([make_customer(phone_number=PHONE)], delay=1)
    orchestrator = build_orchestrator(directory=directory, scheduler=FakeScheduler(), lookup_timeout_sec=0.01)

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKING_FAILED
    assert outcome.failure_stage is FailureStage.LOOKUP


@pytest.mark.parametrize("speech", [None, "", "call me later"])
async def test_unparseable_request(speech):
    scheduler = FakeScheduler()
    orchestrator = build_orchestrator(scheduler=scheduler)

    outcome = await orchestrator.run(PHONE, speech, "en", reference=REFERENCE)

    assert outcome.state is BookingState.NOT_PARSED
    assert outcome.customer is not None
    assert outcome.appointment is None
    assert scheduler.calls == []


async def test_scheduler_error_reason_is_verbatim():
    scheduler = FakeScheduler(error=SchedulingError("Scheduling backend returned 409: slot taken"))
    orchestrator = build_orchestrator(scheduler=scheduler)

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKING_FAILED
    assert outcome.failure_stage is FailureStage.SCHEDULING
    assert outcome.failure_reason == "Scheduling backend returned 409: slot taken"
    assert outcome.appointment.start == datetime(2026, 10, 20, 10, 0)
    # Never retried
    assert len(scheduler.calls) == 1


async def test_scheduler_timeout():
    orchestrator = build_orchestrator(scheduler=FakeScheduler(delay=1), scheduler_timeout_sec=0.01)

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKING_FAILED
    assert "timed out" in outcome.failure_reason


async def test_unconfigured_scheduler_backend():
    scheduler = FakeScheduler(error=SchedulerNotConfiguredError("Easy!Appointments URL or API Key not configured."))
    orchestrator = build_orchestrator(scheduler=scheduler)

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKING_FAILED
    assert outcome.failure_reason == "Easy!Appointments URL or API Key not configured."


async def test_missing_scheduler():
    orchestrator = build_orchestrator(scheduler=None)

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKING_FAILED
    assert outcome.failure_reason == SCHEDULER_NOT_CONFIGURED_REASON


def test_format_confirmation():
    assert format_confirmation(datetime(2026, 10, 20, 10, 0)) == CONFIRMATION
    assert format_confirmation(datetime(2026, 10, 23, 15, 5)) == (
        "Okay, your appointment is booked for Friday, October 23, 2026 at 3:05 PM."
    )
    assert format_confirmation(datetime(2026, 10, 23, 0, 0)).endswith("at 12:00 AM.")


async def test_unexpected_scheduler_error_keeps_customer():
    orchestrator = build_orchestrator(scheduler=FakeScheduler(error=RuntimeError("unexpected payload")))

    outcome = await orchestrator.run(PHONE, "tomorrow at 10am", "en", reference=REFERENCE)

    assert outcome.state is BookingState.BOOKING_FAILED
    assert outcome.failure_stage is FailureStage.INTERNAL
    assert outcome.failure_reason == "Server error: unexpected payload"
    assert outcome.customer.id == 7
