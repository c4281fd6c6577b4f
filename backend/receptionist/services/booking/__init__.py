"""
Booking Package

Temporal extraction, the booking state machine and the scheduler client.
"""

from receptionist.services.booking.temporal import TemporalExtractor
from receptionist.services.booking.orchestrator import (
    BookingOrchestrator,
    BookingOutcome,
    BookingState,
    FailureStage,
    AppointmentRequest,
    format_confirmation,
)
from receptionist.services.booking.scheduler import EasyAppointmentsScheduler

__all__ = [
    "TemporalExtractor",
    "BookingOrchestrator",
    "BookingOutcome",
    "BookingState",
    "FailureStage",
    "AppointmentRequest",
    "format_confirmation",
    "EasyAppointmentsScheduler",
]
