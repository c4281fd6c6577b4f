"""
CallAnalytic Model - Per-call outcome record

One append-only row per completed /voice request. Read later by the
analytics dashboard (call volume, sentiment and language charts).
"""
from sqlalchemy import Column, String, DateTime, Integer, Text, Boolean
import uuid

from .database import Base


class CallAnalytic(Base):
    """Outcome of one voice booking attempt"""
    __tablename__ = "call_analytics"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    subscriber_email = Column(String(255), nullable=True, index=True)
    call_id = Column(String(64), nullable=False, index=True)

    # Write time, not event time
    timestamp = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=False, default=0)

    sentiment = Column(String(10), nullable=False, default="neutral")
    transcript = Column(Text, nullable=False, default="")
    detected_language = Column(String(10), nullable=False)

    appointment_booked = Column(Boolean, nullable=False, default=False)
    appointment_id = Column(String(64), nullable=True)
    appointment_time = Column(DateTime(timezone=True), nullable=True)
    failure_reason = Column(Text, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "subscriberEmail": self.subscriber_email,
            "callId": self.call_id,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "duration": self.duration,
            "sentiment": self.sentiment,
            "transcript": self.transcript,
            "detectedLanguage": self.detected_language,
            "appointmentBooked": self.appointment_booked,
            "appointmentId": self.appointment_id,
            "appointmentTime": self.appointment_time.isoformat() if self.appointment_time else None,
            "failureReason": self.failure_reason,
        }
