"""
Repository Layer - Centralized database queries.

This module provides a repository pattern for database access, giving the
pipeline a clear separation between business logic and data access. Both
repositories take the session factory at construction so tests can bind
them to an in-memory database.

Usage:
    from receptionist.services.core.repositories import CustomerRepository

    customer = await CustomerRepository().get_by_phone("+15551234567")
"""

import logging
from datetime import datetime, UTC
from typing import Optional, TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from receptionist.models.database import AsyncSessionLocal
from receptionist.models.customer import Customer
from receptionist.models.call_analytic import CallAnalytic
from receptionist.services.exceptions import CustomerLookupError

if TYPE_CHECKING:
    from receptionist.services.analytics import AnalyticsRecord

logger = logging.getLogger(__name__)


class CustomerRepository:
    """Customer directory backed by the customers table."""

    def __init__(self, session_factory: sessionmaker = AsyncSessionLocal):
        self._session_factory = session_factory

    async def get_by_phone(self, phone_number: str) -> Optional[Customer]:
        """
        Get customer by phone number.

        Args:
            phone_number: Caller number as received from the telephony provider

        Returns:
            Customer if found, None otherwise

        Raises:
            CustomerLookupError: if the database cannot be queried
        """
        try:
            async with self._session_factory() as db:
                result = await db.execute(
                    select(Customer).where(Customer.phone_number == phone_number)
                )
                return result.scalars().first()
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Error getting customer by phone {phone_number}: {e}")
            raise CustomerLookupError(f"Customer lookup failed: {e}") from e


class AnalyticsRepository:
    """Append-only analytics store backed by the call_analytics table."""

    def __init__(self, session_factory: sessionmaker = AsyncSessionLocal):
        self._session_factory = session_factory

    async def append(self, record: "AnalyticsRecord") -> None:
        """
        Insert one analytics row stamped with the write time.

        Errors propagate; the analytics recorder decides what to do with them.
        """
        row = CallAnalytic(
            subscriber_email=record.subscriber_email,
            call_id=record.call_id,
            timestamp=datetime.now(UTC),
            duration=record.duration,
            sentiment=record.sentiment.value,
            transcript=record.transcript,
            detected_language=record.detected_language,
            appointment_booked=record.appointment_booked,
            appointment_id=record.appointment_id,
            appointment_time=record.appointment_time,
            failure_reason=record.failure_reason,
        )
        async with self._session_factory() as db:
            db.add(row)
            await db.commit()
        logger.debug(f"Analytics row {row.id} written for call {record.call_id}")
