"""
Analytics Recorder - best-effort persistence of each call outcome.

Writes happen after the caller already has their response and never raise
into the caller path. A failed write is logged and counted, nothing more.

Usage:
    recorder = AnalyticsRecorder(AnalyticsRepository())

    # Inside a request, after the response is committed:
    background_tasks.add_task(recorder.record, record)
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from receptionist.config.constants import ANALYTICS_TIMEOUT_SEC
from receptionist.schemas.summary import Sentiment
from receptionist.services.metrics import analytics_writes
from receptionist.services.protocols import AnalyticsStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyticsRecord:
    """One completed request. The store stamps the write time."""
    subscriber_email: Optional[str]
    call_id: str
    duration: int
    sentiment: Sentiment
    transcript: str
    detected_language: str
    appointment_booked: bool
    appointment_id: Optional[str] = None
    appointment_time: Optional[datetime] = None
    failure_reason: Optional[str] = None


class AnalyticsRecorder:
    """Best-effort wrapper around an analytics store."""

    def __init__(
        self,
        store: Optional[AnalyticsStoreProtocol],
        timeout_sec: float = ANALYTICS_TIMEOUT_SEC,
    ):
        self.store = store
        self.timeout_sec = timeout_sec

    async def record(self, record: AnalyticsRecord) -> None:
        """Persist one record; all failures are swallowed and logged."""
        if self.store is None:
            logger.debug("[Analytics] No analytics store configured, skipping record")
            return

        try:
            await asyncio.wait_for(self.store.append(record), timeout=self.timeout_sec)
        except Exception as e:
            analytics_writes.labels(status="error").inc()
            logger.error(f"[Analytics] Error saving analytics for call {record.call_id}: {e!r}")
            return

        analytics_writes.labels(status="success").inc()
        logger.info(
            f"[Analytics] Saved call {record.call_id} "
            f"(booked={record.appointment_booked}, reason={record.failure_reason})"
        )
