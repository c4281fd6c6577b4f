"""
Easy!Appointments scheduling client.

Creates appointments through the v1 REST API. A single POST per call; no
retries, since a retried create can book the same slot twice.
"""

import logging
from datetime import datetime
from typing import Optional

import httpx

from receptionist.config.constants import EASY_APPOINTMENTS_API_PATH, SCHEDULER_DATETIME_FORMAT
from receptionist.services.exceptions import SchedulingError, SchedulerNotConfiguredError

logger = logging.getLogger(__name__)


class EasyAppointmentsScheduler:
    """Thin client for POST /index.php/api/v1/appointments."""

    def __init__(self, base_url: Optional[str], api_key: Optional[str], client: httpx.AsyncClient):
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.client = client

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    async def create_appointment(
        self,
        *,
        customer_id: int,
        service_id: str,
        provider_id: int,
        start: datetime,
        end: datetime,
        notes: str,
    ) -> str:
        if not self.configured:
            raise SchedulerNotConfiguredError("Easy!Appointments URL or API Key not configured.")

        payload = {
            "start": start.strftime(SCHEDULER_DATETIME_FORMAT),
            "end": end.strftime(SCHEDULER_DATETIME_FORMAT),
            "notes": notes,
            "customerId": customer_id,
            "serviceId": service_id,
            "providerId": provider_id,
        }
        logger.info(
            f"[Scheduler] Attempting to book appointment: Service={service_id}, "
            f"Customer={customer_id}, Start={payload['start']}, End={payload['end']}"
        )

        try:
            response = await self.client.post(
                f"{self.base_url}{EASY_APPOINTMENTS_API_PATH}",
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.HTTPError as e:
            raise SchedulingError(f"Scheduling request failed: {e}") from e

        if response.is_error:
            raise SchedulingError(
                f"Scheduling backend returned {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SchedulingError("Scheduling backend returned invalid JSON") from e

        appointment_id = data.get("id") if isinstance(data, dict) else None
        if appointment_id is None:
            raise SchedulingError("Scheduling backend response has no appointment id")

        logger.info(f"[Scheduler] Easy!Appointments API Response: id={appointment_id}")
        return str(appointment_id)
