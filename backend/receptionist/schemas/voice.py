"""
Voice Request/Response Schemas

Normalizes the vendor payload posted to /voice. Telephony providers and the
interaction service name the same values differently, so each logical field
is read from an ordered list of accepted source fields (see constants.py).
"""

import json
import logging
from typing import Any, Mapping, Optional, Sequence

from pydantic import BaseModel, ValidationError

from receptionist.config.constants import (
    PHONE_NUMBER_FIELDS,
    CALL_ID_FIELDS,
    DURATION_FIELDS,
    SPEECH_TEXT_FIELDS,
    INTERACTION_FIELDS,
    DEFAULT_CALL_ID,
)
from receptionist.schemas.summary import InteractionSummary

logger = logging.getLogger(__name__)


def first_present(payload: Mapping[str, Any], fields: Sequence[str]) -> Any:
    """Return the value of the first field in `fields` that is present and non-empty."""
    for field in fields:
        value = payload.get(field)
        if value is not None and value != "":
            return value
    return None


def _parse_duration(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        logger.warning(f"[VoiceRequest] Ignoring non-numeric duration: {value!r}")
        return 0


def _parse_interaction(value: Any) -> Optional[InteractionSummary]:
    if value is None:
        return None
    try:
        if isinstance(value, (str, bytes)):
            value = json.loads(value)
        return InteractionSummary.model_validate(value)
    except (ValueError, ValidationError) as e:
        logger.warning(f"[VoiceRequest] Ignoring malformed interaction_result: {e}")
        return None


class VoiceRequest(BaseModel):
    """One inbound voice turn."""
    phone_number: Optional[str] = None
    call_id: str = DEFAULT_CALL_ID
    duration: int = 0
    speech_text: Optional[str] = None
    interaction: Optional[InteractionSummary] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "VoiceRequest":
        phone_number = first_present(payload, PHONE_NUMBER_FIELDS)
        call_id = first_present(payload, CALL_ID_FIELDS)
        speech_text = first_present(payload, SPEECH_TEXT_FIELDS)

        return cls(
            phone_number=(str(phone_number).strip() or None) if phone_number is not None else None,
            call_id=str(call_id) if call_id is not None else DEFAULT_CALL_ID,
            duration=_parse_duration(first_present(payload, DURATION_FIELDS)),
            speech_text=str(speech_text) if speech_text is not None else None,
            interaction=_parse_interaction(first_present(payload, INTERACTION_FIELDS)),
        )


class VoiceResponse(BaseModel):
    voiceResponse: str


class StreamRequest(BaseModel):
    joinUrl: str
