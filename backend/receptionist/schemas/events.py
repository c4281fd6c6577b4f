"""
Interaction Event Schemas

Pydantic models for the events a live voice session produces, plus the
wire frame they are decoded from.
"""

from typing import Optional, Literal, List, Union
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from receptionist.services.exceptions import MalformedFrameError


# =============================================================================
# Interaction Events
# =============================================================================

class InteractionEventBase(BaseModel):
    """Base model for all interaction events."""
    model_config = ConfigDict(frozen=True)

    type: str


class CallerUtterance(InteractionEventBase):
    """Something the caller said."""
    type: Literal["caller_utterance"] = "caller_utterance"
    text: str


class AgentUtterance(InteractionEventBase):
    """Something the receptionist agent replied."""
    type: Literal["agent_utterance"] = "agent_utterance"
    text: str


class LanguageHint(InteractionEventBase):
    """Language reported by the speech engine."""
    type: Literal["language_hint"] = "language_hint"
    code: str


class ConnectionClosed(InteractionEventBase):
    """Terminal event, always the last element of a session stream."""
    type: Literal["connection_closed"] = "connection_closed"
    code: int
    reason: Optional[str] = None


InteractionEvent = Union[CallerUtterance, AgentUtterance, LanguageHint, ConnectionClosed]


# =============================================================================
# Wire Frame
# =============================================================================

class InteractionFrame(BaseModel):
    """
    One JSON message received from the interaction WebSocket.

    Unknown keys are ignored; every known key is optional.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    input: Optional[str] = None
    text: Optional[str] = None
    detected_language: Optional[str] = Field(None, alias="detectedLanguage")

    def to_events(self) -> List[InteractionEvent]:
        """Split the frame into events: caller, then agent, then language."""
        events: List[InteractionEvent] = []
        if self.input:
            events.append(CallerUtterance(text=self.input))
        if self.text:
            events.append(AgentUtterance(text=self.text))
        if self.detected_language:
            events.append(LanguageHint(code=self.detected_language))
        return events


def parse_frame(raw: Union[str, bytes]) -> List[InteractionEvent]:
    """
    Decode a raw WebSocket message into interaction events.

    Raises:
        MalformedFrameError: if the payload is not a JSON object matching the frame shape
    """
    try:
        frame = InteractionFrame.model_validate_json(raw)
    except ValidationError as e:
        raise MalformedFrameError(f"Invalid interaction frame: {e.error_count()} error(s)") from e
    return frame.to_events()
