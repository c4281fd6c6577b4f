"""
Schemas Package

Pydantic models for interaction events, session summaries and the /voice API.
"""

from receptionist.schemas.events import (
    InteractionEvent,
    CallerUtterance,
    AgentUtterance,
    LanguageHint,
    ConnectionClosed,
    InteractionFrame,
    parse_frame,
)
from receptionist.schemas.summary import InteractionSummary, Sentiment
from receptionist.schemas.voice import VoiceRequest, VoiceResponse, StreamRequest

__all__ = [
    "InteractionEvent",
    "CallerUtterance",
    "AgentUtterance",
    "LanguageHint",
    "ConnectionClosed",
    "InteractionFrame",
    "parse_frame",
    "InteractionSummary",
    "Sentiment",
    "VoiceRequest",
    "VoiceResponse",
    "StreamRequest",
]
