"""
Session Package

Aggregation of a live interaction stream into an InteractionSummary.
"""

from receptionist.services.session.aggregator import SessionAggregator, EventReducer, classify_sentiment
from receptionist.services.session.transport import WebSocketEventSource, decode_frames

__all__ = [
    "SessionAggregator",
    "EventReducer",
    "classify_sentiment",
    "WebSocketEventSource",
    "decode_frames",
]
