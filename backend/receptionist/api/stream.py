"""
Stream API - aggregate a live interaction session

Implements:
- POST /stream: connect to the interaction WebSocket, consume it until it
  closes, and return the session summary for the next flow step.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from websockets.exceptions import WebSocketException

from receptionist.api.deps import get_aggregator
from receptionist.config.settings import settings
from receptionist.schemas.voice import StreamRequest
from receptionist.services.session import SessionAggregator, WebSocketEventSource

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/stream")
async def stream(
    body: StreamRequest,
    aggregator: SessionAggregator = Depends(get_aggregator),
):
    """
    Returns:
        {text, transcript, sentiment, detectedLanguage}
    """
    source = WebSocketEventSource(body.joinUrl)
    try:
        summary = await aggregator.aggregate(source.events())
    except (OSError, WebSocketException) as e:
        logger.error(f"[Stream] Could not connect to {body.joinUrl}: {e}")
        raise HTTPException(status_code=502, detail=f"Could not connect to interaction stream: {e}")
    return summary.to_stream_result(settings.DEFAULT_LANGUAGE)
