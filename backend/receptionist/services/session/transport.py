"""
Interaction Transport - WebSocket client for the live voice session.

Connects to the interaction engine's join URL and turns its JSON frames into
an ordered, finite sequence of InteractionEvents. Closing the connection is
the only end signal; it is delivered as an explicit ConnectionClosed element.
"""

import logging
from typing import AsyncIterable, AsyncIterator, Union

import websockets
from websockets.exceptions import ConnectionClosed as WebSocketClosed

from receptionist.config.constants import ABNORMAL_CLOSURE_CODE
from receptionist.schemas.events import InteractionEvent, ConnectionClosed, parse_frame
from receptionist.services.exceptions import MalformedFrameError

logger = logging.getLogger(__name__)


async def decode_frames(frames: AsyncIterable[Union[str, bytes]]) -> AsyncIterator[InteractionEvent]:
    """Decode raw frames, dropping any that are malformed."""
    async for raw in frames:
        try:
            events = parse_frame(raw)
        except MalformedFrameError as e:
            preview = raw[:200] if isinstance(raw, (str, bytes)) else raw
            logger.warning(f"[Transport] Dropping malformed frame: {e}. Received data: {preview!r}")
            continue
        for event in events:
            yield event


class WebSocketEventSource:
    """One interaction session reached through a WebSocket join URL."""

    def __init__(self, join_url: str):
        self.join_url = join_url

    async def events(self) -> AsyncIterator[InteractionEvent]:
        logger.info(f"[Transport] Attempting to connect WebSocket to: {self.join_url}")
        async with websockets.connect(self.join_url) as ws:
            logger.info("[Transport] WebSocket connection opened.")
            try:
                async for event in decode_frames(ws):
                    yield event
            except WebSocketClosed as e:
                logger.error(f"[Transport] WebSocket error: {e}")

            code = ws.close_code if ws.close_code is not None else ABNORMAL_CLOSURE_CODE
            reason = ws.close_reason or None

        yield ConnectionClosed(code=code, reason=reason)
