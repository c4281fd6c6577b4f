"""
Voice API - the booking pipeline boundary

Implements:
- POST /voice: one caller turn in, one voice response out

Accepts JSON or form-encoded bodies, since telephony webhooks post forms
and the interaction flow posts JSON.
"""
import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from receptionist.api.deps import get_pipeline
from receptionist.schemas.voice import VoiceRequest, VoiceResponse
from receptionist.services.pipeline import PipelineController

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_payload(request: Request) -> Dict[str, Any]:
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            body = await request.json()
        except ValueError:
            logger.warning("[Voice] Request body is not valid UTF-8 JSON")
            return {}
        return body if isinstance(body, dict) else {}

    form = await request.form()
    return dict(form)


@router.post("/voice", response_model=VoiceResponse)
async def voice(
    request: Request,
    background_tasks: BackgroundTasks,
    pipeline: PipelineController = Depends(get_pipeline),
):
    """
    Decide whether the caller's request can be booked and answer by voice.

    Status codes:
    - 400: caller identity missing
    - 500: booking or internal failure (a spoken apology is still returned)
    - 200: booked, not understood, or customer not found
    """
    payload = await _read_payload(request)
    logger.info(f"[Voice] Received /voice request: {json.dumps(payload, default=str)}")

    voice_request = VoiceRequest.from_payload(payload)
    result = await pipeline.handle(voice_request)

    # Runs after the response is sent; never delays the caller
    if result.analytics is not None:
        background_tasks.add_task(pipeline.record, result)

    return JSONResponse(
        status_code=result.status_code,
        content=VoiceResponse(voiceResponse=result.voice_response).model_dump(),
    )
