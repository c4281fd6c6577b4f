"""
Response Synthesis - turns localized text into something the caller hears.

HttpSpeechSynthesizer posts text to a TTS endpoint that answers with an
audio URL or id. ResponseSynthesizer wraps it so the pipeline always gets a
handle back:
- no synthesizer configured -> deterministic placeholder handle
- provider error or timeout -> error handle embedding the language code
"""

import asyncio
import logging
from typing import Optional

import httpx

from receptionist.config.constants import TTS_TIMEOUT_SEC
from receptionist.services.exceptions import SpeechSynthesisError
from receptionist.services.protocols import SpeechSynthesizerProtocol

logger = logging.getLogger(__name__)


def placeholder_handle(text: str, language_code: str) -> str:
    return f"placeholder_audio_for_{language_code}_{text[:10]}.mp3"


def error_handle(language_code: str) -> str:
    return f"error_generating_tts_{language_code}"


class HttpSpeechSynthesizer:
    """Client for a JSON TTS endpoint ({text, language} -> {audio_url | audio_id})."""

    def __init__(self, url: str, client: httpx.AsyncClient):
        self.url = url
        self.client = client

    async def synthesize(self, text: str, language_code: str) -> str:
        try:
            response = await self.client.post(self.url, json={"text": text, "language": language_code})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SpeechSynthesisError(f"TTS request failed: {e}") from e

        handle = (data.get("audio_url") or data.get("audio_id")) if isinstance(data, dict) else None
        if not handle:
            raise SpeechSynthesisError("TTS response has no audio_url or audio_id")
        return str(handle)


class ResponseSynthesizer:
    """Total wrapper: speak() never raises."""

    def __init__(
        self,
        synthesizer: Optional[SpeechSynthesizerProtocol],
        timeout_sec: float = TTS_TIMEOUT_SEC,
    ):
        self.synthesizer = synthesizer
        self.timeout_sec = timeout_sec

    async def speak(self, text: str, language_code: str) -> str:
        logger.info(f'[TTS] Request: Text="{text}", Lang="{language_code}"')
        if self.synthesizer is None:
            logger.warning("[TTS] No TTS endpoint configured. Returning placeholder TTS info.")
            return placeholder_handle(text, language_code)

        try:
            handle = await asyncio.wait_for(
                self.synthesizer.synthesize(text, language_code),
                timeout=self.timeout_sec
            )
        except asyncio.TimeoutError:
            logger.error(f"[TTS] Timeout after {self.timeout_sec}s")
            return error_handle(language_code)
        except Exception as e:
            logger.error(f"[TTS] Error calling TTS API: {e}")
            return error_handle(language_code)

        logger.info(f"[TTS] Response: {handle}")
        return handle
