"""
GCP Translation Service

Handles Google Cloud Translation operations: language detection and text
translation. The client is blocking, so the async methods run it in a
thread pool executor.
"""

import asyncio
import functools
import os
from typing import Optional
from google.cloud import translate
from receptionist.config.settings import settings
from receptionist.services.protocols import Detection
from receptionist.services.exceptions import LanguageDetectionError


class GCPTranslationService:
    """Handles detection and translation operations."""

    def __init__(self, project_id: Optional[str] = None, location: str = "global"):
        self.project_id = project_id or settings.GOOGLE_PROJECT_ID
        if not self.project_id:
            raise RuntimeError(
                "GOOGLE_PROJECT_ID is not set. Please update .env accordingly."
            )
        self.location = location
        self._ensure_credentials()
        self._client = translate.TranslationServiceClient()

    @property
    def parent(self) -> str:
        return f"projects/{self.project_id}/locations/{self.location}"

    def _ensure_credentials(self):
        """Ensure Google credentials are set in environment."""
        if settings.GOOGLE_APPLICATION_CREDENTIALS and "GOOGLE_APPLICATION_CREDENTIALS" not in os.environ:
            os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = settings.GOOGLE_APPLICATION_CREDENTIALS

    def translate_text(
        self,
        text: str,
        *,
        source_language_code: str,
        target_language_code: str,
    ) -> str:
        """Translate text from source to target language."""
        response = self._client.translate_text(
            request={
                "parent": self.parent,
                "contents": [text],
                "mime_type": "text/plain",
                "source_language_code": source_language_code,
                "target_language_code": target_language_code,
            }
        )

        if not response.translations:
            return ""

        return response.translations[0].translated_text

    def detect_language(self, text: str) -> Detection:
        """Detect the most likely language of text."""
        response = self._client.detect_language(
            request={
                "parent": self.parent,
                "content": text,
                "mime_type": "text/plain",
            }
        )

        if not response.languages:
            raise LanguageDetectionError("No language returned by detection")

        best = response.languages[0]
        return Detection(language_code=best.language_code, confidence=best.confidence)

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Async helper that translates without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None,
            functools.partial(
                self.translate_text,
                text,
                source_language_code=source_lang,
                target_language_code=target_lang,
            ),
        )

    async def detect(self, text: str) -> Detection:
        """Async helper that detects without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.detect_language, text)
