"""
Translation Adapter - best-effort localization between two languages.

Returns the original text whenever translation is unnecessary (same
language, empty text), impossible (no translator configured) or fails.
Callers must not assume a translation actually happened.
"""

import asyncio
import logging
from typing import Optional

from receptionist.config.constants import TRANSLATION_TIMEOUT_SEC
from receptionist.services.protocols import TranslatorProtocol

logger = logging.getLogger(__name__)


class TranslationAdapter:
    """Fail-safe wrapper around a translation provider."""

    def __init__(
        self,
        translator: Optional[TranslatorProtocol],
        timeout_sec: float = TRANSLATION_TIMEOUT_SEC,
    ):
        self.translator = translator
        self.timeout_sec = timeout_sec

    @property
    def enabled(self) -> bool:
        return self.translator is not None

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        if not self.translator or not text or source_lang == target_lang:
            return text

        try:
            translated = await asyncio.wait_for(
                self.translator.translate(text, source_lang, target_lang),
                timeout=self.timeout_sec
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"[Translation] Timeout after {self.timeout_sec}s translating "
                f"{source_lang}->{target_lang}, keeping original"
            )
            return text
        except Exception as e:
            logger.error(f"[Translation] Error translating text from {source_lang} to {target_lang}: {e}")
            return text

        if not translated:
            return text

        logger.info(f'[Translation] "{text}" ({source_lang}) -> "{translated}" ({target_lang})')
        return translated
