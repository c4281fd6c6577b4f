"""
Language Resolver - decides which language a caller is speaking.

Resolution order:
1. An explicit hint (from the interaction engine) is returned unchanged
2. No text means the configured default
3. A cached detection for the same text
4. A fresh detection, cached for the TTL on success

Any detection failure, timeout or low-confidence result falls back to the
default language without populating the cache.

Usage:
    resolver = LanguageResolver(detector=gcp_translation, cache=LanguageCache())
    language = await resolver.resolve("quiero una cita mañana", hint=None)
    # Returns: "es"
"""

import asyncio
import logging
from typing import Optional

from receptionist.config.constants import DETECTION_TIMEOUT_SEC
from receptionist.services.exceptions import LanguageDetectionError
from receptionist.services.protocols import LanguageDetectorProtocol, LanguageCacheProtocol

logger = logging.getLogger(__name__)


class LanguageResolver:
    """
    Resolves the caller's language with a cache in front of detection.

    Fail-safe: always returns a non-empty language code.
    """

    def __init__(
        self,
        detector: Optional[LanguageDetectorProtocol],
        cache: LanguageCacheProtocol,
        default_language: str = "en",
        timeout_sec: float = DETECTION_TIMEOUT_SEC,
        min_confidence: Optional[float] = None,
    ):
        """
        Args:
            detector: Detection provider, or None when detection is disabled
            cache: Shared language cache
            default_language: Code returned when no signal is available
            timeout_sec: Upper bound for one detection call
            min_confidence: Reject detections below this confidence; None disables the check
        """
        self.detector = detector
        self.cache = cache
        self.default_language = default_language
        self.timeout_sec = timeout_sec
        self.min_confidence = min_confidence

    async def resolve(self, text: Optional[str], hint: Optional[str] = None) -> str:
        if hint:
            return hint

        if not text or not text.strip():
            logger.info(f"[LanguageResolver] No speech to detect, using default language: {self.default_language}")
            return self.default_language

        cached = await self.cache.get(text)
        if cached:
            return cached

        if self.detector is None:
            logger.info(f"[LanguageResolver] Detection disabled, using default language: {self.default_language}")
            return self.default_language

        try:
            detection = await asyncio.wait_for(
                self.detector.detect(text),
                timeout=self.timeout_sec
            )
            language_code = self._accept(detection.language_code, detection.confidence)
        except asyncio.TimeoutError:
            logger.warning(
                f"[LanguageResolver] Detection timed out after {self.timeout_sec}s, "
                f"falling back to {self.default_language}"
            )
            return self.default_language
        except Exception as e:
            logger.error(f"[LanguageResolver] Error detecting language: {e}")
            logger.info(f"[LanguageResolver] Falling back to default language: {self.default_language}")
            return self.default_language

        await self.cache.set(text, language_code)
        return language_code

    def _accept(self, language_code: Optional[str], confidence: Optional[float]) -> str:
        """Validate a detection result, raising when it must not be used."""
        if not language_code or language_code == "und":
            raise LanguageDetectionError("Detector returned no language")

        logger.info(f"[LanguageResolver] Detected language: {language_code} (Confidence: {confidence})")

        # Confirmation with the caller is not implemented; a low score simply
        # falls back to the default language.
        if (
            self.min_confidence is not None
            and confidence is not None
            and confidence < self.min_confidence
        ):
            raise LanguageDetectionError(
                f"Confidence {confidence} below threshold {self.min_confidence}"
            )
        return language_code
