"""
Protocol definitions for the capabilities the receptionist consumes.

This module defines interfaces (Python Protocols) that allow:
- Swapping implementations (e.g., GCP -> another provider)
- Testing without real API credentials
- Clear contracts between the pipeline and its collaborators

Usage:
    from receptionist.services.protocols import TranslatorProtocol

    async def localize(translator: TranslatorProtocol, text: str) -> str:
        return await translator.translate(text, "en", "es")
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from receptionist.models.customer import Customer
    from receptionist.services.analytics import AnalyticsRecord


@dataclass(frozen=True)
class Detection:
    """Result of a language detection call."""
    language_code: str
    confidence: Optional[float] = None


class SentimentScorerProtocol(Protocol):
    """Interface for per-utterance sentiment scoring."""

    async def score(self, text: str) -> float:
        """
        Score an utterance.

        Returns:
            Score in [-1, 1]; negative is unhappy, positive is happy
        """
        ...


class LanguageDetectorProtocol(Protocol):
    """Interface for language detection services."""

    async def detect(self, text: str) -> Detection:
        """Detect the language of `text`."""
        ...


class TranslatorProtocol(Protocol):
    """Interface for translation services."""

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """
        Translate text from source to target language.

        Args:
            text: Text to translate
            source_lang: Source language code (e.g., "es")
            target_lang: Target language code (e.g., "en")
        """
        ...


class LanguageCacheProtocol(Protocol):
    """Interface for the detected-language cache."""

    async def get(self, text: str) -> Optional[str]:
        ...

    async def set(self, text: str, language_code: str) -> None:
        ...


class CustomerDirectoryProtocol(Protocol):
    """Interface for looking up callers."""

    async def get_by_phone(self, phone_number: str) -> Optional["Customer"]:
        """
        Find a customer by phone number.

        Returns:
            Customer if found, None otherwise

        Raises:
            CustomerLookupError: if the directory is unavailable
        """
        ...


class SchedulerProtocol(Protocol):
    """Interface for the appointment scheduling backend."""

    async def create_appointment(
        self,
        *,
        customer_id: int,
        service_id: str,
        provider_id: int,
        start: datetime,
        end: datetime,
        notes: str,
    ) -> str:
        """
        Create one appointment. Called at most once per request.

        Returns:
            Appointment id assigned by the backend

        Raises:
            SchedulingError: on any backend failure
        """
        ...


class SpeechSynthesizerProtocol(Protocol):
    """Interface for text-to-speech services that return a playable handle."""

    async def synthesize(self, text: str, language_code: str) -> str:
        """
        Returns:
            Audio URL or identifier understood by the telephony layer
        """
        ...


class AnalyticsStoreProtocol(Protocol):
    """Interface for the append-only analytics store."""

    async def append(self, record: "AnalyticsRecord") -> None:
        ...
