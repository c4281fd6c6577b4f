"""Fake capability implementations shared by the test modules."""
import asyncio
from typing import Dict, List, Optional, Tuple

from receptionist.models.customer import Customer
from receptionist.services.protocols import Detection


def make_customer(customer_id: int = 7, phone_number: str = "+15551234567",
                  email: str = "jane@example.com") -> Customer:
    return Customer(id=customer_id, phone_number=phone_number, email=email, full_name="Jane Doe")


async def event_stream(*events):
    for event in events:
        yield event


class FakeDetector:
    def __init__(self, language_code: str = "es", confidence: Optional[float] = 0.95,
                 error: Optional[Exception] = None, delay: float = 0):
        self.language_code = language_code
        self.confidence = confidence
        self.error = error
        self.delay = delay
        self.calls: List[str] = []

    async def detect(self, text: str) -> Detection:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return Detection(language_code=self.language_code, confidence=self.confidence)


class FakeTranslator:
    """Translates from a fixed table; unknown text comes back unchanged."""

    def __init__(self, table: Optional[Dict[Tuple[str, str, str], str]] = None,
                 error: Optional[Exception] = None, delay: float = 0):
        self.table = table or {}
        self.error = error
        self.delay = delay
        self.calls: List[Tuple[str, str, str]] = []

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        self.calls.append((text, source_lang, target_lang))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.table.get((text, source_lang, target_lang), text)


class FakeDirectory:
    def __init__(self, customers: Optional[List[Customer]] = None,
                 error: Optional[Exception] = None, delay: float = 0):
        self.customers = {c.phone_number: c for c in (customers or [])}
        self.error = error
        self.delay = delay
        self.calls: List[str] = []

    async def get_by_phone(self, phone_number: str) -> Optional[Customer]:
        self.calls.append(phone_number)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.customers.get(phone_number)


class FakeScheduler:
    def __init__(self, appointment_id: str = "42", error: Optional[Exception] = None, delay: float = 0):
        self.appointment_id = appointment_id
        self.error = error
        self.delay = delay
        self.calls: List[dict] = []

    async def create_appointment(self, **kwargs) -> str:
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.appointment_id


class FakeSynthesizer:
    def __init__(self, error: Optional[Exception] = None, delay: float = 0):
        self.error = error
        self.delay = delay
        self.calls: List[Tuple[str, str]] = []

    async def synthesize(self, text: str, language_code: str) -> str:
        self.calls.append((text, language_code))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return f"https://tts.example.com/{language_code}/{len(self.calls)}.mp3"


class FakeAnalyticsStore:
    def __init__(self, error: Optional[Exception] = None, delay: float = 0):
        self.error = error
        self.delay = delay
        self.records = []

    async def append(self, record) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        self.records.append(record)


class FakeSentimentScorer:
    """Scores from a fixed table; texts in `failing` raise."""

    def __init__(self, scores: Optional[Dict[str, float]] = None, default: float = 0.0,
                 failing: Tuple[str, ...] = (), delay: float = 0):
        self.scores = scores or {}
        self.default = default
        self.failing = failing
        self.delay = delay
        self.calls: List[str] = []

    async def score(self, text: str) -> float:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if text in self.failing:
            raise RuntimeError(f"scoring failed for {text!r}")
        return self.scores.get(text, self.default)
