"""
Tests for the best-effort translation adapter.
"""
import pytest

from receptionist.services.exceptions import TranslationError
from receptionist.services.translation import TranslationAdapter
from tests.helpers import FakeTranslator

pytestmark = pytest.mark.asyncio


async def test_translates_between_languages():
    translator = FakeTranslator({("mañana a las 10am", "es", "en"): "tomorrow at 10am"})
    adapter = TranslationAdapter(translator)

    assert await adapter.translate("mañana a las 10am", "es", "en") == "tomorrow at 10am"
    assert translator.calls == [("mañana a las 10am", "es", "en")]


async def test_same_language_makes_no_call():
    translator = FakeTranslator()
    adapter = TranslationAdapter(translator)

    assert await adapter.translate("tomorrow at 10am", "en", "en") == "tomorrow at 10am"
    assert translator.calls == []


async def test_empty_text_makes_no_call():
    translator = FakeTranslator()
    adapter = TranslationAdapter(translator)

    assert await adapter.translate("", "es", "en") == ""
    assert translator.calls == []


async def test_disabled_adapter_returns_original():
    adapter = TranslationAdapter(None)

    assert not adapter.enabled
    assert await adapter.translate("hola", "es", "en") == "hola"


async def test_provider_error_returns_original():
    adapter = TranslationAdapter(FakeTranslator(error=TranslationError("quota exceeded")))

    assert await adapter.translate("hola", "es", "en") == "hola"


async def test_provider_timeout_returns_original():
    adapter = TranslationAdapter(FakeTranslator(delay=1), timeout_sec=0.01)

    assert await adapter.translate("hola", "es", "en") == "hola"


async def test_empty_translation_returns_original():
    adapter = TranslationAdapter(FakeTranslator({("hola", "es", "en"): ""}))

    assert await adapter.translate("hola", "es", "en") == "hola"
