"""
Translation Package

Best-effort text translation for caller input and spoken responses.
"""

from receptionist.services.translation.adapter import TranslationAdapter

__all__ = [
    "TranslationAdapter",
]
