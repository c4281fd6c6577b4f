"""
Language Package

Detection-with-cache for the caller's language.
"""

from receptionist.services.language.cache import LanguageCache, RedisLanguageCache, get_cache_key
from receptionist.services.language.resolver import LanguageResolver

__all__ = [
    "LanguageCache",
    "RedisLanguageCache",
    "get_cache_key",
    "LanguageResolver",
]
