"""
Receptionist Service Exceptions

Custom exceptions raised by capability adapters and the session stream.
"""


class ReceptionistError(Exception):
    """Base exception for receptionist service errors"""
    pass


class CustomerLookupError(ReceptionistError):
    """Raised when the customer directory cannot be queried"""
    pass


class SchedulingError(ReceptionistError):
    """Raised when the scheduling backend rejects or fails an appointment"""
    pass


class SchedulerNotConfiguredError(SchedulingError):
    """Raised when no scheduling backend URL or API key is configured"""
    pass


class LanguageDetectionError(ReceptionistError):
    """Raised when the detection provider returns no usable language"""
    pass


class TranslationError(ReceptionistError):
    """Raised when the translation provider fails"""
    pass


class SpeechSynthesisError(ReceptionistError):
    """Raised when the TTS endpoint returns no audio reference"""
    pass


class SentimentScoringError(ReceptionistError):
    """Raised when a sentiment score cannot be obtained for an utterance"""
    pass


class MalformedFrameError(ReceptionistError):
    """Raised when a streamed interaction frame cannot be decoded"""
    pass


class SessionClosedError(ReceptionistError):
    """Raised when an event arrives after the session stream was closed"""
    pass
