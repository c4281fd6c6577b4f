"""
Application-wide constants for configuration and tuning.

This file centralizes magic numbers, canonical messages and payload
field precedence so they stay consistent across the backend.

Note: Environment-dependent settings (DB, Redis, API keys) belong in settings.py.
This file is for operational parameters that rarely change between environments.
"""

# ==============================================================================
# LANGUAGE
# ==============================================================================

# Language every temporal expression is parsed in
CANONICAL_LANGUAGE: str = "en"

# Language cache entry lifetime (seconds)
LANGUAGE_CACHE_TTL_SEC: int = 3600

# Max entries held by the in-memory language cache
LANGUAGE_CACHE_MAX_SIZE: int = 1000

# Redis key prefix for cached detections
LANGUAGE_CACHE_KEY_PREFIX: str = "lang:"

# ==============================================================================
# SENTIMENT
# ==============================================================================

# Average score above which a session is positive
SENTIMENT_POSITIVE_THRESHOLD: float = 0.2

# Average score below which a session is negative
SENTIMENT_NEGATIVE_THRESHOLD: float = -0.2

GOOGLE_SENTIMENT_URL: str = "https://language.googleapis.com/v1/documents:analyzeSentiment"

# ==============================================================================
# EXTERNAL CALL TIMEOUTS (seconds)
# ==============================================================================

DETECTION_TIMEOUT_SEC: float = 3.0
TRANSLATION_TIMEOUT_SEC: float = 3.0
SENTIMENT_TIMEOUT_SEC: float = 5.0
DIRECTORY_TIMEOUT_SEC: float = 5.0
SCHEDULER_TIMEOUT_SEC: float = 10.0
TTS_TIMEOUT_SEC: float = 10.0
ANALYTICS_TIMEOUT_SEC: float = 10.0

# ==============================================================================
# SESSION STREAM
# ==============================================================================

# Close code used when the transport ends without a close frame
ABNORMAL_CLOSURE_CODE: int = 1006

CALLER_LABEL: str = "Caller"
AGENT_LABEL: str = "Receptionist"

# ==============================================================================
# BOOKING
# ==============================================================================

EASY_APPOINTMENTS_API_PATH: str = "/index.php/api/v1/appointments"

# Datetime format expected by Easy!Appointments
SCHEDULER_DATETIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"

APPOINTMENT_NOTES_TEMPLATE: str = 'Booked via Voice Agent. Original request: "{speech}"'

# ==============================================================================
# CANONICAL RESPONSES (English, translated per caller)
# ==============================================================================

MISSING_CALLER_MESSAGE: str = "An internal error occurred. Missing caller information."
CUSTOMER_NOT_FOUND_MESSAGE: str = "Sorry, we could not find your record in our system."
LOOKUP_FAILED_MESSAGE: str = "Sorry, we encountered a database error. Please try again later."
NOT_PARSED_MESSAGE: str = (
    "Sorry, I couldn't understand the date or time you requested. "
    "Could you please try again?"
)
GENERIC_ERROR_MESSAGE: str = "Sorry, an unexpected error occurred while processing your request."
CONFIRMATION_TEMPLATE: str = "Okay, your appointment is booked for {date} at {time}."

PARSING_FAILED_REASON: str = "Parsing failed"
SERVER_ERROR_REASON: str = "Server error: {error}"
SCHEDULER_NOT_CONFIGURED_REASON: str = "Scheduling backend not configured"

# ==============================================================================
# INBOUND PAYLOAD FIELD PRECEDENCE
# First present, non-empty source wins for each logical field.
# ==============================================================================

PHONE_NUMBER_FIELDS: tuple = ("caller_id", "From")
CALL_ID_FIELDS: tuple = ("call_id", "CallSid")
DURATION_FIELDS: tuple = ("duration", "CallDuration")
SPEECH_TEXT_FIELDS: tuple = ("ultravox_transcription", "SpeechResult")
INTERACTION_FIELDS: tuple = ("interaction_result",)

DEFAULT_CALL_ID: str = "N/A"

# ==============================================================================
# DATABASE
# ==============================================================================

DB_POOL_SIZE: int = 10
DB_POOL_MAX_OVERFLOW: int = 20

# ==============================================================================
# REDIS
# ==============================================================================

# Language cache calls must fail fast so detection can proceed
REDIS_SOCKET_TIMEOUT_SEC: float = 1.0
