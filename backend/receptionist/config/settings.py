from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # Database
    DB_USER: str = Field("receptionist")
    DB_PASSWORD: str = Field("ReceptionistPass2024")
    DB_NAME: str = Field("voice_receptionist")
    DB_HOST: str = Field("postgres")
    DB_PORT: int = Field(5432)
    DATABASE_URL: str | None = Field(None)  # overrides the DB_* fields when set

    # Redis (language cache backend)
    REDIS_HOST: str = Field("redis")
    REDIS_PORT: int = Field(6379)
    REDIS_PASSWORD: str | None = Field(None)
    REDIS_DB: int = Field(0)
    LANGUAGE_CACHE_BACKEND: str = Field("memory")  # "memory" or "redis"

    # Google Cloud
    GOOGLE_APPLICATION_CREDENTIALS: str | None = Field(None)
    GOOGLE_PROJECT_ID: str | None = Field(None)
    GOOGLE_API_KEY: str | None = Field(None)  # Natural Language sentiment

    # Easy!Appointments
    EASY_APPOINTMENTS_URL: str | None = Field(None)
    EASY_APPOINTMENTS_API_KEY: str | None = Field(None)
    DEFAULT_APPOINTMENT_SERVICE_ID: str = Field("default_service")
    DEFAULT_APPOINTMENT_PROVIDER_ID: int = Field(1)
    DEFAULT_APPOINTMENT_DURATION: int = Field(30)  # minutes

    # Text-to-speech endpoint (e.g. https://ultravox.yourdomain.com/tts)
    ULTRAVOX_TTS_URL: str | None = Field(None)

    # Localization
    DEFAULT_LANGUAGE: str = Field("en")
    TIMEZONE: str = Field("UTC")
    LANGUAGE_MIN_CONFIDENCE: Optional[float] = Field(None)

    # App
    API_HOST: str = Field("0.0.0.0")
    API_PORT: int = Field(3000)
    DEBUG: bool = Field(False)
    METRICS_PORT: Optional[int] = Field(None)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_file_encoding="utf-8"
    )


settings = Settings()
