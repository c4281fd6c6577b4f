"""
Interaction Summary Schema

The reduced record of a voice session. Produced by the session aggregator
and optionally sent back in to /voice as `interaction_result`.
"""

from enum import Enum
from typing import List, Optional, Any

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator


class Sentiment(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class InteractionSummary(BaseModel):
    """Final transcript, sentiment and language of one session."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    transcript: List[str] = Field(default_factory=list)
    detected_language: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("detectedLanguage", "detected_language"),
        serialization_alias="detectedLanguage",
    )
    sentiment: Sentiment = Sentiment.NEUTRAL
    last_agent_line: str = Field(
        "",
        validation_alias=AliasChoices("lastAgentLine", "last_agent_line", "text"),
        serialization_alias="lastAgentLine",
    )

    @field_validator("transcript", mode="before")
    @classmethod
    def _split_transcript(cls, value: Any) -> Any:
        # Upstream steps send the transcript as one newline-joined string
        if isinstance(value, str):
            return [line for line in value.splitlines() if line.strip()]
        return value

    @field_validator("detected_language", mode="before")
    @classmethod
    def _blank_language_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def transcript_text(self) -> str:
        """Transcript as stored in analytics: one labeled line per utterance."""
        if not self.transcript:
            return ""
        return "\n".join(self.transcript) + "\n"

    def to_stream_result(self, default_language: str) -> dict:
        """Payload in the shape the stream step hands to the next flow step."""
        return {
            "text": self.last_agent_line,
            "transcript": self.transcript_text,
            "sentiment": self.sentiment.value,
            "detectedLanguage": self.detected_language or default_language,
        }
