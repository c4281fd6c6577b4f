"""
Google Natural Language sentiment scoring over REST.

Uses an API key rather than service-account credentials, so it can run
wherever the interaction stream is consumed.
"""

import logging

import httpx

from receptionist.config.constants import GOOGLE_SENTIMENT_URL
from receptionist.services.exceptions import SentimentScoringError

logger = logging.getLogger(__name__)


class GoogleSentimentScorer:
    """Scores one utterance per call via documents:analyzeSentiment."""

    def __init__(self, api_key: str, client: httpx.AsyncClient, url: str = GOOGLE_SENTIMENT_URL):
        self.api_key = api_key
        self.client = client
        self.url = url

    async def score(self, text: str) -> float:
        try:
            response = await self.client.post(
                self.url,
                params={"key": self.api_key},
                json={
                    "document": {"content": text, "type": "PLAIN_TEXT"},
                    "encodingType": "UTF8",
                },
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SentimentScoringError(f"Sentiment request failed: {e}") from e

        if not isinstance(data, dict):
            raise SentimentScoringError(f"Unexpected sentiment response: {type(data).__name__}")

        document_sentiment = data.get("documentSentiment")
        score = document_sentiment.get("score") if isinstance(document_sentiment, dict) else None
        if score is None:
            raise SentimentScoringError("Response has no documentSentiment score")

        logger.debug(f"[Sentiment] score={score} for '{text[:30]}'")
        return float(score)
