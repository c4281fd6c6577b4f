"""
Session Aggregator - reduces a live interaction into a summary.

The interaction stream is consumed in one cooperative loop, strictly in
arrival order. Caller utterances are scored for sentiment out of band: each
score runs as its own task so a slow scoring call never holds up the next
event. When the stream closes, every outstanding score is awaited before the
average is taken.

Usage:
    aggregator = SessionAggregator(scorer=GoogleSentimentScorer(...))
    summary = await aggregator.aggregate(source.events())
"""

import asyncio
import logging
from typing import AsyncIterable, List, Optional, Set

from receptionist.config.constants import (
    SENTIMENT_POSITIVE_THRESHOLD,
    SENTIMENT_NEGATIVE_THRESHOLD,
    SENTIMENT_TIMEOUT_SEC,
    ABNORMAL_CLOSURE_CODE,
    CALLER_LABEL,
    AGENT_LABEL,
)
from receptionist.schemas.events import (
    InteractionEvent,
    CallerUtterance,
    AgentUtterance,
    LanguageHint,
    ConnectionClosed,
)
from receptionist.schemas.summary import InteractionSummary, Sentiment
from receptionist.services.exceptions import SessionClosedError
from receptionist.services.metrics import sentiment_scores
from receptionist.services.protocols import SentimentScorerProtocol

logger = logging.getLogger(__name__)


def classify_sentiment(total: float, count: int) -> Sentiment:
    """Map a running score sum/count to a sentiment bucket."""
    if count <= 0:
        return Sentiment.NEUTRAL
    average = total / count
    if average > SENTIMENT_POSITIVE_THRESHOLD:
        return Sentiment.POSITIVE
    if average < SENTIMENT_NEGATIVE_THRESHOLD:
        return Sentiment.NEGATIVE
    return Sentiment.NEUTRAL


class EventReducer:
    """
    Folds interaction events into a summary.

    State is cumulative; only the running sentiment sum and count are kept,
    never individual scores.
    """

    def __init__(
        self,
        scorer: Optional[SentimentScorerProtocol] = None,
        scoring_timeout_sec: float = SENTIMENT_TIMEOUT_SEC,
    ):
        self.scorer = scorer
        self.scoring_timeout_sec = scoring_timeout_sec

        self.transcript: List[str] = []
        self.detected_language: Optional[str] = None
        self.last_agent_line: str = ""
        self.sentiment_sum: float = 0.0
        self.sentiment_count: int = 0

        self._pending: Set[asyncio.Task] = set()
        self._closed: Optional[ConnectionClosed] = None

    @property
    def closed(self) -> bool:
        return self._closed is not None

    def apply(self, event: InteractionEvent) -> None:
        """
        Apply one non-terminal event.

        Raises:
            SessionClosedError: if the stream already closed
        """
        if self._closed is not None:
            raise SessionClosedError(f"Event after close: {event.type}")

        if isinstance(event, CallerUtterance):
            self.transcript.append(f"{CALLER_LABEL}: {event.text}")
            if self.scorer is not None:
                task = asyncio.create_task(self._score(event.text))
                self._pending.add(task)
                task.add_done_callback(self._pending.discard)
        elif isinstance(event, AgentUtterance):
            self.transcript.append(f"{AGENT_LABEL}: {event.text}")
            self.last_agent_line = event.text
        elif isinstance(event, LanguageHint):
            self.detected_language = event.code
        elif isinstance(event, ConnectionClosed):
            self._closed = event

    async def _score(self, text: str) -> None:
        try:
            score = await asyncio.wait_for(self.scorer.score(text), timeout=self.scoring_timeout_sec)
        except Exception as e:
            sentiment_scores.labels(status="error").inc()
            logger.error(f"[SessionAggregator] Error analyzing sentiment: {e!r}")
            return
        sentiment_scores.labels(status="success").inc()
        logger.info(f"[SessionAggregator] Sentiment score: {score}")
        self.sentiment_sum += score
        self.sentiment_count += 1

    async def finalize(self) -> InteractionSummary:
        """Wait for in-flight scoring, then build the immutable summary."""
        if self._pending:
            logger.debug(f"[SessionAggregator] Waiting for {len(self._pending)} sentiment call(s)")
            await asyncio.gather(*list(self._pending), return_exceptions=True)

        return InteractionSummary(
            transcript=list(self.transcript),
            detected_language=self.detected_language,
            sentiment=classify_sentiment(self.sentiment_sum, self.sentiment_count),
            last_agent_line=self.last_agent_line,
        )


class SessionAggregator:
    """Runs the consumption loop for one interaction session."""

    def __init__(
        self,
        scorer: Optional[SentimentScorerProtocol] = None,
        scoring_timeout_sec: float = SENTIMENT_TIMEOUT_SEC,
    ):
        self.scorer = scorer
        self.scoring_timeout_sec = scoring_timeout_sec

    async def aggregate(self, events: AsyncIterable[InteractionEvent]) -> InteractionSummary:
        reducer = EventReducer(self.scorer, self.scoring_timeout_sec)

        async for event in events:
            try:
                reducer.apply(event)
            except SessionClosedError as e:
                logger.error(f"[SessionAggregator] {e}; ignoring")
                continue

            if isinstance(event, ConnectionClosed):
                logger.info(
                    f"[SessionAggregator] Connection closed. Code: {event.code}, "
                    f"Reason: {event.reason or 'N/A'}"
                )

        if not reducer.closed:
            logger.warning("[SessionAggregator] Stream ended without a close event")
            reducer.apply(ConnectionClosed(code=ABNORMAL_CLOSURE_CODE, reason="stream ended"))

        summary = await reducer.finalize()
        logger.info(f"[SessionAggregator] Final Transcript: {summary.transcript_text!r}")
        logger.info(f"[SessionAggregator] Final Sentiment: {summary.sentiment.value}")
        logger.info(f"[SessionAggregator] Detected Language: {summary.detected_language}")
        return summary
