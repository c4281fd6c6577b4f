"""
Temporal Extractor - finds the requested appointment start in an utterance.

Input is always English (callers translate first). The date anchor
("tomorrow", "Friday", "October 25", "the 28th", "in 2 days") and the clock
time ("10am", "4:30 p.m.", "at 3", "noon") are located separately, and only
those fragments are handed to dateutil. Other numbers in the sentence
("for 2 people") never reach the parser.

Ambiguous expressions are biased forward: a result that lands in the past is
moved to the next occurrence of the same kind (next day for a bare time,
next week for a weekday, next year for a calendar date).

Usage:
    extractor = TemporalExtractor()
    start = extractor.extract("book me for tomorrow at 10am", datetime(2026, 10, 19, 9, 0))
    # Returns: datetime(2026, 10, 20, 10, 0)
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")

# Hour assumed for a date given without a clock time
DEFAULT_HOUR = 12
EVENING_HOUR = 19

# Bare "at N" hours treated as afternoon (business hours)
AFTERNOON_BARE_HOURS = range(1, 8)

MONTH_NAMES = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?|"
    r"sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
DAY_NUMBER = r"\d{1,2}(?:st|nd|rd|th)?"
YEAR_SUFFIX = r"(?:,?\s+\d{4}\b)?"

RELATIVE_OFFSET_PATTERN = re.compile(r"\bin\s+(\d{1,3})\s+(minute|hour|day|week)s?\b")
DAY_AFTER_TOMORROW_PATTERN = re.compile(r"\b(?:the\s+)?day\s+after\s+tomorrow\b")
TOMORROW_PATTERN = re.compile(r"\btomorrow\b")
TONIGHT_PATTERN = re.compile(r"\btonight\b")
TODAY_PATTERN = re.compile(r"\btoday\b")
WEEKDAY_PATTERN = re.compile(r"\b(?:(?:this|next|on)\s+)?(" + "|".join(WEEKDAYS) + r")\b")
# A month name only counts with a day number beside it ("may" and "march" are verbs too)
MONTH_DAY_PATTERN = re.compile(
    rf"\b{MONTH_NAMES}\.?\s+(?:the\s+)?{DAY_NUMBER}\b(?!\s*(?::\d|[ap]\.?m\b|o'?clock)){YEAR_SUFFIX}"
    rf"|\b(?:the\s+)?{DAY_NUMBER}\s+(?:of\s+)?{MONTH_NAMES}\b{YEAR_SUFFIX}"
)
NUMERIC_DATE_PATTERN = re.compile(r"\b\d{1,4}[/-]\d{1,2}(?:[/-]\d{1,4})?\b")
ORDINAL_DAY_PATTERN = re.compile(r"\b(?:the\s+)?(\d{1,2})(?:st|nd|rd|th)\b")

CLOCK_PATTERN = re.compile(
    r"\b(?P<h12>\d{1,2})(?::(?P<m12>\d{2}))?\s*(?P<ampm>[ap])\.?m\b\.?"
    r"|\b(?P<h24>\d{1,2}):(?P<m24>\d{2})\b"
    r"|\b(?P<word>noon|midnight)\b"
)
BARE_HOUR_PATTERN = re.compile(
    r"\bat\s+(?P<at>\d{1,2})\b(?:\s*o'?clock\b)?(?!\s*(?::\d|\.\d|[ap]\.?m\b))"
    r"|\b(?P<oclock>\d{1,2})\s*o'?clock\b"
)

# Kinds of date anchors, used to pick the forward-bias correction
OFFSET = "offset"
RELATIVE = "relative"
WEEKDAY = "weekday"
CALENDAR = "calendar"
DAY_OF_MONTH = "day_of_month"
TIME_ONLY = "time_only"


@dataclass
class DateAnchor:
    """The day part of an utterance and where it sits in the text."""
    kind: str
    start: int
    end: int
    day: datetime
    evening: bool = False
    # Minute/hour offsets name an exact instant; no clock time applies
    exact: bool = False


class TemporalExtractor:
    """Parses English utterances into an appointment start instant."""

    def extract(self, text: Optional[str], reference: datetime) -> Optional[datetime]:
        """
        Extract the first date/time expression.

        Args:
            text: English utterance
            reference: "Now" for relative expressions; result keeps its tzinfo

        Returns:
            Start instant, or None when the text holds no temporal expression
        """
        if not text or not text.strip():
            return None

        norm = " ".join(text.lower().split())

        try:
            anchor = self._find_anchor(norm, reference)
            rest = norm if anchor is None else f"{norm[:anchor.start]} {norm[anchor.end:]}"
            clock = self._find_clock(rest, evening=bool(anchor and anchor.evening))

            if anchor is None and clock is None:
                logger.info(f"[TemporalExtractor] No date/time expression in: \"{text}\"")
                return None

            start = self._combine(anchor, clock, reference)
        except (ValueError, OverflowError) as e:
            logger.info(f"[TemporalExtractor] Could not parse date/time from \"{text}\": {e}")
            return None

        if reference.tzinfo is not None and start.tzinfo is None:
            start = start.replace(tzinfo=reference.tzinfo)

        return self._bias_forward(start, reference, anchor.kind if anchor else TIME_ONLY)

    def _find_anchor(self, norm: str, reference: datetime) -> Optional[DateAnchor]:
        """Locate the date part of the utterance, resolved against the reference."""
        offset = RELATIVE_OFFSET_PATTERN.search(norm)
        if offset:
            amount, unit = int(offset.group(1)), offset.group(2)
            day = reference + relativedelta(**{f"{unit}s": amount})
            return DateAnchor(OFFSET, offset.start(), offset.end(), day, exact=unit in ("minute", "hour"))

        for pattern, days, evening in (
            (DAY_AFTER_TOMORROW_PATTERN, 2, False),
            (TOMORROW_PATTERN, 1, False),
            (TONIGHT_PATTERN, 0, True),
            (TODAY_PATTERN, 0, False),
        ):
            match = pattern.search(norm)
            if match:
                day = reference + timedelta(days=days)
                return DateAnchor(RELATIVE, match.start(), match.end(), day, evening=evening)

        weekday = WEEKDAY_PATTERN.search(norm)
        if weekday:
            target = WEEKDAYS.index(weekday.group(1))
            day = reference + timedelta(days=(target - reference.weekday()) % 7)
            return DateAnchor(WEEKDAY, weekday.start(), weekday.end(), day)

        calendar = MONTH_DAY_PATTERN.search(norm) or NUMERIC_DATE_PATTERN.search(norm)
        if calendar:
            fragment = re.sub(r"\b(?:the|of)\b|[.,]", " ", calendar.group(0))
            day = date_parser.parse(fragment, default=self._midnight(reference))
            return DateAnchor(CALENDAR, calendar.start(), calendar.end(), day)

        ordinal = ORDINAL_DAY_PATTERN.search(norm)
        if ordinal:
            day = reference.replace(day=int(ordinal.group(1)))
            return DateAnchor(DAY_OF_MONTH, ordinal.start(), ordinal.end(), day)

        return None

    def _find_clock(self, text: str, evening: bool) -> Optional[str]:
        """Return the first clock time as a canonical fragment, e.g. "16:30" or "4:30pm"."""
        matches = [m for m in (CLOCK_PATTERN.search(text), BARE_HOUR_PATTERN.search(text)) if m]
        if not matches:
            return None
        match = min(matches, key=lambda m: m.start())

        if match.re is CLOCK_PATTERN:
            if match.group("word"):
                return "12:00" if match.group("word") == "noon" else "00:00"
            if match.group("ampm"):
                return f"{match.group('h12')}:{match.group('m12') or '00'}{match.group('ampm')}m"
            return f"{match.group('h24')}:{match.group('m24')}"

        hour = int(match.group("at") or match.group("oclock"))
        if 1 <= hour <= 11 and (evening or hour in AFTERNOON_BARE_HOURS):
            hour += 12
        return f"{hour}:00"

    def _combine(self, anchor: Optional[DateAnchor], clock: Optional[str], reference: datetime) -> datetime:
        if anchor is not None and anchor.kind == OFFSET and (anchor.exact or clock is None):
            return anchor.day.replace(second=0, microsecond=0)

        day = anchor.day if anchor is not None else reference
        if clock is not None:
            return date_parser.parse(clock, default=self._midnight(day))

        hour = EVENING_HOUR if anchor.evening else DEFAULT_HOUR
        return day.replace(hour=hour, minute=0, second=0, microsecond=0)

    @staticmethod
    def _midnight(day: datetime) -> datetime:
        return day.replace(hour=0, minute=0, second=0, microsecond=0)

    def _bias_forward(self, start: datetime, reference: datetime, kind: str) -> datetime:
        if start > reference:
            return start

        if kind == TIME_ONLY:
            corrected = start + timedelta(days=1)
        elif kind == WEEKDAY:
            corrected = start + timedelta(days=7)
        elif kind == CALENDAR:
            corrected = start + relativedelta(years=1)
        elif kind == DAY_OF_MONTH:
            corrected = start + relativedelta(months=1)
        else:
            # "today at 9am" said at 10am is explicit; keep it
            return start

        logger.info(f"[TemporalExtractor] {start.isoformat()} is in the past, moved forward to {corrected.isoformat()}")
        return corrected
