"""Resolve the leaderboard date range from natural-language phrases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import dateparser

DEFAULT_FROM = "sunday"
DEFAULT_TO = "today"

# UK reading of numeric dates (03/10/2026 is 3 October). Bare weekday names
# refer to the most recent one, so "sunday" means the start of this week.
_DATEPARSER_SETTINGS = {
    "DATE_ORDER": "DMY",
    "PREFER_DATES_FROM": "past",
    "RETURN_AS_TIMEZONE_AWARE": False,
}


class DateWindowError(ValueError):
    """Base class for date range errors. str() is shown to the user as-is."""


class InvalidDateExpression(DateWindowError):
    def __init__(self, text: str):
        super().__init__(f"Could not understand the date {text!r}")
        self.text = text


class InvertedRange(DateWindowError):
    def __init__(self, start: datetime, end: datetime):
        super().__init__(f"{start:%Y/%m/%d} is not prior to {end:%Y/%m/%d}")
        self.start = start
        self.end = end


@dataclass(frozen=True)
class DateWindow:
    """Resolved report range. start/end are UTC midnights; the texts are what the user typed."""

    start: datetime
    end: datetime
    from_text: str = DEFAULT_FROM
    to_text: str = DEFAULT_TO


def parse_date(text: str, now: datetime) -> datetime:
    """Parse a date phrase relative to ``now`` and return the start of that day in UTC.

    Raises InvalidDateExpression if dateparser cannot make sense of it.
    """
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    settings = {**_DATEPARSER_SETTINGS, "RELATIVE_BASE": now}
    parsed = dateparser.parse(text, languages=["en"], settings=settings)
    if parsed is None:
        raise InvalidDateExpression(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return datetime(parsed.year, parsed.month, parsed.day, tzinfo=timezone.utc)


def resolve_window(from_text: str, to_text: str, now: datetime) -> DateWindow:
    """Parse both ends of the range and check that start comes strictly before end."""
    start = parse_date(from_text, now)
    end = parse_date(to_text, now)
    if start >= end:
        raise InvertedRange(start, end)
    return DateWindow(start=start, end=end, from_text=from_text, to_text=to_text)
