"""Parse free-form deadline text into a calendar date.

Three strategies, first success wins:
1. Numeric day-month-year (15/07/2025, 15-07-25, 15.7.2025)
2. Month name with a day on either side (5 Jan 2025, Jan 5, 2025)
3. Generic parsing via dateutil

Numeric dates are always read day-first; there is no locale detection.
"""

import re
from datetime import date, datetime
from typing import Optional

from dateutil import parser as dateparser

MONTHS = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

# Digit guards keep the tail of a longer number (e.g. the "25-01-05" in
# "2025-01-05") from being read as a date; ISO dates go to the fallback.
NUMERIC_DATE_PATTERN = re.compile(r"(?<!\d)(\d{1,2})[./-](\d{1,2})[./-](\d{2,4})(?!\d)")

FALLBACK_DEFAULT = datetime(2000, 1, 1)

# "5 Jan 2025", "5th January, 2025", "Jan 5, 2025", "January 5th 2025"
MONTH_NAME_PATTERN = re.compile(
    r"(?:\b(\d{1,2})(?:st|nd|rd|th)?\s+)?"
    r"\b([a-z]{3,})\.?,?\s+"
    r"(?:(\d{1,2})(?:st|nd|rd|th)?,?\s+)?"
    r"(\d{4})\b",
    re.I,
)


def _make_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_numeric_date(text: str) -> Optional[date]:
    """Parse dd/mm/yyyy style dates. Two-digit years are 20xx."""
    match = NUMERIC_DATE_PATTERN.search(text)
    if not match:
        return None

    day, month, year = (int(part) for part in match.groups())
    if year < 100:
        year += 2000
    return _make_date(year, month, day)


def parse_month_name_date(text: str) -> Optional[date]:
    """Parse dates that spell out the month."""
    for match in MONTH_NAME_PATTERN.finditer(text):
        leading_day, month_name, trailing_day, year = match.groups()
        month = MONTHS.get(month_name[:3].lower())
        if month is None:
            continue
        day = leading_day or trailing_day
        if not day:
            return None
        return _make_date(int(year), month, int(day))
    return None


def parse_fallback_date(text: str) -> Optional[date]:
    """Last resort: let dateutil have a go at the whole string."""
    # Missing parts default to a fixed date, not today
    try:
        return dateparser.parse(text, default=FALLBACK_DEFAULT).date()
    except (ValueError, OverflowError):
        return None


def parse_date(text: Optional[str]) -> Optional[date]:
    """Parse a deadline phrase into a date, or None if it isn't one."""
    if not text or not text.strip():
        return None

    text = text.strip()
    return (
        parse_numeric_date(text)
        or parse_month_name_date(text)
        or parse_fallback_date(text)
    )
