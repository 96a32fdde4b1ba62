"""Date normalization for feed entries.

Publishers encode dates in many ways. ``parse_date`` tries a fixed list of
formats in order and returns the first match as an aware UTC datetime.

Each attempt first checks whether the string has the general shape of its
format. Strings of the wrong shape are skipped silently; strings of the
right shape that still fail to parse (for example month 13) are reported
in the ``DateParseError`` raised when every attempt fails.
"""

import re
from collections.abc import Callable
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from dateutil import parser as date_parser

from .exceptions import DateParseError

# Substituted for entries that carry no date at all.
PLACEHOLDER_DATE = "1990-09-19"

_RFC3339_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(?:[.,](\d+))?(?:[Zz]|[+-]\d{2}:?\d{2})$",
    re.ASCII,
)
_RFC2822_RE = re.compile(
    r"^(?:[A-Za-z]{3},\s*)?\d{1,2}\s+[A-Za-z]{3}\s+\d{2,4}\s+"
    r"\d{1,2}:\d{2}(?::\d{2})?\s+(?:[+-]\d{4}|[A-Za-z]{1,3})$",
    re.ASCII,
)
_NAIVE_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$", re.ASCII)
_CLEANED_RE = re.compile(r"^\d{1,2} [A-Za-z]+ \d{4} \d{1,2}:\d{2}:\d{2}$", re.ASCII)
_NAIVE_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII)

NAIVE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
NAIVE_DATE_FORMAT = "%Y-%m-%d"
CLEANED_FORMATS = ("%d %B %Y %H:%M:%S", "%d %b %Y %H:%M:%S")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_rfc3339(text: str) -> datetime | None:
    """Parse ``2024-01-01T12:00:00Z`` / ``2024-01-01T13:00:00+01:00``."""
    match = _RFC3339_RE.match(text)
    if not match:
        return None
    candidate = text.upper()
    fraction = match.group(1)
    if fraction and len(fraction) > 6:
        # datetime only keeps microseconds
        candidate = candidate.replace(fraction, fraction[:6], 1)
    return _as_utc(date_parser.isoparse(candidate))


def parse_rfc2822(text: str) -> datetime | None:
    """Parse ``Mon, 01 Jan 2024 12:00:00 +0000``.

    The weekday is optional and not checked against the date. Zone names
    defined by RFC 2822 (``GMT``, ``EST``...) are honoured; ``-0000`` and
    unknown names are read as UTC.
    """
    if not _RFC2822_RE.match(text):
        return None
    return _as_utc(parsedate_to_datetime(text))


def parse_naive_datetime(text: str) -> datetime | None:
    """Parse ``2024-01-01 12:00:00`` as a UTC time."""
    if not _NAIVE_DATETIME_RE.match(text):
        return None
    return datetime.strptime(text, NAIVE_DATETIME_FORMAT).replace(tzinfo=UTC)


def parse_cleaned(text: str) -> datetime | None:
    """Parse ``Sun, 31 August 2025 07:00:00 GMT`` style dates as UTC.

    The first token (weekday) and everything after the time (zone name)
    are dropped before parsing.
    """
    parts = text.split()
    if len(parts) < 5:
        return None
    cleaned = " ".join(parts[1:5])
    if not _CLEANED_RE.match(cleaned):
        return None

    error: ValueError | None = None
    for fmt in CLEANED_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).replace(tzinfo=UTC)
        except ValueError as e:
            error = e
    raise ValueError(f"{cleaned!r}: {error}")


def parse_naive_date(text: str) -> datetime | None:
    """Parse ``2024-01-01`` as midnight UTC."""
    if not _NAIVE_DATE_RE.match(text):
        return None
    return datetime.strptime(text, NAIVE_DATE_FORMAT).replace(tzinfo=UTC)


DATE_PARSERS: list[tuple[str, Callable[[str], datetime | None]]] = [
    ("RFC3339", parse_rfc3339),
    ("RFC2822", parse_rfc2822),
    (f"NaiveDateTime ('{NAIVE_DATETIME_FORMAT}')", parse_naive_datetime),
    ("Cleaned Date", parse_cleaned),
    (f"NaiveDate ('{NAIVE_DATE_FORMAT}')", parse_naive_date),
]


def parse_date(date_str: str) -> datetime:
    """Convert a feed date string into an aware UTC datetime.

    Args:
        date_str: Date text as found in the feed

    Returns:
        The parsed instant in UTC

    Raises:
        DateParseError: If no supported format matches
    """
    text = date_str.strip()
    errors = []

    for name, parser in DATE_PARSERS:
        try:
            result = parser(text)
        except (ValueError, OverflowError) as e:
            errors.append(f"{name}: {e}")
            continue
        if result is not None:
            return result

    raise DateParseError(date_str, errors)
