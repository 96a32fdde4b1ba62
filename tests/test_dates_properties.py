"""Property-based tests for date normalization."""

from datetime import UTC, datetime, timedelta, timezone

from hypothesis import given
from hypothesis import strategies as st

from feedcore.dates import parse_date
from feedcore.exceptions import DateParseError

OFFSETS = st.sampled_from(
    [
        UTC,
        timezone(timedelta(hours=1)),
        timezone(timedelta(hours=5, minutes=30)),
        timezone(timedelta(hours=-8)),
    ]
)


class TestParseDateProperties:
    """Property-based tests for parse_date."""

    @given(
        st.datetimes(
            min_value=datetime(1900, 1, 2),
            max_value=datetime(2200, 12, 30),
            timezones=OFFSETS,
        )
    )
    def test_offsets_normalize_to_same_instant(self, moment):
        """
        For any timestamp written with an explicit offset, the parsed value
        is the same instant expressed in UTC.
        """
        result = parse_date(moment.isoformat())

        assert result == moment
        assert result.utcoffset() == timedelta(0)

    @given(st.dates(min_value=datetime(1000, 1, 1).date()))
    def test_plain_dates_are_midnight_utc(self, day):
        """For any ``YYYY-MM-DD`` string the result is midnight UTC that day."""
        result = parse_date(day.isoformat())

        assert result == datetime(day.year, day.month, day.day, tzinfo=UTC)

    @given(st.text(max_size=60))
    def test_only_date_parse_errors_escape(self, text):
        """
        For any input, parse_date returns an aware UTC datetime or raises
        DateParseError; no other exception leaks out.
        """
        try:
            result = parse_date(text)
        except DateParseError as e:
            assert e.value == text
        else:
            assert result.tzinfo == UTC
