"""Tests for the parameter validators."""
from datetime import datetime, timedelta, timezone

import pytest

from twdash.exceptions import ValidationError
from twdash.validators import (
    validate_date_string,
    validate_max_length,
    validate_non_negative_integer,
    validate_option,
    validate_required_string,
)


class TestNonNegativeInteger:

    def test_zero_and_positive_are_valid(self):
        assert validate_non_negative_integer('page', 0) == 0
        assert validate_non_negative_integer('page', 7) == 7

    @pytest.mark.parametrize("value", [-1, 1.5, "3", None, True])
    def test_rejects_non_integers_and_negatives(self, value):
        with pytest.raises(ValidationError) as exc_info:
            validate_non_negative_integer('page', value)
        assert exc_info.value.name == 'page'
        assert exc_info.value.value == value

    def test_maximum_is_inclusive(self):
        assert validate_non_negative_integer('count', 20, maximum=20) == 20
        with pytest.raises(ValidationError, match="must be <= 20"):
            validate_non_negative_integer('count', 21, maximum=20)


class TestDateString:

    def test_parses_common_formats(self):
        parsed = validate_date_string('since', '2008-08-05 14:03:00')
        assert parsed == datetime(2008, 8, 5, 14, 3, tzinfo=timezone.utc)

        parsed = validate_date_string('since', 'Tue, 05 Aug 2008 14:03:00 +0000')
        assert parsed == datetime(2008, 8, 5, 14, 3, tzinfo=timezone.utc)

    def test_accepts_datetime(self):
        value = datetime(2009, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert validate_date_string('since', value) == value

    def test_offsets_are_converted_to_utc(self):
        parsed = validate_date_string('since', '2008-08-05T16:03:00+02:00')
        assert parsed.utcoffset() == timedelta(0)
        assert parsed.hour == 14

    @pytest.mark.parametrize("value", [
        "not-a-date", "", 12345, None,
        # parses, but lies before year 1 once converted to UTC
        "0001-01-01T00:00:00+05:00",
        datetime(1, 1, 1, tzinfo=timezone(timedelta(hours=5))),
    ])
    def test_rejects_unparseable_values(self, value):
        with pytest.raises(ValidationError, match="valid date string"):
            validate_date_string('since', value)


class TestOption:

    def test_case_is_normalized(self):
        assert validate_option('format', 'JSON', ('json', 'xml')) == 'json'

    def test_error_lists_allowed_values(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_option('format', 'rss', ('json', 'xml'))
        assert 'json, xml' in str(exc_info.value)


class TestMaxLength:

    def test_limit_is_inclusive(self):
        assert validate_max_length('status', 'x' * 140) == 'x' * 140
        with pytest.raises(ValidationError, match="140 characters"):
            validate_max_length('status', 'x' * 141)

    def test_counts_characters_not_bytes(self):
        text = 'é' * 140
        assert validate_max_length('status', text) == text


class TestRequiredString:

    def test_numeric_ids_are_accepted(self):
        assert validate_required_string('user', 42) == '42'

    @pytest.mark.parametrize("value", ["", "   ", None, False])
    def test_rejects_empty_values(self, value):
        with pytest.raises(ValidationError):
            validate_required_string('user', value)
