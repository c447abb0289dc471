"""
Unit tests for YYYYMMDD date parsing.
"""

import pytest
from datetime import date

from moneywell.core.dateymd import parse_dateymd, format_dateymd
from moneywell.core.exceptions import DateParseError, MoneyWellError


class TestParseDateymd:
    """Tests for parse_dateymd function."""

    def test_zero_is_no_date(self):
        """Test that 0 means no date rather than an error."""
        assert parse_dateymd(0) is None

    def test_none_is_no_date(self):
        """Test that a NULL column means no date."""
        assert parse_dateymd(None) is None

    @pytest.mark.parametrize("value,expected", [
        (20170101, date(2017, 1, 1)),
        (20060301, date(2006, 3, 1)),
        (20180602, date(2018, 6, 2)),
        (20160229, date(2016, 2, 29)),
    ])
    def test_valid_dates(self, value, expected):
        """Test parsing valid calendar dates."""
        assert parse_dateymd(value) == expected

    @pytest.mark.parametrize("value", [
        -1,         # negative value
        102,        # too few digits for a year
        20061301,   # invalid month
        20060145,   # invalid day
        20170229,   # not a leap year
        201801011,  # too many digits
    ])
    def test_invalid_dates(self, value):
        """Test that invalid values raise DateParseError."""
        with pytest.raises(DateParseError) as exc_info:
            parse_dateymd(value)

        assert exc_info.value.value == value
        assert exc_info.value.code == "DATE_PARSE_ERROR"
        assert str(value) in str(exc_info.value)

    def test_error_is_moneywell_error(self):
        """Test that DateParseError can be caught as MoneyWellError."""
        with pytest.raises(MoneyWellError):
            parse_dateymd(20061301)


class TestFormatDateymd:
    """Tests for format_dateymd function."""

    def test_format_date(self):
        assert format_dateymd(date(2018, 6, 2)) == 20180602

    def test_format_none(self):
        assert format_dateymd(None) == 0
