"""Unit tests for field value normalizers."""

import pytest

from pixpass.normalize import format_date, format_name, format_number, normalize_field
from pixpass.profiles import PROFILES, FieldSpec


class TestFormatName:
    """Tests for format_name."""

    @pytest.mark.parametrize("value,expected", [
        ("John Smith", "Smith, John"),
        ("Jakub Jan Novak", "Novak, Jakub Jan"),
        ("  Ana Petrova  ", "Petrova, Ana"),
        ("Novak, Jakub", "Novak, Jakub"),
        ("Cher", "Cher"),
    ])
    def test_format(self, value, expected):
        assert format_name(value) == expected


class TestFormatDate:
    """Tests for format_date."""

    @pytest.mark.parametrize("value,expected", [
        ("05.03.1987", "05.03.1987"),
        ("5/3/1987", "05.03.1987"),
        ("5-3-1987", "05.03.1987"),
        ("5.3.87", "05.03.87"),
        ("1987-03-05", "1987.03.05"),
        ("05031987", "05.03.1987"),
        ("on 05 03 1987!", "05.03.1987"),
        ("March 5th", "March 5th"),
        ("", ""),
    ])
    def test_format(self, value, expected):
        assert format_date(value) == expected


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize("value,expected", [
        ("ab12-cd34ef56", "AB12C-D34EF"),
        ("12345", "12345"),
        ("123456", "12345-6"),
        ("a b c", "ABC"),
        ("--", ""),
    ])
    def test_format(self, value, expected):
        assert format_number(value) == expected


class TestNormalizeField:
    """Tests for per-field normalization and length bounds."""

    def test_sex_uppercased_and_truncated(self):
        spec = FieldSpec(0, 0, max_length=1)
        assert normalize_field("sex", "female", spec) == "F"

    def test_city_passes_through_truncated(self):
        spec = FieldSpec(0, 0, max_length=15)
        assert normalize_field("city", "Orvech Vonor East", spec) == "Orvech Vonor Ea"

    def test_name_truncated_after_formatting(self):
        spec = FieldSpec(0, 0, max_length=20)
        result = normalize_field("name", "Alexandrina Konstantinopolous", spec)
        assert result == "Konstantinopolous, A"

    def test_dates_formatted(self):
        spec = PROFILES["arstotzka"].fields["dob"]
        assert normalize_field("dob", "5/3/1987", spec) == "05.03.1987"
        assert normalize_field("expiry", "1/12/1983", spec) == "01.12.1983"

    def test_number_not_cut_by_max_length(self):
        spec = PROFILES["arstotzka"].fields["number"]
        assert spec.max_length == 9
        assert normalize_field("number", "AB12CD34EF", spec) == "AB12C-D34EF"
