"""Unit tests for check-in/check-out date validation.

Data-driven cases come from fixtures/date_validation.json via the
`date_case` fixture; the rest pin down parsing and rule edge cases.
"""

import locale
import random
from datetime import date, datetime

import pytest

from booking_tests.dates import (
    DateRangeValidationResult,
    DateRangeValidator,
    generate_random_test_dates,
    generate_test_dates,
    is_check_out_before_check_in,
    is_date_in_past,
    is_same_day_booking,
    nights_between,
    parse_date,
    validate_dates,
)
from booking_tests.models import DateValidationCase

TODAY = date(2024, 6, 1)


class StaticReader:
    """Stands in for a page object that exposes raw date fields."""

    def __init__(self, check_in, check_out):
        self.values = (check_in, check_out)

    def read_dates(self):
        return self.values


@pytest.mark.unit
class TestDateCases:
    """Fixture-driven validation outcomes."""

    def test_date_case(self, date_case: DateValidationCase):
        result = DateRangeValidator(date_case.today).validate(date_case.check_in, date_case.check_out)

        assert result.is_valid == date_case.expected_valid, result.summary()
        assert result.is_valid == (len(result.errors) == 0)
        assert result.has_past_check_in == date_case.expect_past_check_in
        assert result.has_invalid_date_order == date_case.expect_invalid_order
        assert result.has_same_day_booking == date_case.expect_same_day
        for keyword in date_case.expected_error_keywords:
            assert result.mentions(keyword), f"No error mentions {keyword!r}: {result.errors}"


@pytest.mark.unit
@pytest.mark.dates
class TestDateRangeValidator:

    def test_valid_pair_echoes_input_and_parses(self):
        result = DateRangeValidator().validate("01/01/2025", "02/01/2025", today=TODAY)

        assert result.is_valid
        assert result.errors == ()
        assert result.check_in == "01/01/2025"
        assert result.check_out == "02/01/2025"
        assert result.parsed_check_in == date(2025, 1, 1)
        assert result.parsed_check_out == date(2025, 1, 2)
        assert result.nights == 1

    def test_format_error_sets_no_semantic_flags(self):
        result = DateRangeValidator().validate("invalid", "02/01/2025", today=TODAY)

        assert not result.is_valid
        assert result.has_format_error
        assert result.errors == ("Check-in date 'invalid' is not in a valid format",)
        assert result.parsed_check_in is None
        assert result.parsed_check_out is None
        assert not result.has_past_check_in
        assert not result.has_invalid_date_order
        assert not result.has_same_day_booking
        assert result.nights is None

    def test_both_format_errors_reported_in_order(self):
        result = DateRangeValidator().validate("", "not a date", today=TODAY)

        assert len(result.errors) == 2
        assert result.errors[0].startswith("Check-in date ''")
        assert result.errors[1].startswith("Check-out date 'not a date'")

    def test_none_input_is_a_format_error(self):
        result = DateRangeValidator().validate(None, None, today=TODAY)

        assert not result.is_valid
        assert result.check_in == ""
        assert result.check_out == ""
        assert len(result.errors) == 2

    def test_errors_follow_detection_order(self):
        result = DateRangeValidator().validate("15/05/2024", "15/05/2024", today=TODAY)

        assert result.has_past_check_in and result.has_same_day_booking
        assert "past" in result.errors[0]
        assert "same day" in result.errors[1]

    def test_inverted_order_message_names_both_dates(self):
        result = DateRangeValidator().validate("02/01/2025", "01/01/2025", today=TODAY)

        assert result.errors == (
            "Check-out date '01/01/2025' is before check-in date '02/01/2025' (invalid date order)",
        )
        assert result.nights == -1

    def test_same_day_is_not_invalid_order(self):
        result = DateRangeValidator().validate("01/01/2025", "01/01/2025", today=TODAY)

        assert result.has_same_day_booking
        assert not result.has_invalid_date_order
        assert result.nights == 0

    def test_check_out_in_past_alone_is_not_flagged(self):
        """Only check-in is compared to today; an earlier check-out is an order error."""
        result = DateRangeValidator().validate("02/06/2024", "31/05/2024", today=TODAY)

        assert not result.has_past_check_in
        assert result.has_invalid_date_order

    def test_time_of_day_is_ignored(self):
        late_evening = datetime(2024, 6, 1, 23, 59)
        result = DateRangeValidator(late_evening).validate("01/06/2024", "02/06/2024")

        assert result.is_valid

    def test_call_today_overrides_validator_today(self):
        validator = DateRangeValidator(date(2030, 1, 1))

        assert not validator.validate("01/01/2025", "02/01/2025").is_valid
        assert validator.validate("01/01/2025", "02/01/2025", today=TODAY).is_valid

    def test_defaults_to_current_date(self):
        assert DateRangeValidator().today() == date.today()

    def test_validate_reader(self):
        reader = StaticReader("01/01/2025", "01/01/2025")
        result = DateRangeValidator(TODAY).validate_reader(reader)

        assert result.has_same_day_booking
        assert result.check_in == "01/01/2025"

    def test_validate_dates_shortcut(self):
        assert validate_dates("01/01/2025", "05/01/2025", today=TODAY).nights == 4

    def test_result_is_immutable(self):
        result = validate_dates("01/01/2025", "02/01/2025", today=TODAY)

        with pytest.raises(AttributeError):
            result.errors = ("tampered",)

    def test_summary(self):
        valid = validate_dates("01/01/2025", "02/01/2025", today=TODAY)
        invalid = validate_dates("01/01/2025", "01/01/2025", today=TODAY)

        assert valid.summary() == "01/01/2025 -> 02/01/2025: valid"
        assert invalid.summary().endswith("cannot be the same day")

    def test_mentions_is_case_insensitive(self):
        result = DateRangeValidationResult("a", "b", errors=("Check-in date 'a' is in the PAST",))

        assert result.mentions("past")
        assert result.mentions("nothing", "Past")
        assert not result.mentions("order")


@pytest.mark.unit
@pytest.mark.dates
class TestParseDate:

    @pytest.mark.parametrize("raw, expected", [
        ("01/02/2025", date(2025, 2, 1)),
        ("29/02/2024", date(2024, 2, 29)),
        ("2025-02-01", date(2025, 2, 1)),
        ("02/13/2025", date(2025, 2, 13)),
        ("01.02.2025", date(2025, 2, 1)),
        ("2025-02-01T10:30:00", date(2025, 2, 1)),
        ("1 February 2025", date(2025, 2, 1)),
        ("Feb 1, 2025", date(2025, 2, 1)),
        ("  01/02/2025\n", date(2025, 2, 1)),
    ])
    def test_supported_formats(self, raw, expected):
        assert parse_date(raw) == expected

    @pytest.mark.parametrize("raw", [
        "", None, "   ", "invalid", "29/02/2025", "32/01/2025", "00/00/0000", "1/1",
    ])
    def test_unparseable(self, raw):
        assert parse_date(raw) is None

    def test_day_first_wins_when_ambiguous(self):
        assert parse_date("03/04/2025") == date(2025, 4, 3)

    @pytest.mark.parametrize("raw, expected", [
        ("5 July 2024", date(2024, 7, 5)),
        ("5 jul. 2024", date(2024, 7, 5)),
        ("July 5, 2024", date(2024, 7, 5)),
        ("SEPT 3 2024", date(2024, 9, 3)),
        ("31 April 2024", None),
        ("5 Juli 2024", None),
        ("5 Julyish 2024", None),
    ])
    def test_english_month_names(self, raw, expected):
        assert parse_date(raw) == expected

    def test_month_names_ignore_time_locale(self):
        previous = locale.setlocale(locale.LC_TIME)
        try:
            locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
        except locale.Error:
            pytest.skip("de_DE.UTF-8 locale not installed")
        try:
            assert parse_date("5 March 2024") == date(2024, 3, 5)
            assert parse_date("5 März 2024") is None
        finally:
            locale.setlocale(locale.LC_TIME, previous)


@pytest.mark.unit
@pytest.mark.dates
class TestDateRules:

    def test_is_date_in_past(self):
        assert is_date_in_past(date(2024, 5, 31), TODAY)
        assert not is_date_in_past(TODAY, TODAY)
        assert not is_date_in_past(datetime(2024, 6, 1, 0, 0, 1), datetime(2024, 6, 1, 23, 0))

    def test_order_and_same_day_are_exclusive(self):
        day = date(2025, 1, 1)
        later = date(2025, 1, 2)

        assert is_check_out_before_check_in(later, day)
        assert not is_check_out_before_check_in(day, day)
        assert is_same_day_booking(day, day)
        assert not is_same_day_booking(day, later)

    def test_nights_between(self):
        assert nights_between(date(2024, 12, 30), date(2025, 1, 2)) == 3
        assert nights_between(date(2024, 2, 28), date(2024, 3, 1)) == 2


@pytest.mark.unit
@pytest.mark.dates
class TestDateGeneration:

    def test_generate_test_dates(self):
        assert generate_test_dates(1, 1, today=TODAY) == ("02/06/2024", "03/06/2024")
        assert generate_test_dates(30, 7, today=TODAY) == ("01/07/2024", "08/07/2024")

    def test_generated_dates_always_validate(self):
        rng = random.Random(1234)
        validator = DateRangeValidator(TODAY)
        for _ in range(50):
            stay = rng.randint(1, 14)
            check_in, check_out = generate_random_test_dates(0, 365, stay, rng=rng, today=TODAY)
            result = validator.validate(check_in, check_out)
            assert result.is_valid, result.summary()
            assert result.nights == stay

    def test_random_dates_respect_window(self):
        rng = random.Random(7)
        for _ in range(20):
            check_in, _ = generate_random_test_dates(10, 20, rng=rng, today=TODAY)
            offset = (parse_date(check_in) - TODAY).days
            assert 10 <= offset < 20

    def test_random_dates_reject_empty_window(self):
        with pytest.raises(ValueError, match="must be greater than"):
            generate_random_test_dates(5, 5)
