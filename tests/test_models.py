"""Unit tests for test-data models and generators."""

import random
from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from booking_tests.dates import DateRangeValidator
from booking_tests.pricing import extract_room_price_from_nights_text
from booking_tests.models import (
    ALTERNATIVE_PRICING,
    ROOM_TYPES,
    STANDARD_UK_PRICING,
    VIEWPORTS,
    DateValidationCase,
    PriceCase,
    PriceComponents,
    RoomSpec,
    exotic_room_number,
    random_booking_dates,
    random_guest,
    random_room_number,
)


@pytest.mark.unit
class TestCaseModels:

    def test_date_case_parses_today(self):
        case = DateValidationCase.model_validate({
            "id": "x",
            "check_in": "01/01/2025",
            "check_out": "02/01/2025",
            "today": "2024-06-01",
            "expected_valid": True,
        })

        assert case.today == date(2024, 6, 1)
        assert case.expected_error_keywords == []
        assert case.markers == []

    def test_date_case_requires_expectation(self):
        with pytest.raises(ValidationError):
            DateValidationCase.model_validate({
                "id": "x", "check_in": "", "check_out": "", "today": "2024-06-01",
            })

    def test_price_case_keeps_decimals_exact(self):
        case = PriceCase.model_validate({
            "id": "x", "nightly_rate": "99.99", "nights": 3, "expected_total": "339.97",
        })

        assert case.nightly_rate == Decimal("99.99")
        assert case.cleaning_fee is None


@pytest.mark.unit
class TestCannedData:

    def test_room_spec_defaults(self):
        room = RoomSpec(room_number=101)

        assert room.room_type == "Single"
        assert room.accessible is False
        assert room.price == 100
        assert room.features == []

    def test_viewports(self):
        assert [v.name for v in VIEWPORTS] == ["desktop", "tablet", "mobile"]
        assert VIEWPORTS[2].as_playwright() == {"width": 375, "height": 667}

    def test_room_types_unique(self):
        names = [room.room_type for room in ROOM_TYPES]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("scheme, expected_total", [
        (STANDARD_UK_PRICING, Decimal("640")),
        (ALTERNATIVE_PRICING, Decimal("650")),
    ], ids=["standard_uk", "alternative"])
    def test_pricing_scheme_drives_calculator(self, scheme: PriceComponents, expected_total):
        calculator = scheme.calculator()

        assert calculator.compute_expected_total(150, 4) == expected_total
        for symbol in scheme.accepted_currency_symbols:
            breakdown = calculator.breakdown(150, 4)
            display = breakdown.to_display(symbol)
            assert scheme.is_nights_text(display["nights"])
            assert extract_room_price_from_nights_text(display["nights"]) == Decimal("150")
            assert calculator.verify_total_text(150, 4, display["total"])

    def test_nights_text_needs_accepted_symbol(self):
        assert STANDARD_UK_PRICING.is_nights_text("£100 x 2 nights")
        assert not STANDARD_UK_PRICING.is_nights_text("$100 x 2 nights")
        assert ALTERNATIVE_PRICING.is_nights_text("$100 X 2 NIGHTS")
        assert not ALTERNATIVE_PRICING.is_nights_text("£100 per stay")


@pytest.mark.unit
class TestGenerators:

    def test_random_guest_is_reproducible(self):
        first = random_guest(random.Random(3))
        second = random_guest(random.Random(3))

        assert first == second
        assert first.email == f"{first.first_name.lower()}.{first.last_name.lower()}@example.com"
        assert first.phone.startswith("07") and len(first.phone) == 11

    def test_random_booking_dates_are_valid(self):
        rng = random.Random(11)
        validator = DateRangeValidator()
        for _ in range(10):
            dates = random_booking_dates(stay_duration=3, rng=rng)
            result = validator.validate(dates.check_in, dates.check_out)
            assert result.is_valid, result.summary()
            assert result.nights == dates.stay_duration

    def test_room_numbers(self):
        rng = random.Random(5)
        for _ in range(50):
            assert 1 <= random_room_number(rng) <= 899
            assert 1001 <= exotic_room_number(rng) <= 9998
