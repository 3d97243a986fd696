"""Test data models for booking, pricing, contact and admin scenarios."""

import random
import re
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from booking_tests.dates import generate_test_dates
from booking_tests.pricing import PRICE_TOLERANCE, PriceCalculator


class GuestInfo(BaseModel):
    """Guest details entered on the reservation form."""
    first_name: str
    last_name: str
    email: str
    phone: str


class BookingDates(BaseModel):
    check_in: str
    check_out: str
    stay_duration: int


class RoomInfo(BaseModel):
    room_type: str
    expected_guest_count: int
    expected_price: Decimal


class RoomSpec(BaseModel):
    """A room as created from the admin panel."""
    room_number: int
    room_type: str = "Single"
    accessible: bool = False
    price: int = 100
    features: list[str] = Field(default_factory=list)


class ContactInfo(BaseModel):
    name: str
    email: str
    phone: str
    subject: str
    message: str


class ViewportSize(BaseModel):
    name: str
    width: int
    height: int

    def as_playwright(self) -> dict:
        return {"width": self.width, "height": self.height}


class PriceComponents(BaseModel):
    """Expected fixed fees and display conventions for a pricing scheme."""
    cleaning_fee: Decimal
    service_fee: Decimal
    accepted_currency_symbols: list[str]
    nights_text_pattern: str = r"\d+\s*night"

    def calculator(self, tolerance: Decimal = PRICE_TOLERANCE) -> PriceCalculator:
        return PriceCalculator(self.cleaning_fee, self.service_fee, tolerance)

    def is_nights_text(self, text: str) -> bool:
        """True if a summary line reads as a night count in an accepted currency."""
        if not re.search(self.nights_text_pattern, text, re.IGNORECASE):
            return False
        return any(symbol in text for symbol in self.accepted_currency_symbols)


class DateValidationCase(BaseModel):
    """One data-driven date validation case (see fixtures/date_validation.json)."""
    id: str
    description: str = ""
    check_in: str
    check_out: str
    today: date
    expected_valid: bool
    expected_error_keywords: list[str] = Field(default_factory=list)
    expect_past_check_in: bool = False
    expect_invalid_order: bool = False
    expect_same_day: bool = False
    markers: list[str] = Field(default_factory=list)


class PriceCase(BaseModel):
    """One data-driven pricing case (see fixtures/pricing.json)."""
    id: str
    description: str = ""
    nightly_rate: Decimal
    nights: int
    cleaning_fee: Optional[Decimal] = None
    service_fee: Optional[Decimal] = None
    expected_total: Decimal
    total_text: Optional[str] = None
    nights_text: Optional[str] = None
    markers: list[str] = Field(default_factory=list)


# === Canned data ===

VALID_GUEST = GuestInfo(
    first_name="John",
    last_name="Smith",
    email="john.smith@example.com",
    phone="07123456789",
)

VALID_CONTACT = ContactInfo(
    name="John Smith",
    email="john.smith@example.com",
    phone="12345678901",
    subject="Test Inquiry",
    message="This is a test message with sufficient length to meet the minimum requirements.",
)

STANDARD_UK_PRICING = PriceComponents(
    cleaning_fee=Decimal("25"),
    service_fee=Decimal("15"),
    accepted_currency_symbols=["£"],
)

ALTERNATIVE_PRICING = PriceComponents(
    cleaning_fee=Decimal("30"),
    service_fee=Decimal("20"),
    accepted_currency_symbols=["£", "$", "€"],
)

ROOM_TYPES = [
    RoomInfo(room_type="Single", expected_guest_count=1, expected_price=Decimal("100")),
    RoomInfo(room_type="Double", expected_guest_count=2, expected_price=Decimal("150")),
    RoomInfo(room_type="Twin", expected_guest_count=2, expected_price=Decimal("150")),
    RoomInfo(room_type="Suite", expected_guest_count=2, expected_price=Decimal("200")),
    RoomInfo(room_type="Family", expected_guest_count=4, expected_price=Decimal("250")),
]

VIEWPORTS = [
    ViewportSize(name="desktop", width=1920, height=1080),
    ViewportSize(name="tablet", width=768, height=1024),
    ViewportSize(name="mobile", width=375, height=667),
]

# Contact form validation messages shown by the site
CONTACT_ERRORS = {
    "name": "Name may not be blank",
    "email": "Email may not be blank",
    "phone": "Phone may not be blank",
    "subject": "Subject may not be blank",
    "message": "Message may not be blank",
}


# === Generators ===

def random_guest(rng: Optional[random.Random] = None) -> GuestInfo:
    rng = rng or random
    first_name = f"Test{rng.randint(1000, 9999)}"
    last_name = f"User{rng.randint(1000, 9999)}"
    return GuestInfo(
        first_name=first_name,
        last_name=last_name,
        email=f"{first_name.lower()}.{last_name.lower()}@example.com",
        phone=f"07{rng.randint(100000000, 999999999)}",
    )


def random_booking_dates(
    min_days_from_now: int = 1,
    max_days_from_now: int = 30,
    stay_duration: int = 1,
    rng: Optional[random.Random] = None,
) -> BookingDates:
    rng = rng or random
    days_from_now = rng.randrange(min_days_from_now, max_days_from_now)
    check_in, check_out = generate_test_dates(days_from_now, stay_duration)
    return BookingDates(check_in=check_in, check_out=check_out, stay_duration=stay_duration)


def random_room_number(rng: Optional[random.Random] = None) -> int:
    """Room number valid for creation. Kept below 900 so number + 100 stays a legal price."""
    return (rng or random).randint(1, 899)


def exotic_room_number(rng: Optional[random.Random] = None) -> int:
    """Room number above the creation form's 1-999 limit."""
    return (rng or random).randint(1001, 9998)
