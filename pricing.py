"""Price calculation and price-text extraction for the reservation summary."""

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Optional

from booking_tests.utils import Number, to_decimal, try_decimal

CLEANING_FEE = Decimal("25.00")
SERVICE_FEE = Decimal("15.00")
PRICE_TOLERANCE = Decimal("0.01")
MAX_VALID_PRICE = Decimal("10000")
CURRENCY_SYMBOLS = "£$€"

_NON_NUMERIC = re.compile(r"[^\d.,]")
_NIGHTS_COUNT = re.compile(r"x\s*(\d+)\s*night", re.IGNORECASE)
_ROOM_PRICE = re.compile(rf"[{CURRENCY_SYMBOLS}]\s*(\d[\d,]*(?:\.\d{{2}})?)")
_CENTS = Decimal("0.01")


def extract_price_value(text: Optional[str]) -> Decimal:
    """Pull the number out of a price text like "£1,234.50 per night".

    Everything except digits, dots and commas is dropped, then commas.
    Returns 0 when nothing numeric is left.
    """
    if not text:
        return Decimal(0)
    numeric = _NON_NUMERIC.sub("", text).replace(",", "").strip()
    value = try_decimal(numeric)
    return value if value is not None else Decimal(0)


def extract_price_value_as_int(text: Optional[str]) -> int:
    """Price rounded to whole units (banker's rounding)."""
    return int(extract_price_value(text).to_integral_value(rounding=ROUND_HALF_EVEN))


def extract_nights_count(text: Optional[str]) -> int:
    """Night count from a text like "£100 x 3 nights"; 0 if absent."""
    if not text:
        return 0
    match = _NIGHTS_COUNT.search(text)
    if not match:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        # digit run longer than the interpreter converts
        return 0


def extract_room_price_from_nights_text(text: Optional[str]) -> Decimal:
    """Nightly rate from a text like "£1,250.00 x 2 nights"; 0 if absent."""
    if not text:
        return Decimal(0)
    match = _ROOM_PRICE.search(text)
    if not match:
        return Decimal(0)
    value = try_decimal(match.group(1).replace(",", ""))
    return value if value is not None else Decimal(0)


def format_price(price: Number, currency_symbol: str = "£") -> str:
    """Render a price the way the summary card does, e.g. "£240.00"."""
    return f"{currency_symbol}{to_decimal(price).quantize(_CENTS)}"


def is_valid_price(price: Number, max_price: Number = MAX_VALID_PRICE) -> bool:
    value = to_decimal(price)
    return Decimal(0) < value <= to_decimal(max_price)


def totals_match(expected: Number, actual: Number, tolerance: Number = PRICE_TOLERANCE) -> bool:
    """Compare two amounts, absorbing display rounding."""
    return abs(to_decimal(expected) - to_decimal(actual)) <= to_decimal(tolerance)


@dataclass(frozen=True)
class PriceBreakdown:
    """Expected price of a stay: nights x rate plus fixed fees."""
    nightly_rate: Decimal
    nights: int
    cleaning_fee: Decimal = CLEANING_FEE
    service_fee: Decimal = SERVICE_FEE

    def __post_init__(self) -> None:
        if self.nights < 1:
            raise ValueError(f"A stay needs at least one night, got {self.nights}")
        for name in ("nightly_rate", "cleaning_fee", "service_fee"):
            value = to_decimal(getattr(self, name))
            if value < 0:
                raise ValueError(f"{name} cannot be negative: {value}")
            object.__setattr__(self, name, value)

    @property
    def base_price(self) -> Decimal:
        return self.nightly_rate * self.nights

    @property
    def fees(self) -> Decimal:
        return self.cleaning_fee + self.service_fee

    @property
    def total(self) -> Decimal:
        return self.base_price + self.fees

    def nights_text(self, currency_symbol: str = "£") -> str:
        return f"{format_price(self.nightly_rate, currency_symbol)} x {self.nights} nights"

    def to_display(self, currency_symbol: str = "£") -> dict[str, str]:
        """Text of each summary line as the reservation page would show it."""
        return {
            "nights": self.nights_text(currency_symbol),
            "base_price": format_price(self.base_price, currency_symbol),
            "cleaning_fee": format_price(self.cleaning_fee, currency_symbol),
            "service_fee": format_price(self.service_fee, currency_symbol),
            "total": format_price(self.total, currency_symbol),
        }


class PriceCalculator:
    """Expected totals for a fee schedule (defaults: £25 cleaning, £15 service)."""

    def __init__(self, cleaning_fee: Number = CLEANING_FEE, service_fee: Number = SERVICE_FEE,
                 tolerance: Number = PRICE_TOLERANCE):
        self.cleaning_fee = to_decimal(cleaning_fee)
        self.service_fee = to_decimal(service_fee)
        self.tolerance = to_decimal(tolerance)

    def breakdown(self, nightly_rate: Number, nights: int) -> PriceBreakdown:
        return PriceBreakdown(
            nightly_rate=to_decimal(nightly_rate),
            nights=nights,
            cleaning_fee=self.cleaning_fee,
            service_fee=self.service_fee,
        )

    def compute_expected_total(self, nightly_rate: Number, nights: int) -> Decimal:
        return self.breakdown(nightly_rate, nights).total

    def expected_total_from_base(self, base_price: Number) -> Decimal:
        """Total implied by a rendered base price (base + fees)."""
        return to_decimal(base_price) + self.cleaning_fee + self.service_fee

    def matches(self, expected: Number, actual: Number) -> bool:
        return totals_match(expected, actual, self.tolerance)

    def verify_total_text(self, nightly_rate: Number, nights: int, total_text: str) -> bool:
        """Check a rendered total against the expected one."""
        actual = extract_price_value(total_text)
        return self.matches(self.compute_expected_total(nightly_rate, nights), actual)

    # Module-level extractors exposed on the calculator for callers that hold one
    extract_price_value = staticmethod(extract_price_value)
    extract_nights_count = staticmethod(extract_nights_count)
    extract_room_price_from_nights_text = staticmethod(extract_room_price_from_nights_text)


def compute_expected_total(nightly_rate: Number, nights: int) -> Decimal:
    """Expected total with the standard fee schedule."""
    return PriceCalculator().compute_expected_total(nightly_rate, nights)
