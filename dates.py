"""Check-in/check-out date validation for the booking form.

The validator is a pure function of two raw strings and a "today" date.
Malformed input never raises: every problem is reported through the
``errors`` list and flags of :class:`DateRangeValidationResult`.
"""

import random
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Protocol, Union

from booking_tests.utils import as_date, format_display_date

# dd/MM/yyyy with zero-padded day and month, as the booking form renders it
STRICT_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")
STRICT_DATE_FORMAT = "%d/%m/%Y"

# Fallback formats, tried in order. Day-first wins over month-first.
LOOSE_DATE_FORMATS = (
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%d-%m-%Y",
    "%m-%d-%Y",
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d %H:%M:%S",
)

# English month names and abbreviations, independent of LC_TIME
MONTHS = {
    name: number
    for number, full in enumerate(
        ("january", "february", "march", "april", "may", "june", "july",
         "august", "september", "october", "november", "december"),
        start=1,
    )
    for name in (full, full[:3])
}
MONTHS["sept"] = 9

_DAY_MONTH_YEAR = re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\.?,?\s+(\d{4})$")
_MONTH_DAY_YEAR = re.compile(r"^([A-Za-z]+)\.?\s+(\d{1,2}),?\s+(\d{4})$")

DateLike = Union[date, datetime]


class RawFieldReader(Protocol):
    """Anything that can hand over the raw check-in/check-out field values."""

    def read_dates(self) -> tuple[str, str]:
        ...


def _strict_parse(raw: str) -> Optional[date]:
    if not STRICT_DATE_PATTERN.match(raw):
        return None
    try:
        return datetime.strptime(raw, STRICT_DATE_FORMAT).date()
    except ValueError:
        return None


def _month_name_parse(text: str) -> Optional[date]:
    """Dates like 5 July 2024, 5 Jul. 2024 or July 5, 2024."""
    match = _DAY_MONTH_YEAR.match(text)
    if match:
        day, month_name, year = match.groups()
    else:
        match = _MONTH_DAY_YEAR.match(text)
        if not match:
            return None
        month_name, day, year = match.groups()
    month = MONTHS.get(month_name.lower())
    if month is None:
        return None
    try:
        return date(int(year), month, int(day))
    except ValueError:
        return None


def _loose_parse(raw: str) -> Optional[date]:
    text = raw.strip()
    if not text:
        return None
    for fmt in LOOSE_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    parsed = _month_name_parse(text)
    if parsed is not None:
        return parsed
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_date(raw: Optional[str]) -> Optional[date]:
    """Parse a date field value, strict dd/mm/yyyy first, then loosely.

    Returns None when no supported format matches. Empty input is never a date.
    """
    if not raw:
        return None
    return _strict_parse(raw) or _loose_parse(raw)


def is_date_in_past(value: DateLike, today: DateLike) -> bool:
    return as_date(value) < as_date(today)


def is_check_out_before_check_in(check_in: DateLike, check_out: DateLike) -> bool:
    return as_date(check_out) < as_date(check_in)


def is_same_day_booking(check_in: DateLike, check_out: DateLike) -> bool:
    return as_date(check_in) == as_date(check_out)


def nights_between(check_in: DateLike, check_out: DateLike) -> int:
    """Number of nights for a stay; negative when the dates are inverted."""
    return (as_date(check_out) - as_date(check_in)).days


@dataclass(frozen=True)
class DateRangeValidationResult:
    """Outcome of validating one check-in/check-out pair."""
    check_in: str
    check_out: str
    parsed_check_in: Optional[date] = None
    parsed_check_out: Optional[date] = None
    errors: tuple[str, ...] = ()
    has_past_check_in: bool = False
    has_invalid_date_order: bool = False
    has_same_day_booking: bool = False

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_format_error(self) -> bool:
        return self.parsed_check_in is None or self.parsed_check_out is None

    @property
    def nights(self) -> Optional[int]:
        if self.has_format_error:
            return None
        return nights_between(self.parsed_check_in, self.parsed_check_out)

    def mentions(self, *keywords: str) -> bool:
        """True if any error message contains any keyword (case-insensitive)."""
        lowered = [error.lower() for error in self.errors]
        return any(keyword.lower() in error for keyword in keywords for error in lowered)

    def summary(self) -> str:
        if self.is_valid:
            return f"{self.check_in} -> {self.check_out}: valid"
        return f"{self.check_in} -> {self.check_out}: " + "; ".join(self.errors)


class DateRangeValidator:
    """Validates booking date pairs against a fixed or current "today"."""

    def __init__(self, today: Optional[DateLike] = None):
        self._today = as_date(today) if today is not None else None

    def today(self) -> date:
        return self._today or date.today()

    def validate(
        self,
        check_in_raw: str,
        check_out_raw: str,
        today: Optional[DateLike] = None,
    ) -> DateRangeValidationResult:
        """Validate a raw check-in/check-out pair.

        Format errors come first. Past, order and same-day rules only run
        when both dates parse; they may combine.
        """
        check_in_raw = check_in_raw or ""
        check_out_raw = check_out_raw or ""
        reference = as_date(today) if today is not None else self.today()

        check_in = parse_date(check_in_raw)
        check_out = parse_date(check_out_raw)

        errors = []
        if check_in is None:
            errors.append(f"Check-in date '{check_in_raw}' is not in a valid format")
        if check_out is None:
            errors.append(f"Check-out date '{check_out_raw}' is not in a valid format")

        if check_in is None or check_out is None:
            return DateRangeValidationResult(
                check_in=check_in_raw,
                check_out=check_out_raw,
                errors=tuple(errors),
            )

        past = is_date_in_past(check_in, reference)
        if past:
            errors.append(f"Check-in date '{check_in_raw}' is in the past")

        inverted = is_check_out_before_check_in(check_in, check_out)
        if inverted:
            errors.append(
                f"Check-out date '{check_out_raw}' is before check-in date "
                f"'{check_in_raw}' (invalid date order)"
            )

        same_day = is_same_day_booking(check_in, check_out)
        if same_day:
            errors.append("Check-in and check-out dates cannot be the same day")

        return DateRangeValidationResult(
            check_in=check_in_raw,
            check_out=check_out_raw,
            parsed_check_in=check_in,
            parsed_check_out=check_out,
            errors=tuple(errors),
            has_past_check_in=past,
            has_invalid_date_order=inverted,
            has_same_day_booking=same_day,
        )

    def validate_reader(
        self, reader: RawFieldReader, today: Optional[DateLike] = None
    ) -> DateRangeValidationResult:
        """Validate whatever dates a page object currently shows."""
        check_in, check_out = reader.read_dates()
        return self.validate(check_in, check_out, today)


def validate_dates(
    check_in_raw: str, check_out_raw: str, today: Optional[DateLike] = None
) -> DateRangeValidationResult:
    """Shortcut for ``DateRangeValidator().validate``."""
    return DateRangeValidator().validate(check_in_raw, check_out_raw, today)


# === Test date generation ===

def generate_test_dates(
    days_from_now: int = 1,
    stay_duration: int = 1,
    today: Optional[DateLike] = None,
) -> tuple[str, str]:
    """Check-in ``days_from_now`` days ahead, check-out ``stay_duration`` later."""
    start = as_date(today) if today is not None else date.today()
    check_in = start + timedelta(days=days_from_now)
    check_out = check_in + timedelta(days=stay_duration)
    return format_display_date(check_in), format_display_date(check_out)


def generate_random_test_dates(
    min_days_from_now: int = 1,
    max_days_from_now: int = 365,
    stay_duration: int = 1,
    rng: Optional[random.Random] = None,
    today: Optional[DateLike] = None,
) -> tuple[str, str]:
    """Random future stay; check-in lands in [min, max) days from today."""
    if max_days_from_now <= min_days_from_now:
        raise ValueError(
            f"max_days_from_now ({max_days_from_now}) must be greater than "
            f"min_days_from_now ({min_days_from_now})"
        )
    rng = rng or random
    days_from_now = rng.randrange(min_days_from_now, max_days_from_now)
    return generate_test_dates(days_from_now, stay_duration, today)
