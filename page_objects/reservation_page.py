"""Page object for the room reservation page."""
import re
from decimal import Decimal
from urllib.parse import urlparse, parse_qs

from playwright.sync_api import Page, Locator, expect

from booking_tests.models import GuestInfo
from booking_tests.pricing import (
    PriceBreakdown,
    PriceCalculator,
    extract_nights_count,
    extract_price_value,
    extract_room_price_from_nights_text,
)
from booking_tests.step import step, info, check_total


class ReservationPageSelectors:
    """Selectors for reservation page elements."""

    ROOM_TITLE = "h1.fw-bold"
    MUTED_TEXT = ".text-muted"
    ROOM_PRICE = ".fs-2.fw-bold.text-primary"
    BOOKING_CARD = ".card.border-0.shadow.booking-card"
    RESERVE_NOW_BUTTON = "#doReservation"

    # Price summary
    PRICE_SUMMARY = ".card.bg-light.border-0"
    NIGHTS_LINE = "xpath=//div[@class='d-flex justify-content-between mb-2'][1]/span[1]"
    BASE_PRICE = "xpath=//div[@class='d-flex justify-content-between mb-2'][1]/span[2]"
    CLEANING_FEE = "xpath=//span[text()='Cleaning fee']/parent::div/span[2]"
    SERVICE_FEE = "xpath=//span[text()='Service fee']/parent::div/span[2]"
    TOTAL_PRICE = "xpath=//div[@class='d-flex justify-content-between fw-bold']/span[2]"

    # Guest form
    FIRST_NAME = ".room-firstname"
    LAST_NAME = ".room-lastname"
    EMAIL = ".room-email"
    PHONE = ".room-phone"
    GUEST_FORM_SUBMIT = "xpath=//div[contains(@class, 'room-booking-form')]/..//button[text()='Reserve Now']"
    CANCEL_BUTTON = "xpath=//button[text()='Cancel']"
    VALIDATION_ERRORS = ".alert.alert-danger ul li"

    # Confirmation
    BOOKING_CONFIRMED = "xpath=//h2[text()='Booking Confirmed']"
    CONFIRMED_DATES = "p.text-center strong"
    RETURN_HOME = "a.btn.btn-primary"


_ROOM_ID = re.compile(r"/reservation/(\d+)")
_GUEST_WORDS = ("guest", "people", "max")


class PriceSummaryComponent:
    """Price summary card: nights line, fees and total as rendered text."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = ReservationPageSelectors

    @property
    def card(self) -> Locator:
        return self.page.locator(self.selectors.PRICE_SUMMARY)

    def _text(self, selector: str) -> str:
        return self.page.locator(selector).first.inner_text().strip()

    # === Raw texts ===
    def nights_text(self) -> str:
        return self._text(self.selectors.NIGHTS_LINE)

    def base_price_text(self) -> str:
        return self._text(self.selectors.BASE_PRICE)

    def cleaning_fee_text(self) -> str:
        return self._text(self.selectors.CLEANING_FEE)

    def service_fee_text(self) -> str:
        return self._text(self.selectors.SERVICE_FEE)

    def total_text(self) -> str:
        return self._text(self.selectors.TOTAL_PRICE)

    # === Parsed values ===
    def nights_count(self) -> int:
        return extract_nights_count(self.nights_text())

    def nightly_rate(self) -> Decimal:
        return extract_room_price_from_nights_text(self.nights_text())

    def base_price(self) -> Decimal:
        return extract_price_value(self.base_price_text())

    def cleaning_fee(self) -> Decimal:
        return extract_price_value(self.cleaning_fee_text())

    def service_fee(self) -> Decimal:
        return extract_price_value(self.service_fee_text())

    def total(self) -> Decimal:
        return extract_price_value(self.total_text())

    def wait_until_visible(self) -> None:
        expect(self.card.first).to_be_visible()

    def read_breakdown(self) -> PriceBreakdown:
        """Breakdown built from the displayed nightly rate, night count and fees."""
        nights_text = self.nights_text()
        nights = extract_nights_count(nights_text)
        assert nights > 0, f"Could not extract nights count from {nights_text!r}"
        return PriceBreakdown(
            nightly_rate=extract_room_price_from_nights_text(nights_text),
            nights=nights,
            cleaning_fee=self.cleaning_fee(),
            service_fee=self.service_fee(),
        )

    def verify_total(self, calculator: PriceCalculator) -> Decimal:
        """Assert the displayed total equals rate x nights + the calculator's fees."""
        with step("Verify total price matches nights x rate + fees"):
            rate, nights, displayed = self.nightly_rate(), self.nights_count(), self.total()
            assert rate > 0, f"Could not extract nightly rate from {self.nights_text()!r}"
            assert nights > 0, f"Could not extract nights count from {self.nights_text()!r}"
            expected = calculator.compute_expected_total(rate, nights)
            matched = calculator.matches(expected, displayed)
            check_total(expected, displayed, matched)
            assert matched, f"Total should be {expected} ({nights} x {rate} + fees) but page shows {displayed}"
        return expected


class GuestFormComponent:
    """Guest details form revealed by the first Reserve Now click."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = ReservationPageSelectors

    @property
    def first_name(self) -> Locator:
        return self.page.locator(self.selectors.FIRST_NAME)

    @property
    def submit_button(self) -> Locator:
        return self.page.locator(self.selectors.GUEST_FORM_SUBMIT)

    @property
    def errors(self) -> Locator:
        return self.page.locator(self.selectors.VALIDATION_ERRORS)

    def fill(self, guest: GuestInfo) -> None:
        with step(f"Fill guest form for {guest.first_name} {guest.last_name}"):
            self.first_name.fill(guest.first_name)
            self.page.locator(self.selectors.LAST_NAME).fill(guest.last_name)
            self.page.locator(self.selectors.EMAIL).fill(guest.email)
            self.page.locator(self.selectors.PHONE).fill(guest.phone)

    def submit(self) -> None:
        with step("Submit guest form"):
            self.submit_button.click()

    def cancel(self) -> None:
        with step("Cancel guest form"):
            self.page.locator(self.selectors.CANCEL_BUTTON).click()
            expect(self.first_name).to_be_hidden()

    def validation_errors(self) -> list[str]:
        expect(self.errors.first).to_be_visible()
        return [text.strip() for text in self.errors.all_text_contents()]


class ReservationPage:
    """Page object for /reservation/<room id>."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = ReservationPageSelectors
        self.price_summary = PriceSummaryComponent(page)
        self.guest_form = GuestFormComponent(page)

    @property
    def room_title(self) -> Locator:
        return self.page.locator(self.selectors.ROOM_TITLE)

    @property
    def reserve_now_button(self) -> Locator:
        return self.page.locator(self.selectors.RESERVE_NOW_BUTTON)

    @property
    def booking_confirmed(self) -> Locator:
        return self.page.locator(self.selectors.BOOKING_CONFIRMED)

    def wait_for_load(self) -> None:
        with step("Wait for reservation page"):
            self.page.wait_for_url(re.compile(r".*/reservation/\d+.*"))
            expect(self.room_title).to_be_visible()

    def is_loaded(self) -> bool:
        return "/reservation/" in self.page.url

    def room_id_from_url(self) -> str:
        match = _ROOM_ID.search(self.page.url)
        return match.group(1) if match else ""

    def read_dates(self) -> tuple[str, str]:
        """Check-in/check-out query parameters of the current URL (raw strings)."""
        params = parse_qs(urlparse(self.page.url).query)
        return params.get("checkin", [""])[0], params.get("checkout", [""])[0]

    def guest_count_text(self) -> str:
        """Room detail line mentioning guests, e.g. "Max 2 Guests"; empty if none."""
        for text in self.page.locator(self.selectors.MUTED_TEXT).all_inner_texts():
            if any(word in text.lower() for word in _GUEST_WORDS):
                return text.strip()
        return ""

    def max_guest_count(self) -> int:
        """Last number in the guest line; 0 when there is none."""
        numbers = re.findall(r"\d+", self.guest_count_text())
        return int(numbers[-1]) if numbers else 0

    def room_price_text(self) -> str:
        return self.page.locator(self.selectors.ROOM_PRICE).first.inner_text().strip()

    def start_booking(self) -> None:
        with step("Click Reserve Now to open guest form"):
            self.reserve_now_button.click()
            expect(self.guest_form.first_name).to_be_visible()

    def book(self, guest: GuestInfo) -> None:
        """Full booking: open the guest form, fill it and submit."""
        self.start_booking()
        self.guest_form.fill(guest)
        self.guest_form.submit()

    def confirmed_dates(self) -> str:
        expect(self.booking_confirmed).to_be_visible()
        text = self.page.locator(self.selectors.CONFIRMED_DATES).first.inner_text().strip()
        info(f"Booking confirmed for {text}")
        return text

    def return_home(self) -> None:
        """Follow the confirmation card's Return Home link back to the home page."""
        expect(self.booking_confirmed).to_be_visible()
        with step("Click Return Home"):
            self.page.locator(self.selectors.RETURN_HOME).filter(has_text="Return Home").click()
            self.page.wait_for_url(re.compile(r"^https?://[^/]+/?(#.*)?$"))
