"""Page object for the hotel home page: navigation, booking form, room list and contact form."""
import re
from datetime import date
from typing import Optional
from urllib.parse import urlparse

from playwright.sync_api import Page, Locator, expect

from booking_tests.dates import DateRangeValidationResult, DateRangeValidator, generate_random_test_dates
from booking_tests.models import ContactInfo
from booking_tests.pricing import extract_price_value
from booking_tests.step import step, info, check_result


class HomePageSelectors:
    """CSS selectors for home page elements."""

    # Navigation bar
    BRAND_LINK = ".navbar-brand"
    NAVBAR_TOGGLER = ".navbar-toggler"
    NAVBAR_COLLAPSE = "#navbarNav"
    SECTION_LINK = "a[href='/#{section}']"
    ADMIN_LINK = "a[href='/admin']"
    SECTION = "#{section}"

    # Footer quick links
    QUICK_LINKS_HEADER = "xpath=//h5[text()='Quick Links']"
    QUICK_LINKS = "xpath=//h5[text()='Quick Links']/following-sibling::ul//a"

    # Booking form
    BOOKING_SECTION = "section#booking"
    BOOKING_TITLE = "#booking h3.card-title"
    CHECK_IN_INPUT = "#booking .col-md-6:nth-child(1) input.form-control"
    CHECK_OUT_INPUT = "#booking .col-md-6:nth-child(2) input.form-control"
    CHECK_AVAILABILITY_BUTTON = "#booking button.btn-primary"

    # Room list
    ROOM_CARDS = ".room-card"
    ROOM_CARD_TITLE = "h5.card-title"
    ROOM_CARD_BOOK_BUTTON = ".btn-primary"

    # Contact form
    CONTACT_SECTION = "#contact"
    CONTACT_NAME = "#name"
    CONTACT_EMAIL = "#email"
    CONTACT_PHONE = "#phone"
    CONTACT_SUBJECT = "#subject"
    CONTACT_MESSAGE = "#description"
    CONTACT_SUBMIT = "#contact button[type='button']"
    CONTACT_ERRORS = "#contact .alert.alert-danger p"
    CONTACT_SUCCESS = "#contact .card .card-body h3"


class BookingFormComponent:
    """Check-in/check-out form; reads raw field values for the date validator."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = HomePageSelectors

    @property
    def section(self) -> Locator:
        return self.page.locator(self.selectors.BOOKING_SECTION)

    @property
    def title(self) -> Locator:
        return self.page.locator(self.selectors.BOOKING_TITLE)

    @property
    def check_in_input(self) -> Locator:
        return self.page.locator(self.selectors.CHECK_IN_INPUT)

    @property
    def check_out_input(self) -> Locator:
        return self.page.locator(self.selectors.CHECK_OUT_INPUT)

    @property
    def check_availability_button(self) -> Locator:
        return self.page.locator(self.selectors.CHECK_AVAILABILITY_BUTTON)

    def scroll_into_view(self) -> None:
        self.section.scroll_into_view_if_needed()

    @staticmethod
    def _enter_date(field: Locator, value: str) -> None:
        # The date picker keeps its own state; select-all then type replaces it
        field.click()
        field.press("Control+a")
        field.fill(value)
        field.press("Escape")

    def set_check_in(self, value: str) -> None:
        self._enter_date(self.check_in_input, value)

    def set_check_out(self, value: str) -> None:
        self._enter_date(self.check_out_input, value)

    def set_dates(self, check_in: str, check_out: str) -> None:
        with step(f"Enter booking dates {check_in} -> {check_out}"):
            self.set_check_in(check_in)
            self.set_check_out(check_out)

    def check_availability(self) -> None:
        with step("Click Check Availability"):
            self.check_availability_button.click()

    def read_dates(self) -> tuple[str, str]:
        """Current raw values of the two date inputs."""
        return self.check_in_input.input_value(), self.check_out_input.input_value()


class RoomListComponent:
    """Room cards rendered under the booking form."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = HomePageSelectors

    @property
    def room_cards(self) -> Locator:
        return self.page.locator(self.selectors.ROOM_CARDS)

    @property
    def book_buttons(self) -> Locator:
        return self.room_cards.locator(self.selectors.ROOM_CARD_BOOK_BUTTON)

    def wait_for_rooms(self) -> None:
        expect(self.room_cards.first).to_be_visible()

    def available_rooms_count(self) -> int:
        return self.room_cards.count()

    def room_titles(self) -> list[str]:
        titles = self.room_cards.locator(self.selectors.ROOM_CARD_TITLE).all_text_contents()
        return [title.strip() for title in titles]

    def find_room(self, room_type: str) -> Optional[Locator]:
        """Card whose title matches the room type, case-insensitively."""
        for index, title in enumerate(self.room_titles()):
            if title.lower() == room_type.lower():
                return self.room_cards.nth(index)
        return None

    def room_price(self, room_type: str) -> Optional[str]:
        """Raw price text ("£100 per night") of the first card of a type."""
        card = self.find_room(room_type)
        if card is None:
            return None
        for line in card.inner_text().splitlines():
            if extract_price_value(line) > 0 and "£" in line:
                return line.strip()
        return None

    def book_room(self, index: int = 0) -> None:
        count = self.available_rooms_count()
        if count == 0:
            raise ValueError("No room cards available to book")
        if index >= count:
            raise IndexError(f"Room index {index} out of range for {count} rooms")
        with step(f"Open reservation for room #{index + 1}"):
            self.room_cards.nth(index).locator(self.selectors.ROOM_CARD_BOOK_BUTTON).click()

    def book_room_type(self, room_type: str) -> None:
        card = self.find_room(room_type)
        if card is None:
            raise ValueError(f"Room type {room_type!r} not found, available: {self.room_titles()}")
        with step(f"Open reservation for {room_type} room"):
            card.locator(self.selectors.ROOM_CARD_BOOK_BUTTON).click()


class ContactComponent:
    """Contact form at the bottom of the home page."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = HomePageSelectors

    @property
    def section(self) -> Locator:
        return self.page.locator(self.selectors.CONTACT_SECTION)

    @property
    def submit_button(self) -> Locator:
        return self.page.locator(self.selectors.CONTACT_SUBMIT)

    @property
    def errors(self) -> Locator:
        return self.page.locator(self.selectors.CONTACT_ERRORS)

    @property
    def success_heading(self) -> Locator:
        return self.page.locator(self.selectors.CONTACT_SUCCESS)

    def fill(self, contact: ContactInfo) -> None:
        with step(f"Fill contact form as {contact.name or '<blank>'}"):
            self.section.scroll_into_view_if_needed()
            self.page.locator(self.selectors.CONTACT_NAME).fill(contact.name)
            self.page.locator(self.selectors.CONTACT_EMAIL).fill(contact.email)
            self.page.locator(self.selectors.CONTACT_PHONE).fill(contact.phone)
            self.page.locator(self.selectors.CONTACT_SUBJECT).fill(contact.subject)
            self.page.locator(self.selectors.CONTACT_MESSAGE).fill(contact.message)

    def submit(self) -> None:
        with step("Submit contact form"):
            self.submit_button.click()

    def validation_errors(self) -> list[str]:
        expect(self.errors.first).to_be_visible()
        return [text.strip() for text in self.errors.all_text_contents()]

    def success_message(self) -> str:
        expect(self.success_heading).to_be_visible()
        return self.success_heading.inner_text().strip()


class NavigationComponent:
    """Top navigation bar; collapses behind a toggler on narrow viewports."""

    SECTIONS = ("rooms", "booking", "amenities", "location", "contact")

    def __init__(self, page: Page):
        self.page = page
        self.selectors = HomePageSelectors

    @property
    def brand_link(self) -> Locator:
        return self.page.locator(self.selectors.BRAND_LINK)

    @property
    def toggler(self) -> Locator:
        return self.page.locator(self.selectors.NAVBAR_TOGGLER)

    @property
    def collapse(self) -> Locator:
        return self.page.locator(self.selectors.NAVBAR_COLLAPSE)

    @property
    def admin_link(self) -> Locator:
        return self.page.locator(self.selectors.ADMIN_LINK).first

    def section_link(self, section: str) -> Locator:
        return self.page.locator(self.selectors.SECTION_LINK.format(section=section)).first

    def section(self, section: str) -> Locator:
        return self.page.locator(self.selectors.SECTION.format(section=section))

    def is_collapsed(self) -> bool:
        return self.toggler.is_visible() and "show" not in (self.collapse.get_attribute("class") or "").split()

    def expand(self) -> None:
        with step("Expand navigation menu"):
            self.toggler.click()
            expect(self.collapse).to_have_class(re.compile(r"\bshow\b"))

    def fold(self) -> None:
        with step("Collapse navigation menu"):
            self.toggler.click()
            expect(self.collapse).not_to_have_class(re.compile(r"\bshow\b"))

    def go_to_section(self, section: str) -> None:
        """Follow a navbar link and wait for its section to scroll into view."""
        with step(f"Navigate to {section} section"):
            if self.is_collapsed():
                self.expand()
            self.section_link(section).click()
            expect(self.section(section)).to_be_in_viewport()

    def open_admin(self) -> None:
        with step("Navigate to admin panel"):
            if self.is_collapsed():
                self.expand()
            self.admin_link.click()
            self.page.wait_for_url(re.compile(r".*/admin.*"))


class QuickLinksComponent:
    """Footer list of quick links back into the page sections."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = HomePageSelectors

    @property
    def header(self) -> Locator:
        return self.page.locator(self.selectors.QUICK_LINKS_HEADER)

    @property
    def links(self) -> Locator:
        return self.page.locator(self.selectors.QUICK_LINKS)

    def scroll_into_view(self) -> None:
        self.header.scroll_into_view_if_needed()

    def link(self, text: str) -> Locator:
        return self.links.filter(has_text=re.compile(rf"^\s*{re.escape(text)}\s*$"))

    def link_texts(self) -> list[str]:
        return [text.strip() for text in self.links.all_inner_texts()]

    def follow(self, text: str) -> None:
        with step(f"Follow quick link {text}"):
            self.scroll_into_view()
            self.link(text).click()


class HomePage:
    """Page object for the hotel home page."""

    def __init__(self, page: Page, base_url: str):
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.booking_form = BookingFormComponent(page)
        self.rooms = RoomListComponent(page)
        self.contact = ContactComponent(page)
        self.navigation = NavigationComponent(page)
        self.quick_links = QuickLinksComponent(page)

    def goto(self) -> "HomePage":
        with step(f"Open home page {self.base_url}"):
            self.page.goto(self.base_url + "/")
            expect(self.booking_form.section).to_be_visible()
        return self

    def is_on_home_page(self) -> bool:
        return urlparse(self.page.url).path in ("", "/")

    def search(self, check_in: str, check_out: str) -> None:
        """Enter dates and refresh the room list."""
        self.booking_form.scroll_into_view()
        self.booking_form.set_dates(check_in, check_out)
        self.booking_form.check_availability()

    def validate_booking_dates(
        self, validator: DateRangeValidator, today: Optional[date] = None
    ) -> DateRangeValidationResult:
        """Run the form's current date values through the validator and log it."""
        result = validator.validate_reader(self.booking_form, today)
        check_result(result, "Booking form dates")
        return result

    def open_reservation(self, room_type: Optional[str] = None) -> tuple[str, str]:
        """Search random future dates and open a room's reservation page.

        Returns the dates that were searched.
        """
        check_in, check_out = generate_random_test_dates(1, 365)
        self.search(check_in, check_out)
        self.rooms.wait_for_rooms()
        info(f"{self.rooms.available_rooms_count()} rooms listed for {check_in} -> {check_out}")
        if room_type:
            self.rooms.book_room_type(room_type)
        else:
            self.rooms.book_room(0)
        return check_in, check_out
