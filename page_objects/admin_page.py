"""Page objects for the admin panel: login and room management."""
import re
from decimal import Decimal
from typing import Optional

from playwright.sync_api import Page, Locator, expect

from booking_tests.models import RoomSpec
from booking_tests.pricing import extract_price_value
from booking_tests.step import step


class AdminSelectors:
    """Selectors for admin panel elements."""

    # Login
    USERNAME = "#username"
    PASSWORD = "#password"
    LOGIN_BUTTON = "#doLogin"

    # Room management
    ROOM_FORM = "div.row.room-form"
    ROOM_ROWS = "div[data-testid='roomlisting']"
    ROOM_NUMBER_INPUT = "#roomName"
    ROOM_TYPE_SELECT = "#type"
    ACCESSIBLE_SELECT = "#accessible"
    ROOM_PRICE_INPUT = "#roomPrice"
    FEATURE_CHECKBOX = "input[name='featureCheck'][value='{feature}']"
    CREATE_BUTTON = "#createRoom"
    ERROR_ALERT = "div.alert-danger"

    # Room row cells
    ROW_NUMBER = "p[id^='roomName']"
    ROW_TYPE = "p[id^='type']"
    ROW_ACCESSIBLE = "p[id^='accessible']"
    ROW_PRICE = "p[id^='roomPrice']"
    ROW_DETAILS = "p[id^='details']"
    ROW_DELETE = "span.roomDelete"
    ROW_LINK = "#roomName{number}"

    # Room details and edit form
    EDIT_BUTTON = "xpath=//button[normalize-space()='Edit']"
    UPDATE_BUTTON = "#update"
    CANCEL_EDIT_BUTTON = "#cancelEdit"
    FEATURE_CHECKBOXES = "input[type='checkbox']"
    DETAILS_HEADER = "div.room-details h2"
    DETAILS_TYPE = "xpath=//p[starts-with(text(), 'Type:')]/span"
    DETAILS_ACCESSIBLE = "xpath=//p[starts-with(text(), 'Accessible:')]/span"
    DETAILS_PRICE = "xpath=//p[starts-with(text(), 'Room price:')]/span"
    DETAILS_FEATURES = "xpath=//p[starts-with(text(), 'Features:')]/span"


class AdminLoginPage:
    """Admin login form."""

    def __init__(self, page: Page, admin_url: str):
        self.page = page
        self.admin_url = admin_url
        self.selectors = AdminSelectors

    @property
    def login_button(self) -> Locator:
        return self.page.locator(self.selectors.LOGIN_BUTTON)

    def goto(self) -> "AdminLoginPage":
        with step("Open admin login page"):
            self.page.goto(self.admin_url)
            expect(self.login_button).to_be_visible()
        return self

    def login(self, username: str, password: str) -> "AdminRoomsPage":
        with step(f"Log in to admin panel as {username}"):
            self.page.locator(self.selectors.USERNAME).fill(username)
            self.page.locator(self.selectors.PASSWORD).fill(password)
            self.login_button.click()
            rooms_page = AdminRoomsPage(self.page, self.admin_url)
            expect(rooms_page.room_form).to_be_visible()
        return rooms_page


class AdminRoomsPage:
    """Room listing and creation form."""

    def __init__(self, page: Page, admin_url: str):
        self.page = page
        self.admin_url = admin_url.rstrip("/")
        self.selectors = AdminSelectors

    @property
    def room_form(self) -> Locator:
        return self.page.locator(self.selectors.ROOM_FORM)

    @property
    def room_rows(self) -> Locator:
        return self.page.locator(self.selectors.ROOM_ROWS)

    @property
    def error_alert(self) -> Locator:
        return self.page.locator(self.selectors.ERROR_ALERT)

    def goto(self) -> "AdminRoomsPage":
        """Back to the room listing, e.g. from a room details page."""
        with step("Open admin room listing"):
            self.page.goto(f"{self.admin_url}/rooms")
            expect(self.room_form).to_be_visible()
        return self

    def create_room(self, room: RoomSpec) -> None:
        with step(f"Create room {room.room_number} ({room.room_type}, £{room.price})"):
            self.page.locator(self.selectors.ROOM_NUMBER_INPUT).fill(str(room.room_number))
            self.page.locator(self.selectors.ROOM_TYPE_SELECT).select_option(room.room_type)
            self.page.locator(self.selectors.ACCESSIBLE_SELECT).select_option(str(room.accessible).lower())
            self.page.locator(self.selectors.ROOM_PRICE_INPUT).fill(str(room.price))
            for feature in room.features:
                self.page.locator(self.selectors.FEATURE_CHECKBOX.format(feature=feature)).check()
            self.page.locator(self.selectors.CREATE_BUTTON).click()

    def room_row(self, room_number: int) -> Optional[Locator]:
        """Listing row for a room number, or None if not listed."""
        rows = self.room_rows
        for index in range(rows.count()):
            row = rows.nth(index)
            if row.locator(self.selectors.ROW_NUMBER).inner_text().strip() == str(room_number):
                return row
        return None

    def wait_for_room(self, room_number: int) -> Locator:
        row = self.room_rows.filter(
            has=self.page.locator(self.selectors.ROW_NUMBER, has_text=str(room_number))
        ).first
        expect(row).to_be_visible()
        return row

    def is_room_present(self, room: RoomSpec) -> bool:
        """True if a row matches the room's number, type, accessibility and price."""
        row = self.room_row(room.room_number)
        if row is None:
            return False
        if row.locator(self.selectors.ROW_TYPE).inner_text().strip().lower() != room.room_type.lower():
            return False
        accessible = row.locator(self.selectors.ROW_ACCESSIBLE).inner_text().strip().lower()
        if accessible != str(room.accessible).lower():
            return False
        if self.room_price(room.room_number) != Decimal(room.price):
            return False
        details = row.locator(self.selectors.ROW_DETAILS).inner_text()
        return all(feature in details for feature in room.features)

    def room_price(self, room_number: int) -> Decimal:
        row = self.room_row(room_number)
        if row is None:
            raise ValueError(f"Room {room_number} is not listed")
        return extract_price_value(row.locator(self.selectors.ROW_PRICE).inner_text())

    def open_room(self, room_number: int) -> "AdminRoomPage":
        """Click a listed room number to open its details page."""
        with step(f"Open details of room {room_number}"):
            self.page.locator(self.selectors.ROW_LINK.format(number=room_number)).click()
            room_page = AdminRoomPage(self.page)
            room_page.wait_for_view_mode()
        return room_page

    def delete_room(self, room_number: int) -> None:
        row = self.room_row(room_number)
        if row is None:
            raise ValueError(f"Room {room_number} is not listed")
        with step(f"Delete room {room_number}"):
            row.locator(self.selectors.ROW_DELETE).click()
            expect(self.room_rows.filter(
                has=self.page.locator(self.selectors.ROW_NUMBER, has_text=str(room_number))
            )).to_have_count(0)

    def error_alert_text(self) -> str:
        expect(self.error_alert).to_be_visible()
        return self.error_alert.inner_text().strip()


class AdminRoomPage:
    """Details page of a single room, with its edit form."""

    def __init__(self, page: Page):
        self.page = page
        self.selectors = AdminSelectors

    @property
    def edit_button(self) -> Locator:
        return self.page.locator(self.selectors.EDIT_BUTTON)

    @property
    def room_number_input(self) -> Locator:
        return self.page.locator(self.selectors.ROOM_NUMBER_INPUT)

    @property
    def error_alert(self) -> Locator:
        return self.page.locator(self.selectors.ERROR_ALERT)

    def _detail(self, selector: str) -> str:
        return self.page.locator(selector).inner_text().strip()

    def wait_for_view_mode(self) -> None:
        expect(self.edit_button).to_be_visible()

    def start_edit(self) -> None:
        with step("Switch room details to edit mode"):
            self.edit_button.click()
            expect(self.room_number_input).to_be_visible()

    def enter_details(self, room: RoomSpec) -> None:
        """Fill type, accessibility, price and features; the room number is left as is."""
        self.page.locator(self.selectors.ROOM_TYPE_SELECT).select_option(room.room_type)
        self.page.locator(self.selectors.ACCESSIBLE_SELECT).select_option(str(room.accessible).lower())
        self.page.locator(self.selectors.ROOM_PRICE_INPUT).fill(str(room.price))
        checkboxes = self.page.locator(self.selectors.FEATURE_CHECKBOXES)
        for index in range(checkboxes.count()):
            checkboxes.nth(index).uncheck()
        for feature in room.features:
            self.page.locator(self.selectors.FEATURE_CHECKBOX.format(feature=feature)).check()

    def edit(self, room: RoomSpec) -> None:
        with step(f"Update room to {room.room_type}, £{room.price}, features {room.features}"):
            self.start_edit()
            self.enter_details(room)
            self.page.locator(self.selectors.UPDATE_BUTTON).click()
            self.wait_for_view_mode()

    def cancel_edit(self, room: RoomSpec) -> None:
        """Enter new details, then discard them with Cancel."""
        with step(f"Enter {room.room_type} details and cancel"):
            self.start_edit()
            self.enter_details(room)
            self.page.locator(self.selectors.CANCEL_EDIT_BUTTON).click()
            self.wait_for_view_mode()

    def change_room_number(self, value: str) -> None:
        """Submit a new room number; the page either saves it or shows an error alert."""
        with step(f"Change room number to {value!r}"):
            self.start_edit()
            self.room_number_input.fill(value)
            self.page.locator(self.selectors.UPDATE_BUTTON).click()

    def displayed_room_number(self) -> int:
        header = self.page.locator(self.selectors.DETAILS_HEADER)
        expect(header).to_have_text(re.compile(r"^Room: \d+"))
        return int(header.inner_text().split(":", 1)[1])

    def displayed_room(self) -> RoomSpec:
        """Room as shown in view mode, features sorted."""
        features = self._detail(self.selectors.DETAILS_FEATURES)
        return RoomSpec(
            room_number=self.displayed_room_number(),
            room_type=self._detail(self.selectors.DETAILS_TYPE),
            accessible=self._detail(self.selectors.DETAILS_ACCESSIBLE).lower() == "true",
            price=int(extract_price_value(self._detail(self.selectors.DETAILS_PRICE))),
            features=[] if not features or "No features added" in features else sorted(features.split(", ")),
        )

    def error_alert_text(self) -> str:
        expect(self.error_alert).to_be_visible()
        return self.error_alert.inner_text().strip()
