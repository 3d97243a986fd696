"""Layout checks across desktop, tablet and mobile viewports."""

import pytest
from playwright.sync_api import expect

from booking_tests.dates import generate_test_dates
from booking_tests.page_objects import HomePage
from booking_tests.step import step


@pytest.mark.ui
@pytest.mark.responsive
class TestResponsiveLayout:

    def test_booking_form_usable(self, sized_home_page: HomePage):
        form = sized_home_page.booking_form
        form.scroll_into_view()

        with step("Verify booking form controls are visible"):
            expect(form.check_in_input).to_be_visible()
            expect(form.check_out_input).to_be_visible()
            expect(form.check_availability_button).to_be_visible()

        check_in, check_out = generate_test_dates(days_from_now=3, stay_duration=2)
        sized_home_page.search(check_in, check_out)

        with step("Verify rooms are listed after search"):
            sized_home_page.rooms.wait_for_rooms()
            assert sized_home_page.rooms.available_rooms_count() > 0

    def test_contact_form_visible(self, sized_home_page: HomePage):
        contact = sized_home_page.contact
        contact.section.scroll_into_view_if_needed()

        with step("Verify contact submit button is visible"):
            expect(contact.submit_button).to_be_visible()

    def test_no_horizontal_overflow(self, sized_home_page: HomePage):
        page = sized_home_page.page
        with step("Verify page width fits the viewport"):
            scroll_width = page.evaluate("() => document.documentElement.scrollWidth")
            client_width = page.evaluate("() => document.documentElement.clientWidth")
            assert scroll_width <= client_width + 1, f"Content {scroll_width}px wider than {client_width}px"
