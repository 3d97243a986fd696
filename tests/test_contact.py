"""End-to-end tests for the home page contact form."""

import pytest

from booking_tests.models import CONTACT_ERRORS, VALID_CONTACT, ContactInfo
from booking_tests.page_objects import HomePage
from booking_tests.step import step


@pytest.mark.ui
@pytest.mark.contact
class TestContactForm:

    def test_valid_submission(self, home_page: HomePage):
        home_page.contact.fill(VALID_CONTACT)
        home_page.contact.submit()

        with step("Verify thank-you message names the sender"):
            message = home_page.contact.success_message()
            assert VALID_CONTACT.name in message

    def test_blank_form_lists_every_missing_field(self, home_page: HomePage):
        blank = ContactInfo(name="", email="", phone="", subject="", message="")

        home_page.contact.fill(blank)
        home_page.contact.submit()

        with step("Verify a blank-field error for each input"):
            errors = home_page.contact.validation_errors()
            for expected in CONTACT_ERRORS.values():
                assert expected in errors, f"{expected!r} missing from {errors}"

    @pytest.mark.parametrize("field, value, keyword", [
        ("email", "not-an-email", "email"),
        ("phone", "123", "phone"),
        ("subject", "Hi", "subject"),
        ("message", "Too short", "message"),
    ])
    def test_invalid_field(self, home_page: HomePage, field, value, keyword):
        contact = VALID_CONTACT.model_copy(update={field: value})

        home_page.contact.fill(contact)
        home_page.contact.submit()

        with step(f"Verify {field} validation error"):
            errors = home_page.contact.validation_errors()
            assert any(keyword in error.lower() for error in errors), errors
