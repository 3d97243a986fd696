import json

import pytest
from playwright.sync_api import Browser, Page, expect

from booking_tests.config import get_settings
from booking_tests.dates import DateRangeValidator
from booking_tests.models import VIEWPORTS, DateValidationCase, PriceCase, ViewportSize
from booking_tests.page_objects import (
    AdminLoginPage,
    AdminRoomsPage,
    HomePage,
    ReservationPage,
)

# Parametrized fixture name -> (fixture file, case model)
CASE_FIXTURES = {
    "date_case": ("date_validation.json", DateValidationCase),
    "price_case": ("pricing.json", PriceCase),
}


def load_cases(file_name: str, model):
    """Load one fixture file into validated case models.

    Each test case inherits the file's ``defaults`` and can override any
    field, markers included.
    """
    settings = get_settings()
    with open(settings.fixtures_path / file_name, encoding="utf-8") as f:
        data = json.load(f)

    defaults = data.get("defaults", {})
    return [model.model_validate({**defaults, **tc}) for tc in data.get("test_cases", [])]


@pytest.fixture(scope="session", autouse=True)
def settings():
    """Get test settings."""
    return get_settings()


@pytest.fixture(scope="session", autouse=True)
def configure_expect_timeout(settings):
    """Set global expect timeout from settings."""
    expect.set_options(timeout=settings.expect_timeout)


@pytest.fixture
def validator():
    return DateRangeValidator()


@pytest.fixture
def calculator(settings):
    """Price calculator with the configured fee schedule."""
    return settings.price_calculator()


@pytest.fixture
def context(browser: Browser, settings):
    """Create a new browser context with the configured viewport."""
    context = browser.new_context(viewport=settings.viewport)
    yield context
    context.close()


@pytest.fixture
def page(context, settings):
    page = context.new_page()
    page.set_default_timeout(settings.timeout)  # For actions/responses
    yield page
    page.close()


@pytest.fixture
def home_page(page: Page, settings) -> HomePage:
    """Home page, loaded."""
    return HomePage(page, settings.base_url).goto()


@pytest.fixture
def reservation_page(home_page: HomePage) -> ReservationPage:
    """Reservation page for the first listed room over a random future stay."""
    home_page.open_reservation()
    reservation_page = ReservationPage(home_page.page)
    reservation_page.wait_for_load()
    return reservation_page


@pytest.fixture
def admin_rooms_page(page: Page, settings) -> AdminRoomsPage:
    """Room management page, logged in as admin."""
    login_page = AdminLoginPage(page, settings.admin_url).goto()
    return login_page.login(settings.admin_username, settings.admin_password)


@pytest.fixture(params=VIEWPORTS, ids=lambda viewport: viewport.name)
def sized_home_page(request, browser: Browser, settings):
    """Home page loaded in a fresh context of each desktop, tablet and mobile size."""
    viewport: ViewportSize = request.param
    context = browser.new_context(viewport=viewport.as_playwright())
    page = context.new_page()
    page.set_default_timeout(settings.timeout)
    yield HomePage(page, settings.base_url).goto()
    context.close()


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--ui",
        action="store_true",
        default=False,
        help="Run tests marked 'ui' against the live site (skipped otherwise)",
    )


def pytest_generate_tests(metafunc):
    """Parametrize data-driven tests from the JSON fixtures."""
    for fixture_name, (file_name, model) in CASE_FIXTURES.items():
        if fixture_name in metafunc.fixturenames:
            cases = load_cases(file_name, model)
            metafunc.parametrize(fixture_name, cases, ids=lambda case: case.id)


def pytest_collection_modifyitems(config, items):
    """Apply markers from fixture data and skip browser tests unless --ui.

    Tests with a data-driven case fixture get the case's markers.
    """
    run_ui = config.getoption("--ui")
    skip_ui = pytest.mark.skip(reason="needs --ui to run against the live site")

    for item in items:
        if not run_ui and "ui" in item.keywords:
            item.add_marker(skip_ui)

        if not hasattr(item, "callspec"):
            continue

        for fixture_name in CASE_FIXTURES:
            case = item.callspec.params.get(fixture_name)
            if case is None:
                continue
            for marker_name in case.markers:
                item.add_marker(getattr(pytest.mark, marker_name))
