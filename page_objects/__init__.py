"""Page objects for Playwright hotel booking testing."""

from .home_page import (
    HomePage,
    HomePageSelectors,
    BookingFormComponent,
    RoomListComponent,
    ContactComponent,
    NavigationComponent,
    QuickLinksComponent,
)
from .reservation_page import ReservationPage, ReservationPageSelectors, PriceSummaryComponent, GuestFormComponent
from .admin_page import AdminLoginPage, AdminRoomsPage, AdminRoomPage, AdminSelectors

__all__ = [
    "HomePage",
    "HomePageSelectors",
    "BookingFormComponent",
    "RoomListComponent",
    "ContactComponent",
    "NavigationComponent",
    "QuickLinksComponent",
    "ReservationPage",
    "ReservationPageSelectors",
    "PriceSummaryComponent",
    "GuestFormComponent",
    "AdminLoginPage",
    "AdminRoomsPage",
    "AdminRoomPage",
    "AdminSelectors",
]
