"""
Booking Tests - Playwright automation for the hotel booking demo site.

This package provides:
- Check-in/check-out date validation (past, order and same-day rules)
- Price summary verification (nights x rate + cleaning and service fees)
- Booking, contact form, admin room and responsive layout tests

Usage:
    CLI: python -m booking_tests.main run
"""

__version__ = "1.0.0"
