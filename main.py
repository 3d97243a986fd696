"""Main entry point for booking tests - CLI."""

import argparse
import json
import sys
from datetime import date
from decimal import InvalidOperation
from pathlib import Path

from pydantic import ValidationError

from booking_tests.config import get_settings, load_settings_from_json
from booking_tests.dates import DateRangeValidator
from booking_tests.pricing import format_price
from booking_tests.utils import to_decimal
from booking_tests import console


def load_config(args) -> bool:
    """Load config from specified path or default config.json."""
    config_path = Path(args.config) if args.config else Path("config.json")

    if not config_path.exists():
        if args.config:
            console.log(f"{console.error('Error:')} Config file not found: {config_path}")
            return False
        return True

    try:
        load_settings_from_json(config_path)
        console.log(f"Loaded config from: {config_path}")
        return True
    except (json.JSONDecodeError, ValidationError, ValueError) as e:
        console.log(f"{console.error('Error:')} Invalid config file: {e}")
        return False


def _print_run_header(settings, headless, browser, markers, output_path):
    """Print test run configuration header."""
    console.log("Running booking tests...")
    console.log(f"  Headless: {headless}")
    console.log(f"  Browser: {browser}")
    console.log(f"  Base URL: {settings.base_url}")
    console.log(f"  Markers: {markers or 'all'}")
    console.log(f"  Output: {output_path}")
    console.log("")


def _print_run_summary(result):
    """Print test run summary with colors."""
    line = console.dim("=" * 50)
    console.log(f"\n{line}")
    console.log(f"Test Run Complete: {console.info(result.run_id[:8])}")

    status = console.success("COMPLETED") if result.status.value == "completed" else console.error("FAILED")
    console.log(f"Status: {status}")
    console.log(f"Duration: {console.dim(f'{result.duration_seconds:.2f}s')}")

    passed = console.success(str(result.passed))
    failed = console.error(str(result.failed)) if result.failed else "0"
    console.log(f"Passed: {passed}, Failed: {failed}, Skipped: {result.skipped}, Total: {result.total}")

    console.log(f"Output: {console.dim(result.output_file)}")
    console.log(line)


def cli_run(args):
    """Run tests via CLI."""
    from booking_tests.runner import run_tests_sync
    from booking_tests.output import generate_output_filename

    if not load_config(args):
        return 1

    if args.color:
        console.force_color(True)

    markers = args.marker.split(",") if args.marker else None
    settings = get_settings()

    if args.output:
        output_path = Path(args.output)
        if output_path.is_dir():
            output_path = output_path / generate_output_filename()
    else:
        output_path = settings.reports_path / generate_output_filename()

    headless = settings.headless and not args.headed
    browser = args.browser or settings.browser
    _print_run_header(settings, headless, browser, markers, output_path)

    result = run_tests_sync(
        markers=markers,
        headless=headless,
        browser=browser,
        ui=not args.unit_only,
        output_path=output_path,
    )

    _print_run_summary(result)
    return 0 if result.status.value == "completed" else 1


def cli_check_dates(args):
    """Validate a check-in/check-out pair and print the verdict."""
    today = None
    if args.today:
        try:
            today = date.fromisoformat(args.today)
        except ValueError:
            console.log(f"{console.error('Error:')} --today must be YYYY-MM-DD, got {args.today!r}")
            return 2

    result = DateRangeValidator(today).validate(args.check_in, args.check_out)

    console.log(f"{console.label('Check-in:')}  {result.check_in} -> {result.parsed_check_in or '?'}")
    console.log(f"{console.label('Check-out:')} {result.check_out} -> {result.parsed_check_out or '?'}")
    if result.nights is not None:
        console.log(f"{console.label('Nights:')}    {result.nights}")
    console.log(f"{console.label('Flags:')}     " + console.flags(
        past_check_in=result.has_past_check_in,
        invalid_order=result.has_invalid_date_order,
        same_day=result.has_same_day_booking,
    ))
    console.log(f"Result: {console.verdict(result.is_valid)}")
    for error in result.errors:
        console.log(f"  - {console.error(error)}")
    return 0 if result.is_valid else 1


def cli_quote(args):
    """Print the expected price breakdown for a stay."""
    if not load_config(args):
        return 1

    settings = get_settings()
    try:
        rate = to_decimal(args.rate)
        breakdown = settings.price_calculator().breakdown(rate, args.nights)
    except (InvalidOperation, ValueError) as e:
        console.log(f"{console.error('Error:')} {e}")
        return 1

    symbol = settings.currency_symbol
    console.log(console.row(breakdown.nights_text(symbol), format_price(breakdown.base_price, symbol)))
    console.log(console.row("Cleaning fee", format_price(breakdown.cleaning_fee, symbol)))
    console.log(console.row("Service fee", format_price(breakdown.service_fee, symbol)))
    console.log(console.rule())
    console.log(console.label(console.row("Total", format_price(breakdown.total, symbol))))
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Hotel Booking Playwright Tests",
        prog="booking_tests",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Run command
    run_parser = subparsers.add_parser("run", help="Run tests")
    run_parser.add_argument("-c", "--config", help="Path to JSON config file")
    run_parser.add_argument("-m", "--marker", help="Comma-separated test markers")
    run_parser.add_argument("--headed", action="store_true", help="Show browser (overrides config)")
    run_parser.add_argument("--browser", choices=["chromium", "firefox", "webkit"], help="Browser (overrides config)")
    run_parser.add_argument("--unit-only", action="store_true", help="Skip tests that need a live browser")
    run_parser.add_argument("-o", "--output", help="Output file/directory")
    run_parser.add_argument("--color", action="store_true", help="Force colors")
    run_parser.set_defaults(func=cli_run)

    # Date check command
    dates_parser = subparsers.add_parser("check-dates", help="Validate a check-in/check-out pair")
    dates_parser.add_argument("check_in", help="Check-in date, e.g. 01/01/2025")
    dates_parser.add_argument("check_out", help="Check-out date, e.g. 02/01/2025")
    dates_parser.add_argument("--today", help="Reference date as YYYY-MM-DD (defaults to today)")
    dates_parser.set_defaults(func=cli_check_dates)

    # Quote command
    quote_parser = subparsers.add_parser("quote", help="Show the expected price breakdown")
    quote_parser.add_argument("-c", "--config", help="Path to JSON config file")
    quote_parser.add_argument("rate", help="Nightly rate")
    quote_parser.add_argument("nights", type=int, help="Number of nights")
    quote_parser.set_defaults(func=cli_quote)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
