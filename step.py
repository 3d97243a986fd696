from contextlib import contextmanager
from decimal import Decimal
import time

from booking_tests.dates import DateRangeValidationResult
from booking_tests.plugin import log_step


@contextmanager
def step(description: str, continue_on_failure: bool = False, step_type: str = "action"):
    """Context manager for test steps with logging.

    Args:
        description: Human-readable step description
        continue_on_failure: If True, don't re-raise exceptions
        step_type: Event step type, "action" by default

    Output is handled by the test runner's on_event callback.
    """
    start_time = time.time()

    try:
        yield
    except Exception as exc:
        duration_ms = int((time.time() - start_time) * 1000)
        detail = str(exc).replace("\n", f"\n{' ' * 6}")
        err = f"{type(exc).__name__}: {detail}" if detail else type(exc).__name__
        log_step(description, "failed", err, duration_ms=duration_ms, step_type=step_type)
        if not continue_on_failure:
            raise
    else:
        duration_ms = int((time.time() - start_time) * 1000)
        log_step(description, "passed", duration_ms=duration_ms, step_type=step_type)


def info(message: str, outcome: str = "passed"):
    """Log an informational step (no timing expected).

    Use this for status messages, results logging, or informational notes
    that don't represent timed actions.
    """
    log_step(message, outcome, step_type="info")


def check_result(result: DateRangeValidationResult, label: str = "Date validation"):
    """Log the outcome of a date validation as a check step.

    The step itself passes either way; the verdict travels in the name and details.
    """
    details = {
        "check_in": result.check_in,
        "check_out": result.check_out,
        "is_valid": result.is_valid,
        "errors": list(result.errors),
        "has_past_check_in": result.has_past_check_in,
        "has_invalid_date_order": result.has_invalid_date_order,
        "has_same_day_booking": result.has_same_day_booking,
    }
    log_step(f"{label}: {result.summary()}", step_type="check", details=details)


def check_total(expected: Decimal, actual: Decimal, matched: bool, label: str = "Total price"):
    """Log a computed-vs-displayed price comparison as a check step."""
    log_step(
        f"{label}: expected {expected}, displayed {actual}",
        "passed" if matched else "failed",
        step_type="check",
        details={"expected": str(expected), "actual": str(actual)},
    )
