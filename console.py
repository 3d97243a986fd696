"""Console output for test runs, date checks and price quotes."""

import os
from typing import Iterable

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"
CYAN = "\033[36m"
YELLOW = "\033[33m"
BRIGHT_GREEN = "\033[92m"
BRIGHT_RED = "\033[91m"
BRIGHT_CYAN = "\033[96m"

# None means follow the terminal
_force_color = None


def use_color() -> bool:
    if _force_color is not None:
        return _force_color
    return os.isatty(1)


def force_color(enabled):
    """Force colors on (True) or off (False); None restores terminal detection."""
    global _force_color
    _force_color = enabled


def style(text: str, *codes: str) -> str:
    if not use_color():
        return text
    return f"{''.join(codes)}{text}{RESET}"


def success(text: str) -> str:
    return style(text, BOLD, BRIGHT_GREEN)


def error(text: str) -> str:
    return style(text, BOLD, BRIGHT_RED)


def info(text: str) -> str:
    return style(text, BRIGHT_CYAN)


def label(text: str) -> str:
    return style(text, BOLD, CYAN)


def dim(text: str) -> str:
    return style(text, DIM)


def warn(text: str) -> str:
    return style(text, YELLOW)


def verdict(is_valid: bool) -> str:
    """VALID / INVALID badge for a date validation outcome."""
    return success("VALID") if is_valid else error("INVALID")


def flags(**named: bool) -> str:
    """Raised rule flags as a comma list, e.g. "past_check_in, same_day"."""
    raised = [name for name, on in named.items() if on]
    return warn(", ".join(raised)) if raised else dim("none")


def row(name: str, value: str, width: int = 24, value_width: int = 12) -> str:
    """One left/right aligned line of a price breakdown."""
    return f"{name:<{width}} {value:>{value_width}}"


def rule(widths: Iterable[int] = (24, 12)) -> str:
    return dim("-" * (sum(widths) + 1))


def writeln(text: str = ""):
    """Write line to stdout, bypassing any capture."""
    os.write(1, f"{text}\n".encode())


def log(text: str, flush: bool = True):
    print(text, flush=flush)
