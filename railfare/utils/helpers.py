"""
Helper utility functions for the fare engine.

This module contains formatting helpers for schedule times and durations
and the money rounding used at the final booking step.
"""

from datetime import time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Union, Optional

TWO_PLACES = Decimal("0.01")


def format_time(t: Optional[time]) -> str:
    """
    Format time of day to HH:MM string.

    Args:
        t: Time object to format

    Returns:
        str: Formatted time string, empty if t is None
    """
    if t is None:
        return ""
    return t.strftime("%H:%M")


def format_duration(td: timedelta) -> str:
    """
    Format timedelta as elapsed travel time.

    Args:
        td: Timedelta object to format

    Returns:
        str: Formatted duration string (e.g., "7h 05m", "0h 45m")
    """
    total_minutes = int(td.total_seconds() // 60)
    hours = total_minutes // 60
    minutes = total_minutes % 60
    return f"{hours}h {minutes:02d}m"


def parse_duration(text: str) -> Optional[int]:
    """
    Parse a duration string produced by format_duration back into minutes.

    Args:
        text: Duration string such as "12h 30m"

    Returns:
        Total minutes, or None if the text is not in that format
    """
    try:
        hours_part, minutes_part = text.strip().split()
        return int(hours_part.rstrip("h")) * 60 + int(minutes_part.rstrip("m"))
    except (ValueError, AttributeError):
        return None


def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Convert a value to Decimal without binary float artifacts.

    Floats go through their string form so 1.15 stays 1.15.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Round a money amount to 2 decimal places, half-up.

    Args:
        value: Amount to round

    Returns:
        Decimal: Rounded amount
    """
    return to_money(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round_half_up(value: Union[Decimal, float]) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(to_money(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_money(amount: Decimal, currency_symbol: str = "₹") -> str:
    """Format a money amount for display."""
    return f"{currency_symbol}{round_money(amount):,.2f}"
