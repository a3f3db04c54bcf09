"""
Tests for helper utility functions.
"""

from datetime import time, timedelta
from decimal import Decimal

from railfare.utils.helpers import (
    format_duration,
    format_money,
    format_time,
    parse_duration,
    round_half_up,
    round_money,
    to_money,
)


class TestTimeFormatting:
    """Test time and duration formatting."""

    def test_format_time(self):
        """Times render as zero-padded HH:MM."""
        assert format_time(time(6, 5)) == "06:05"
        assert format_time(time(23, 59, 30)) == "23:59"
        assert format_time(None) == ""

    def test_format_duration(self):
        """Durations render as hours and padded minutes."""
        assert format_duration(timedelta(hours=7)) == "7h 00m"
        assert format_duration(timedelta(hours=15, minutes=40)) == "15h 40m"
        assert format_duration(timedelta(minutes=45)) == "0h 45m"
        assert format_duration(timedelta(days=1, hours=2, minutes=5)) == "26h 05m"

    def test_parse_duration(self):
        """Formatted durations parse back to minutes."""
        assert parse_duration("12h 30m") == 750
        assert parse_duration(format_duration(timedelta(hours=26, minutes=5))) == 1565
        assert parse_duration("soon") is None
        assert parse_duration(None) is None


class TestMoney:
    """Test money conversion and rounding."""

    def test_to_money_avoids_float_artifacts(self):
        """Floats convert through their string form."""
        assert to_money(1.15) == Decimal("1.15")
        assert to_money(20) == Decimal("20")
        assert to_money("0.45") == Decimal("0.45")

    def test_round_money_half_up(self):
        """Half a paisa rounds up."""
        assert round_money(Decimal("220.005")) == Decimal("220.01")
        assert round_money(Decimal("220.004")) == Decimal("220.00")
        assert round_money(986) == Decimal("986.00")

    def test_round_half_up(self):
        """Halves round away from zero."""
        assert round_half_up(Decimal("101.5")) == 102
        assert round_half_up(2.5) == 3
        assert round_half_up(Decimal("783.333")) == 783

    def test_format_money(self):
        """Amounts render with symbol, separators and two places."""
        assert format_money(Decimal("986")) == "₹986.00"
        assert format_money(Decimal("12345.678"), "Rs ") == "Rs 12,345.68"
