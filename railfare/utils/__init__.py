"""
Utility functions for the fare engine.

This module contains helper functions and utilities used throughout
the engine.
"""

from .helpers import format_time, format_duration, round_money, to_money

__all__ = ["format_time", "format_duration", "round_money", "to_money"]
