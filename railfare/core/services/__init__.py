"""
Core Services Package

Schedule queries, distance estimation, fare policy, booking totals and the
factory that wires them to one consistency cache.
"""

from .schedule_index import ScheduleIndex
from .distance_model import TimeBasedDistanceModel
from .fare_policy import FarePolicy
from .booking_calculator import BookingCalculator
from .booking_ledger import BookingLedger
from .seat_inventory import SeatInventory
from .json_schedule_repository import JsonScheduleRepository

__all__ = [
    'ScheduleIndex',
    'TimeBasedDistanceModel',
    'FarePolicy',
    'BookingCalculator',
    'BookingLedger',
    'SeatInventory',
    'JsonScheduleRepository'
]
