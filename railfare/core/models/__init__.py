"""
Core Models Package

Data models for schedules, travel classes, cached route records and bookings.
"""

from .schedule import Stop, Route
from .travel_class import TravelClass
from .consistency_record import ConsistencyRecord, FareQuote
from .passenger import PassengerEntry
from .booking import BookingQuote, Invoice
from .seat_availability import SeatAvailability

__all__ = [
    'Stop',
    'Route',
    'TravelClass',
    'ConsistencyRecord',
    'FareQuote',
    'PassengerEntry',
    'BookingQuote',
    'Invoice',
    'SeatAvailability'
]
