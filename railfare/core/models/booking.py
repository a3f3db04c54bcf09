"""
Booking quote model.

A booking amount is computed once from a consistency record and carried
unchanged into payment and invoice stages.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Any

from .consistency_record import ConsistencyRecord
from .travel_class import TravelClass
from ...utils.helpers import format_money


@dataclass(frozen=True)
class BookingQuote:
    """Immutable priced booking for one class and passenger count."""

    record: ConsistencyRecord
    travel_class: TravelClass
    passenger_count: int
    fare_per_passenger: Decimal
    total_fare: Decimal
    convenience_fee: Decimal
    total_amount: Decimal

    @property
    def amount_in_paise(self) -> int:
        """Total amount in minor currency units for the payment gateway."""
        return int(self.total_amount * 100)

    def to_dict(self) -> Dict[str, Any]:
        """Convert quote to dictionary representation."""
        return {
            "train_id": self.record.train_id,
            "origin_station_id": self.record.origin_station_id,
            "destination_station_id": self.record.destination_station_id,
            "travel_class": self.travel_class.code,
            "passenger_count": self.passenger_count,
            "fare_per_passenger": str(self.fare_per_passenger),
            "total_fare": str(self.total_fare),
            "convenience_fee": str(self.convenience_fee),
            "total_amount": str(self.total_amount),
        }


@dataclass(frozen=True)
class Invoice:
    """Invoice lines rendered from a stored booking quote."""

    booking_reference: str
    travel_class: TravelClass
    passenger_count: int
    distance_km: int
    departure_time: str
    arrival_time: str
    duration: str
    fare_per_passenger: Decimal
    convenience_fee: Decimal
    total_amount: Decimal

    def format_lines(self, currency_symbol: str = "₹") -> list[str]:
        """Get human-readable invoice lines."""
        return [
            f"Booking: {self.booking_reference}",
            f"Class: {self.travel_class.get_label()}",
            f"Departure: {self.departure_time}  Arrival: {self.arrival_time}  ({self.duration})",
            f"Distance: {self.distance_km} km",
            f"Fare: {format_money(self.fare_per_passenger, currency_symbol)} x {self.passenger_count}",
            f"Convenience fee: {format_money(self.convenience_fee, currency_symbol)}",
            f"Total: {format_money(self.total_amount, currency_symbol)}",
        ]
