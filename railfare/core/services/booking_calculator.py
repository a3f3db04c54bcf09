"""
Booking Calculator

Turns a cached route record into a booking total. The total is rounded
exactly once, here, and never recomputed by later stages.
"""

import logging
from decimal import Decimal
from typing import Optional, Sequence, Union

from ..models.booking import BookingQuote
from ..models.consistency_record import ConsistencyRecord
from ..models.passenger import PassengerEntry, validate_passenger_count
from ..models.travel_class import TravelClass
from ...managers.config_manager import BookingConfig
from ...utils.helpers import round_money

logger = logging.getLogger(__name__)


class BookingCalculator:
    """Computes booking totals from consistency records."""

    def __init__(self, config: Optional[BookingConfig] = None):
        """
        Initialize the booking calculator.

        Args:
            config: Convenience fee and passenger limits
        """
        self.config = config or BookingConfig()

    @property
    def convenience_fee(self) -> Decimal:
        """Fixed fee added once per booking."""
        return self.config.convenience_fee

    def total_amount(self, record: ConsistencyRecord, travel_class: Union[TravelClass, str],
                     passenger_count: int) -> Decimal:
        """
        Get the amount payable for a booking.

        Args:
            record: Cached route record
            travel_class: Selected class
            passenger_count: Number of passengers

        Returns:
            round2(passenger_count x class fare + convenience fee), half-up
        """
        return self.quote(record, travel_class, passenger_count).total_amount

    def quote(self, record: ConsistencyRecord, travel_class: Union[TravelClass, str],
              passengers: Union[int, Sequence[PassengerEntry]]) -> BookingQuote:
        """
        Price a booking.

        Args:
            record: Cached route record
            travel_class: Selected class (enum or any accepted class string)
            passengers: Passenger entries, or a passenger count

        Returns:
            Frozen booking quote

        Raises:
            ValueError: If the passenger count is outside the booking limits
        """
        travel_class = TravelClass.parse(travel_class)
        passenger_count = self._passenger_count(passengers)

        fare_per_passenger = record.fare_for(travel_class)
        total_fare = fare_per_passenger * passenger_count
        total_amount = round_money(total_fare + self.convenience_fee)

        logger.info(
            f"Booking quote for train {record.train_id} {travel_class.code}: "
            f"{fare_per_passenger} x {passenger_count} + {self.convenience_fee} = {total_amount}"
        )

        return BookingQuote(
            record=record,
            travel_class=travel_class,
            passenger_count=passenger_count,
            fare_per_passenger=fare_per_passenger,
            total_fare=total_fare,
            convenience_fee=self.convenience_fee,
            total_amount=total_amount,
        )

    def _passenger_count(self, passengers: Union[int, Sequence[PassengerEntry]]) -> int:
        if isinstance(passengers, int):
            count = passengers
        else:
            count = validate_passenger_count(list(passengers))

        if count < 1:
            raise ValueError("At least one passenger is required")
        if count > self.config.max_passengers:
            raise ValueError(f"Maximum {self.config.max_passengers} passengers allowed per booking")
        return count
