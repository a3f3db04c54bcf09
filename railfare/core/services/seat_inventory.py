"""
Seat Inventory

Tracks seat availability per train and journey date.
"""

import logging
import threading
from datetime import date
from typing import Dict, Optional, Tuple

from ..models.seat_availability import SeatAvailability
from ..models.travel_class import TravelClass

logger = logging.getLogger(__name__)


class SeatInventory:
    """Thread-safe seat counts keyed by (train, journey date)."""

    def __init__(self):
        self._journeys: Dict[Tuple[int, date], SeatAvailability] = {}
        self._lock = threading.Lock()

    def availability(self, train_id: int, journey_date: date,
                     train_name: Optional[str] = None) -> SeatAvailability:
        """
        Get seat availability for a journey, creating the baseline on first use.

        Args:
            train_id: Train identifier
            journey_date: Date of travel
            train_name: Train name used to choose the baseline inventory

        Returns:
            SeatAvailability for the journey (a copy; use reserve() to change it)
        """
        with self._lock:
            seats = self._ensure_journey(train_id, journey_date, train_name)
            return SeatAvailability(dict(seats.seats))

    def set_availability(self, train_id: int, journey_date: date,
                         availability: SeatAvailability) -> None:
        """Replace the seat counts for a journey."""
        with self._lock:
            self._journeys[(train_id, journey_date)] = SeatAvailability(dict(availability.seats))

    def reserve(self, train_id: int, journey_date: date, travel_class,
                count: int, train_name: Optional[str] = None) -> int:
        """
        Reserve seats on a journey.

        Returns:
            Seats left in the class

        Raises:
            SeatUnavailableError: If there are not enough seats
        """
        travel_class = TravelClass.parse(travel_class)
        with self._lock:
            seats = self._ensure_journey(train_id, journey_date, train_name)
            remaining = seats.reserve(travel_class, count)
        logger.info(
            f"Reserved {count} {travel_class.code} seats on train {train_id} "
            f"for {journey_date.isoformat()}, {remaining} left"
        )
        return remaining

    def release(self, train_id: int, journey_date: date, travel_class, count: int) -> int:
        """Return seats to a journey after a cancellation."""
        with self._lock:
            seats = self._ensure_journey(train_id, journey_date, None)
            return seats.release(travel_class, count)

    def _ensure_journey(self, train_id: int, journey_date: date,
                        train_name: Optional[str]) -> SeatAvailability:
        key = (train_id, journey_date)
        if key not in self._journeys:
            self._journeys[key] = SeatAvailability.default_for_train(train_name)
            logger.debug(f"Created baseline seat inventory for train {train_id} on {journey_date}")
        return self._journeys[key]
