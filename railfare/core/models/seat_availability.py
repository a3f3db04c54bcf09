"""
Seat availability model.

Per-class seat counts for one train on one journey date.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from .travel_class import TravelClass
from ..exceptions import SeatUnavailableError


# Baseline inventories by train type (SL, 3A, 2A, 1A)
_PREMIUM_SEATS = {TravelClass.SL: 80, TravelClass.AC3: 60, TravelClass.AC2: 40, TravelClass.AC1: 20}
_EXPRESS_SEATS = {TravelClass.SL: 70, TravelClass.AC3: 50, TravelClass.AC2: 35, TravelClass.AC1: 18}
_STANDARD_SEATS = {TravelClass.SL: 60, TravelClass.AC3: 40, TravelClass.AC2: 30, TravelClass.AC1: 15}

_PREMIUM_KEYWORDS = ("rajdhani", "shatabdi")
_EXPRESS_KEYWORDS = ("express",)


@dataclass
class SeatAvailability:
    """Mutable seat counts for one journey."""

    seats: Dict[TravelClass, int] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize class keys and reject negative counts."""
        normalized = {}
        for travel_class, count in self.seats.items():
            if count < 0:
                raise ValueError(f"Seat count cannot be negative for {travel_class}")
            normalized[TravelClass.parse(travel_class)] = int(count)
        self.seats = normalized

    @classmethod
    def default_for_train(cls, train_name: Optional[str]) -> 'SeatAvailability':
        """
        Baseline inventory for a train with no journey record yet.

        Args:
            train_name: Train name used to pick premium, express or standard inventory

        Returns:
            New SeatAvailability
        """
        name = (train_name or "").lower()
        if any(keyword in name for keyword in _PREMIUM_KEYWORDS):
            return cls(dict(_PREMIUM_SEATS))
        if any(keyword in name for keyword in _EXPRESS_KEYWORDS):
            return cls(dict(_EXPRESS_SEATS))
        return cls(dict(_STANDARD_SEATS))

    def available(self, travel_class) -> int:
        """Get the number of free seats in a class."""
        return self.seats.get(TravelClass.parse(travel_class), 0)

    def is_available(self, travel_class, requested_seats: int = 1) -> bool:
        """Check whether a class can take the requested number of passengers."""
        return self.available(travel_class) >= requested_seats

    def reserve(self, travel_class, count: int) -> int:
        """
        Take seats out of a class.

        Args:
            travel_class: Class to reserve in
            count: Number of seats

        Returns:
            Seats left in the class

        Raises:
            SeatUnavailableError: If fewer than count seats are free
        """
        travel_class = TravelClass.parse(travel_class)
        if count < 1:
            raise ValueError("Seat count must be at least 1")
        available = self.available(travel_class)
        if available < count:
            raise SeatUnavailableError(
                f"Only {available} seats left in {travel_class.get_label()}, requested {count}"
            )
        self.seats[travel_class] = available - count
        return self.seats[travel_class]

    def release(self, travel_class, count: int) -> int:
        """Return seats to a class, e.g. after a cancellation."""
        travel_class = TravelClass.parse(travel_class)
        if count < 1:
            raise ValueError("Seat count must be at least 1")
        self.seats[travel_class] = self.available(travel_class) + count
        return self.seats[travel_class]

    def status_text(self, travel_class) -> str:
        """Get display status for a class."""
        seats = self.available(travel_class)
        if seats > 0:
            return f"Available: {seats}"
        return "Waitlist"

    def to_dict(self) -> Dict[str, int]:
        """Convert to a code-keyed dictionary."""
        return {travel_class.code: count for travel_class, count in self.seats.items()}
