"""
Consistency record model.

The cached, authoritative timing and fare snapshot for one
(train, origin, destination) triple.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, List, Dict, Any, Tuple

from .travel_class import TravelClass


RecordKey = Tuple[int, int, int]


@dataclass(frozen=True)
class FareQuote:
    """Fare for a single class on a route leg."""

    travel_class: TravelClass
    amount: Decimal


@dataclass(frozen=True)
class ConsistencyRecord:
    """
    Immutable timing and fare snapshot for one train between two stations.

    Every screen that displays or charges for the same route reads this
    record instead of recomputing. Fares are quoted for all classes together
    and are never re-derived individually.
    """

    train_id: int
    origin_station_id: int
    destination_station_id: int
    distance_km: int
    departure_time: str
    arrival_time: str
    duration: str
    fares: Mapping[TravelClass, Decimal]
    duration_minutes: Optional[int] = None
    halts: int = 0
    is_popular: bool = False
    is_fallback: bool = False

    def __post_init__(self):
        """Freeze the fare mapping."""
        object.__setattr__(self, 'fares', MappingProxyType(dict(self.fares)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConsistencyRecord):
            return NotImplemented
        return self._comparable() == other._comparable()

    def __hash__(self) -> int:
        return hash(self._comparable())

    def _comparable(self) -> tuple:
        return (
            self.key,
            self.distance_km,
            self.departure_time,
            self.arrival_time,
            self.duration,
            tuple(sorted((cls.code, amount) for cls, amount in self.fares.items())),
            self.duration_minutes,
            self.halts,
            self.is_popular,
            self.is_fallback,
        )

    @property
    def key(self) -> RecordKey:
        """Cache key for this record."""
        return (self.train_id, self.origin_station_id, self.destination_station_id)

    def fare_for(self, travel_class: TravelClass) -> Decimal:
        """
        Get the quoted fare for a class.

        Args:
            travel_class: Class to look up (any accepted class string also works)

        Returns:
            Fare per passenger
        """
        return self.fares[TravelClass.parse(travel_class)]

    def fare_quotes(self) -> List[FareQuote]:
        """Get fare quotes ordered from lowest to highest class."""
        return [
            FareQuote(travel_class=travel_class, amount=self.fares[travel_class])
            for travel_class in TravelClass.ordered()
            if travel_class in self.fares
        ]

    def get_distance_display(self) -> str:
        """Get formatted distance for display."""
        return f"{self.distance_km} km"

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary representation."""
        return {
            "train_id": self.train_id,
            "origin_station_id": self.origin_station_id,
            "destination_station_id": self.destination_station_id,
            "distance_km": self.distance_km,
            "departure_time": self.departure_time,
            "arrival_time": self.arrival_time,
            "duration": self.duration,
            "duration_minutes": self.duration_minutes,
            "halts": self.halts,
            "is_popular": self.is_popular,
            "is_fallback": self.is_fallback,
            "fares": {quote.travel_class.code: str(quote.amount) for quote in self.fare_quotes()},
        }

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (f"ConsistencyRecord(train_id={self.train_id}, "
                f"origin={self.origin_station_id}, "
                f"destination={self.destination_station_id}, "
                f"distance_km={self.distance_km}, "
                f"fallback={self.is_fallback})")
