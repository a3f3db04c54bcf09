"""
Schedule Model

Data model for a train's ordered stop sequence.
"""

from dataclasses import dataclass, field
from datetime import time
from typing import Optional, Tuple, List, Dict, Any, Iterable


@dataclass(frozen=True)
class Stop:
    """One station visit within a train's schedule."""

    station_id: int
    sequence_order: int
    day_number: int = 1
    arrival_time: Optional[time] = None
    departure_time: Optional[time] = None

    def __post_init__(self):
        """Validate stop data."""
        if self.day_number < 1:
            raise ValueError(f"Day number must be at least 1, got {self.day_number}")
        if self.arrival_time is None and self.departure_time is None:
            raise ValueError(
                f"Stop for station {self.station_id} needs an arrival or departure time"
            )

    @property
    def is_origin_stop(self) -> bool:
        """A stop with no arrival time is where the train starts."""
        return self.arrival_time is None

    @property
    def is_terminal_stop(self) -> bool:
        """A stop with no departure time is where the train terminates."""
        return self.departure_time is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert stop to dictionary representation."""
        return {
            "station_id": self.station_id,
            "sequence_order": self.sequence_order,
            "day_number": self.day_number,
            "arrival_time": self.arrival_time.strftime("%H:%M") if self.arrival_time else None,
            "departure_time": self.departure_time.strftime("%H:%M") if self.departure_time else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Stop':
        """Create Stop from dictionary representation (times as HH:MM strings)."""
        return cls(
            station_id=int(data["station_id"]),
            sequence_order=int(data["sequence_order"]),
            day_number=int(data.get("day_number", 1)),
            arrival_time=_parse_time(data.get("arrival_time")),
            departure_time=_parse_time(data.get("departure_time")),
        )


def _parse_time(value: Optional[str]) -> Optional[time]:
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    return time.fromisoformat(value)


@dataclass(frozen=True)
class Route:
    """
    Ordered stop sequence for one train.

    Stops are held sorted by sequence order. The route is a read-only
    snapshot; the schedule repository owns it and the engine only queries it.
    """

    train_id: int
    stops: Tuple[Stop, ...] = field(default_factory=tuple)
    train_name: Optional[str] = None

    def __post_init__(self):
        """Sort stops and validate ordering invariants."""
        ordered = tuple(sorted(self.stops, key=lambda stop: stop.sequence_order))
        object.__setattr__(self, 'stops', ordered)

        for previous, current in zip(ordered, ordered[1:]):
            if current.sequence_order == previous.sequence_order:
                raise ValueError(
                    f"Duplicate sequence order {current.sequence_order} in train {self.train_id}"
                )
            if current.day_number < previous.day_number:
                raise ValueError(
                    f"Day number decreases at sequence {current.sequence_order} "
                    f"in train {self.train_id}"
                )

    @property
    def station_ids(self) -> List[int]:
        """Station ids in travel order."""
        return [stop.station_id for stop in self.stops]

    @property
    def origin(self) -> Optional[Stop]:
        """First stop of the route."""
        return self.stops[0] if self.stops else None

    @property
    def terminus(self) -> Optional[Stop]:
        """Last stop of the route."""
        return self.stops[-1] if self.stops else None

    def find_stop(self, station_id: int) -> Optional[Stop]:
        """Get the stop for a station, or None if the train does not call there."""
        for stop in self.stops:
            if stop.station_id == station_id:
                return stop
        return None

    def contains(self, station_id: int) -> bool:
        """Check whether the train calls at a station."""
        return self.find_stop(station_id) is not None

    def __len__(self) -> int:
        return len(self.stops)

    def to_dict(self) -> Dict[str, Any]:
        """Convert route to dictionary representation."""
        return {
            "train_id": self.train_id,
            "train_name": self.train_name,
            "stops": [stop.to_dict() for stop in self.stops],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Route':
        """Create Route from dictionary representation."""
        return cls(
            train_id=int(data["train_id"]),
            stops=tuple(Stop.from_dict(stop) for stop in data.get("stops", [])),
            train_name=data.get("train_name"),
        )

    @classmethod
    def from_stops(cls, train_id: int, stops: Iterable[Stop],
                   train_name: Optional[str] = None) -> 'Route':
        """Build a route from any iterable of stops."""
        return cls(train_id=train_id, stops=tuple(stops), train_name=train_name)

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return f"Route(train_id={self.train_id}, stops={len(self.stops)})"
