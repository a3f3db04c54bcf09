"""
Route consistency cache.
Author: Oliver Ernster

This module provides the single source of truth for route evaluations:
one immutable record per (train, origin, destination) holding distance,
timings and the fares for every class. Search, booking, payment and invoice
stages all read the same record, so their numbers cannot drift apart.
"""

from typing import Any, Dict, List, Optional, Tuple
import threading
import logging

from ..core.exceptions import NotFoundError, InvalidRouteError
from ..core.interfaces.i_distance_model import IDistanceModel
from ..core.models.consistency_record import ConsistencyRecord, RecordKey
from ..core.models.schedule import Route
from ..core.services.schedule_index import ScheduleIndex
from ..core.services.distance_model import TimeBasedDistanceModel
from ..core.services.fare_policy import FarePolicy
from ..managers.config_manager import ScheduleFallbackConfig
from ..utils.helpers import format_time, format_duration


class ConsistencyCache:
    """
    Thread-safe memo of route evaluations.

    Records live for the lifetime of the cache; there is no expiry. Use
    invalidate() when a train's schedule is edited, or recompute() to force
    a fresh evaluation of one key.
    """

    def __init__(self,
                 schedule_index: Optional[ScheduleIndex] = None,
                 distance_model: Optional[IDistanceModel] = None,
                 fare_policy: Optional[FarePolicy] = None,
                 fallback: Optional[ScheduleFallbackConfig] = None):
        """
        Initialize the consistency cache.

        Args:
            schedule_index: Schedule timing queries
            distance_model: Distance estimator
            fare_policy: Per-class fare calculator
            fallback: Placeholder timings for routes that cannot be evaluated
        """
        self.schedule_index = schedule_index or ScheduleIndex()
        self.distance_model = distance_model or TimeBasedDistanceModel(schedule_index=self.schedule_index)
        self.fare_policy = fare_policy or FarePolicy()
        self.fallback = fallback or ScheduleFallbackConfig()
        self._records: Dict[RecordKey, ConsistencyRecord] = {}
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._computations = 0
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def make_key(train_id: int, origin_station_id: int, destination_station_id: int) -> RecordKey:
        """Generate the cache key for a route evaluation."""
        return (train_id, origin_station_id, destination_station_id)

    def get_or_compute(self, train_id: int, route: Optional[Route],
                       origin_station_id: int, destination_station_id: int,
                       origin_name: Optional[str] = None,
                       destination_name: Optional[str] = None) -> ConsistencyRecord:
        """
        Get the record for a route, computing and storing it on first use.

        Args:
            train_id: Train identifier
            route: The train's schedule (None if unavailable)
            origin_station_id: Boarding station
            destination_station_id: Alighting station
            origin_name: Origin display name, used for popular-route matching
            destination_name: Destination display name, used for popular-route matching

        Returns:
            The stored record, identical on every call for the same key
        """
        key = self.make_key(train_id, origin_station_id, destination_station_id)

        with self._lock:
            record = self._records.get(key)
            if record is not None:
                self._hits += 1
                self.logger.debug(f"Consistency cache hit for {key}")
                return record

            self._misses += 1
            self.logger.debug(f"Consistency cache miss for {key}")
            record = self._compute(train_id, route, origin_station_id, destination_station_id,
                                   origin_name, destination_name)
            self._records[key] = record
            return record

    def get(self, train_id: int, origin_station_id: int,
            destination_station_id: int) -> Optional[ConsistencyRecord]:
        """
        Look up a stored record without computing.

        Args:
            train_id: Train identifier
            origin_station_id: Boarding station
            destination_station_id: Alighting station

        Returns:
            Stored record or None if the route has not been evaluated
        """
        with self._lock:
            return self._records.get(self.make_key(train_id, origin_station_id, destination_station_id))

    def recompute(self, train_id: int, route: Optional[Route],
                  origin_station_id: int, destination_station_id: int,
                  origin_name: Optional[str] = None,
                  destination_name: Optional[str] = None) -> ConsistencyRecord:
        """
        Force a fresh evaluation and overwrite the stored record.

        Args:
            train_id: Train identifier
            route: The train's schedule (None if unavailable)
            origin_station_id: Boarding station
            destination_station_id: Alighting station
            origin_name: Origin display name
            destination_name: Destination display name

        Returns:
            The newly stored record
        """
        key = self.make_key(train_id, origin_station_id, destination_station_id)
        with self._lock:
            record = self._compute(train_id, route, origin_station_id, destination_station_id,
                                   origin_name, destination_name)
            self._records[key] = record
            self.logger.info(f"Recomputed consistency record for {key}")
            return record

    def invalidate(self, train_id: int) -> int:
        """
        Remove every record for a train.

        Args:
            train_id: Train whose schedule changed

        Returns:
            Number of records removed
        """
        with self._lock:
            keys_to_delete = [key for key in self._records if key[0] == train_id]
            for key in keys_to_delete:
                del self._records[key]

            if keys_to_delete:
                self.logger.info(f"Invalidated {len(keys_to_delete)} records for train {train_id}")
            return len(keys_to_delete)

    def train_ids(self) -> List[int]:
        """Trains that currently have at least one stored record."""
        with self._lock:
            return sorted({key[0] for key in self._records})

    def clear(self) -> None:
        """Clear all records and statistics."""
        with self._lock:
            self._records.clear()
            self._hits = 0
            self._misses = 0
            self._computations = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, key: Tuple[int, int, int]) -> bool:
        with self._lock:
            return key in self._records

    def get_stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with cache statistics
        """
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = (self._hits / total_requests) if total_requests > 0 else 0

            return {
                'size': len(self._records),
                'hits': self._hits,
                'misses': self._misses,
                'computations': self._computations,
                'hit_rate': hit_rate,
            }

    def _compute(self, train_id: int, route: Optional[Route],
                 origin_station_id: int, destination_station_id: int,
                 origin_name: Optional[str], destination_name: Optional[str]) -> ConsistencyRecord:
        self._computations += 1

        try:
            if route is None:
                raise NotFoundError(origin_station_id, train_id)
            departure = self.schedule_index.departure_time_at(route, origin_station_id)
            arrival = self.schedule_index.arrival_time_at(route, destination_station_id)
            elapsed = self.schedule_index.elapsed_between(route, origin_station_id, destination_station_id)
            halts = self.schedule_index.halts_between(route, origin_station_id, destination_station_id)

            departure_text = format_time(departure)
            arrival_text = format_time(arrival)
            duration_text = format_duration(elapsed)
            duration_minutes = int(elapsed.total_seconds() // 60)
            is_fallback = False
        except (NotFoundError, InvalidRouteError) as e:
            self.logger.warning(
                f"Using fallback timings for train {train_id} "
                f"{origin_station_id} -> {destination_station_id}: {e}"
            )
            departure_text = self.fallback.departure_time
            arrival_text = self.fallback.arrival_time
            duration_text = self.fallback.duration
            duration_minutes = self.fallback.duration_minutes
            halts = 0
            is_fallback = True

        distance_km = self.distance_model.distance_between(route, origin_station_id, destination_station_id)
        is_popular = self.fare_policy.is_popular_route(origin_name, destination_name)
        fares = self.fare_policy.quote_all_classes(distance_km, is_popular)

        record = ConsistencyRecord(
            train_id=train_id,
            origin_station_id=origin_station_id,
            destination_station_id=destination_station_id,
            distance_km=distance_km,
            departure_time=departure_text,
            arrival_time=arrival_text,
            duration=duration_text,
            fares=fares,
            duration_minutes=duration_minutes,
            halts=halts,
            is_popular=is_popular,
            is_fallback=is_fallback,
        )
        self.logger.info(
            f"Computed route record for train {train_id} "
            f"{origin_station_id} -> {destination_station_id}: {distance_km} km, {duration_text}"
        )
        return record
