"""
Schedule Index
Author: Oliver Ernster

Timing and ordering queries over one train's route.
"""

import logging
from datetime import time, timedelta

from ..exceptions import NotFoundError, InvalidRouteError
from ..models.schedule import Route, Stop

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


class ScheduleIndex:
    """
    Pure query functions over an immutable route snapshot.

    A terminal stop has no departure time and an origin stop has no arrival
    time; lookups fall back to the other time so they never come back empty.
    """

    def departure_time_at(self, route: Route, station_id: int) -> time:
        """
        Get the departure time at a station.

        Args:
            route: Train route
            station_id: Station to look up

        Returns:
            Departure time, or the arrival time at a terminus

        Raises:
            NotFoundError: If the station is not on the route
        """
        stop = self._require_stop(route, station_id)
        return stop.departure_time if stop.departure_time is not None else stop.arrival_time

    def arrival_time_at(self, route: Route, station_id: int) -> time:
        """
        Get the arrival time at a station.

        Args:
            route: Train route
            station_id: Station to look up

        Returns:
            Arrival time, or the departure time at the origin stop

        Raises:
            NotFoundError: If the station is not on the route
        """
        stop = self._require_stop(route, station_id)
        return stop.arrival_time if stop.arrival_time is not None else stop.departure_time

    def elapsed_between(self, route: Route, origin_id: int, destination_id: int) -> timedelta:
        """
        Get the travel time from origin departure to destination arrival.

        Uses each stop's day number so overnight and multi-day journeys are
        measured correctly. If a stop time on the same day number lies before
        the departure, the arrival is taken to roll into the next day.

        Args:
            route: Train route
            origin_id: Origin station id
            destination_id: Destination station id

        Returns:
            Non-negative elapsed time

        Raises:
            InvalidRouteError: If either station is absent or the destination
                does not come after the origin
        """
        origin, destination = self._ordered_pair(route, origin_id, destination_id)

        departure = self.departure_time_at(route, origin.station_id)
        arrival = self.arrival_time_at(route, destination.station_id)

        elapsed = (
            _absolute(destination.day_number, arrival)
            - _absolute(origin.day_number, departure)
        )
        if elapsed < timedelta(0):
            logger.debug(
                f"Arrival at {destination_id} precedes departure from {origin_id} "
                f"on train {route.train_id}, rolling over to the next day"
            )
        while elapsed < timedelta(0):
            elapsed += ONE_DAY

        return elapsed

    def halts_between(self, route: Route, origin_id: int, destination_id: int) -> int:
        """
        Count stops strictly between origin and destination.

        Args:
            route: Train route
            origin_id: Origin station id
            destination_id: Destination station id

        Returns:
            Number of intermediate stops (0 when adjacent)

        Raises:
            InvalidRouteError: If either station is absent or out of order
        """
        origin, destination = self._ordered_pair(route, origin_id, destination_id)
        return sum(
            1 for stop in route.stops
            if origin.sequence_order < stop.sequence_order < destination.sequence_order
        )

    def _require_stop(self, route: Route, station_id: int) -> Stop:
        stop = route.find_stop(station_id) if route is not None else None
        if stop is None:
            raise NotFoundError(station_id, route.train_id if route is not None else None)
        return stop

    def _ordered_pair(self, route: Route, origin_id: int, destination_id: int) -> tuple[Stop, Stop]:
        try:
            origin = self._require_stop(route, origin_id)
            destination = self._require_stop(route, destination_id)
        except NotFoundError as e:
            raise InvalidRouteError(str(e)) from e

        if destination.sequence_order <= origin.sequence_order:
            raise InvalidRouteError(
                f"Station {destination_id} is not reachable from {origin_id} "
                f"on train {route.train_id}"
            )
        return origin, destination


def _absolute(day_number: int, t: time) -> timedelta:
    """Offset from midnight of day 1."""
    return (day_number - 1) * ONE_DAY + timedelta(hours=t.hour, minutes=t.minute, seconds=t.second)
