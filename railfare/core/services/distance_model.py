"""
Time-Based Distance Model

Derives a kilometre distance from schedule timing because no authoritative
station coordinates exist. This is a known approximation: when the schedule
cannot be evaluated a fixed fallback distance is returned so booking flows
stay usable with partial data.
"""

import logging
from decimal import Decimal
from typing import Optional

from ..exceptions import NotFoundError, InvalidRouteError
from ..interfaces.i_distance_model import IDistanceModel
from ..models.schedule import Route
from .schedule_index import ScheduleIndex
from ...managers.config_manager import DistanceConfig
from ...utils.helpers import round_half_up, to_money

SECONDS_PER_HOUR = Decimal(3600)


class TimeBasedDistanceModel(IDistanceModel):
    """Distance = elapsed hours x train speed, clamped to configured bounds."""

    def __init__(self, config: Optional[DistanceConfig] = None,
                 schedule_index: Optional[ScheduleIndex] = None):
        """
        Initialize the distance model.

        Args:
            config: Speed, bounds and fallback constants
            schedule_index: Schedule query helper (created if not provided)
        """
        self.config = config or DistanceConfig()
        self.schedule_index = schedule_index or ScheduleIndex()
        self.logger = logging.getLogger(__name__)

    @property
    def fallback_km(self) -> int:
        """Distance returned when the route cannot be evaluated."""
        return self.config.fallback_km

    def distance_between(self, route: Optional[Route], origin_id: int, destination_id: int) -> int:
        """
        Get the distance in kilometres between two stations on a route.

        Args:
            route: Train route (None when the schedule is missing)
            origin_id: Origin station id
            destination_id: Destination station id

        Returns:
            Distance in whole kilometres, or the fallback distance
        """
        if route is None:
            self.logger.warning(
                f"No schedule available for {origin_id} -> {destination_id}, "
                f"using fallback distance {self.fallback_km} km"
            )
            return self.fallback_km

        try:
            elapsed = self.schedule_index.elapsed_between(route, origin_id, destination_id)
        except (NotFoundError, InvalidRouteError) as e:
            self.logger.warning(
                f"Cannot derive distance on train {route.train_id}: {e}; "
                f"using fallback distance {self.fallback_km} km"
            )
            return self.fallback_km

        speed = self.config.speed_for(route.train_name)
        hours = to_money(elapsed.total_seconds()) / SECONDS_PER_HOUR
        distance = round_half_up(hours * to_money(speed))
        clamped = max(self.config.minimum_km, min(distance, self.config.maximum_km))

        self.logger.debug(
            f"Time-based distance on train {route.train_id}: {hours:.2f} h at "
            f"{speed:g} km/h = {distance} km (using {clamped} km)"
        )
        return clamped
