"""
Fare Policy
Author: Oliver Ernster

Maps a travel class and distance to a fare, then applies the popular-route
surge. Fares are kept as exact decimals; rounding happens once, when a
booking total is computed.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from ..exceptions import ConfigurationError
from ..models.travel_class import TravelClass
from ...managers.config_manager import FareConfig, ClassFareConfig, PopularRoute, default_popular_routes

logger = logging.getLogger(__name__)


class FarePolicy:
    """Per-class rate curve with conditional surge multipliers."""

    def __init__(self, fare_config: Optional[FareConfig] = None,
                 popular_routes: Optional[List[PopularRoute]] = None):
        """
        Initialize the fare policy.

        Args:
            fare_config: Per-class rate table
            popular_routes: Allow-list of station-name pairs that attract surge
        """
        self.fare_config = fare_config or FareConfig()
        self.popular_routes = list(
            popular_routes if popular_routes is not None else default_popular_routes()
        )

    def base_fare(self, travel_class: TravelClass, distance_km: int) -> Decimal:
        """
        Get the fare before surge.

        Args:
            travel_class: Class to price
            distance_km: Journey distance

        Returns:
            max(class minimum fare, distance x class rate)

        Raises:
            ConfigurationError: If the class has no rate table entry
        """
        entry = self._entry_for(travel_class)
        return max(entry.minimum_fare, Decimal(distance_km) * entry.rate_per_km)

    def is_popular_route(self, origin_name: Optional[str], destination_name: Optional[str]) -> bool:
        """
        Check whether a station pair is on the popular-route list.

        Matching is case-insensitive on name fragments and works in either
        direction.

        Args:
            origin_name: Origin station display name
            destination_name: Destination station display name

        Returns:
            True if the route attracts surge pricing
        """
        if not origin_name or not destination_name:
            return False

        origin = origin_name.lower()
        destination = destination_name.lower()

        for route in self.popular_routes:
            if route.origin in origin and route.destination in destination:
                return True
            if route.destination in origin and route.origin in destination:
                return True
        return False

    def surged_fare(self, travel_class: TravelClass, distance_km: int, is_popular: bool) -> Decimal:
        """
        Get the fare after popular-route surge.

        Args:
            travel_class: Class to price
            distance_km: Journey distance
            is_popular: Whether the route is on the popular list

        Returns:
            Base fare, multiplied by the class surge when popular
        """
        fare = self.base_fare(travel_class, distance_km)
        if is_popular:
            fare = fare * self._entry_for(travel_class).surge_multiplier
        return fare

    def quote_all_classes(self, distance_km: int, is_popular: bool) -> Dict[TravelClass, Decimal]:
        """
        Price every class for one route leg.

        Classes are always quoted together; this map is what gets cached.

        Args:
            distance_km: Journey distance
            is_popular: Whether the route is on the popular list

        Returns:
            Fare per class
        """
        fares = {
            travel_class: self.surged_fare(travel_class, distance_km, is_popular)
            for travel_class in TravelClass.ordered()
        }
        logger.debug(
            f"Quoted {distance_km} km (popular={is_popular}): "
            + ", ".join(f"{cls.code}={amount}" for cls, amount in fares.items())
        )
        return fares

    def _entry_for(self, travel_class: TravelClass) -> ClassFareConfig:
        entry = self.fare_config.get(travel_class)
        if entry is None:
            raise ConfigurationError(f"No fare configured for class {travel_class.code}")
        return entry
