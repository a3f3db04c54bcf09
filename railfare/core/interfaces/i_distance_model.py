"""
Distance Model Interface

Narrow interface for distance estimation so a geographic model can replace
the schedule-timing proxy without touching pricing or caching.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.schedule import Route


class IDistanceModel(ABC):
    """Interface for route distance estimation."""

    @abstractmethod
    def distance_between(self, route: Optional[Route], origin_id: int, destination_id: int) -> int:
        """
        Get the distance in kilometres between two stations on a route.

        Implementations never raise for unusable schedule data; they return
        a deterministic fallback distance instead.

        Args:
            route: Train route (may be None when the schedule is missing)
            origin_id: Origin station id
            destination_id: Destination station id

        Returns:
            Distance in whole kilometres
        """
        pass

    @property
    @abstractmethod
    def fallback_km(self) -> int:
        """Distance returned when the route cannot be evaluated."""
        pass
