"""
Schedule Repository Interface

Interface for the persistence layer that owns train schedules and station names.
"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..models.schedule import Route


class IScheduleRepository(ABC):
    """Interface for schedule lookup operations."""

    @abstractmethod
    def get_schedule_for_train(self, train_id: int) -> Optional[Route]:
        """
        Get the ordered stop list for a train.

        Args:
            train_id: Train identifier

        Returns:
            Route if the train is known, None otherwise
        """
        pass

    @abstractmethod
    def get_train_ids(self) -> List[int]:
        """
        Get all known train ids.

        Returns:
            List of train ids
        """
        pass

    def reload(self) -> None:
        """Refresh schedules from the backing store. Static sources keep this no-op."""
        pass


class IStationDirectory(ABC):
    """Interface for station name lookup."""

    @abstractmethod
    def get_station_name(self, station_id: int) -> Optional[str]:
        """
        Get the display name of a station.

        Args:
            station_id: Station identifier

        Returns:
            Station name if known, None otherwise
        """
        pass

    @abstractmethod
    def find_station_id(self, name: str) -> Optional[int]:
        """
        Find a station id by name (case-insensitive).

        Args:
            name: Station name

        Returns:
            Station id if found, None otherwise
        """
        pass
