"""
JSON Schedule Repository Implementation
Author: Oliver Ernster

Repository implementation for loading train schedules and station names
from a JSON network file.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Any

from ..interfaces.i_schedule_repository import IScheduleRepository, IStationDirectory
from ..models.schedule import Route, Stop


class JsonScheduleRepository(IScheduleRepository, IStationDirectory):
    """
    Repository backed by a JSON file of the form::

        {"stations": [{"id": 1, "name": "New Delhi"}, ...],
         "trains": [{"id": 12951, "name": "...", "stops": [...]}, ...]}
    """

    def __init__(self, data_file: Optional[str] = None, data: Optional[Dict[str, Any]] = None):
        """
        Initialize the JSON schedule repository.

        Args:
            data_file: Path to the network JSON file (defaults to the bundled sample)
            data: Already-parsed network data; when given the file is not read
        """
        if data_file is None:
            self.data_file = Path(__file__).parent.parent.parent / "data" / "sample_network.json"
        else:
            self.data_file = Path(data_file)

        self.logger = logging.getLogger(__name__)

        self._data = data
        self._routes: Optional[Dict[int, Route]] = None
        self._stations: Optional[Dict[int, str]] = None

        if data is not None:
            self._load_from_data(data)
            self.logger.info("Initialized JsonScheduleRepository with in-memory network data")
        else:
            self.logger.info(f"Initialized JsonScheduleRepository with data file: {self.data_file}")

    def _ensure_data_loaded(self) -> None:
        """Ensure data is loaded into cache."""
        if self._routes is None or self._stations is None:
            self._load_all_data()

    def _load_all_data(self) -> None:
        """Load stations and schedules from injected data or the JSON file."""
        if self._data is not None:
            self._load_from_data(self._data)
            return

        self.logger.info(f"Loading network data from {self.data_file}")

        with open(self.data_file, 'r', encoding='utf-8') as f:
            data = json.load(f)

        self._load_from_data(data)

    def _load_from_data(self, data: Dict[str, Any]) -> None:
        self._stations = {
            int(station["id"]): station["name"]
            for station in data.get("stations", [])
        }

        routes = {}
        for train in data.get("trains", []):
            train_id = int(train["id"])
            stops = [
                Stop.from_dict(stop) for stop in train.get("stops", [])
            ]
            routes[train_id] = Route.from_stops(train_id, stops, train_name=train.get("name"))
        self._routes = routes

        self.logger.info(f"Loaded {len(self._stations)} stations and {len(self._routes)} trains")

    def reload(self) -> None:
        """
        Discard loaded schedules and load them again.

        Re-reads the data file, or re-parses the network data given at
        construction so edits made to that dict are picked up.
        """
        self._routes = None
        self._stations = None
        self._ensure_data_loaded()

    def get_schedule_for_train(self, train_id: int) -> Optional[Route]:
        """Get the ordered stop list for a train."""
        self._ensure_data_loaded()
        return self._routes.get(train_id)

    def get_train_ids(self) -> List[int]:
        """Get all known train ids."""
        self._ensure_data_loaded()
        return sorted(self._routes.keys())

    def get_station_name(self, station_id: int) -> Optional[str]:
        """Get the display name of a station."""
        self._ensure_data_loaded()
        return self._stations.get(station_id)

    def find_station_id(self, name: str) -> Optional[int]:
        """Find a station id by name (case-insensitive)."""
        self._ensure_data_loaded()
        wanted = name.strip().lower()
        for station_id, station_name in self._stations.items():
            if station_name.lower() == wanted:
                return station_id
        return None

    def find_trains_between(self, origin_id: int, destination_id: int) -> List[int]:
        """
        Get trains that call at origin before destination.

        Args:
            origin_id: Boarding station
            destination_id: Alighting station

        Returns:
            Matching train ids
        """
        self._ensure_data_loaded()
        matches = []
        for train_id, route in sorted(self._routes.items()):
            origin = route.find_stop(origin_id)
            destination = route.find_stop(destination_id)
            if origin and destination and origin.sequence_order < destination.sequence_order:
                matches.append(train_id)
        return matches
