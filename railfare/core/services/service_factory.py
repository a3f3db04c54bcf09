"""
Service Factory
Author: Oliver Ernster

Factory for creating and wiring the engine's service instances from one
configuration. Callers construct a single factory and share the instances
it hands out instead of relying on global state.
"""

import logging
from typing import Optional

from ..interfaces.i_distance_model import IDistanceModel
from ..interfaces.i_schedule_repository import IScheduleRepository, IStationDirectory
from .schedule_index import ScheduleIndex
from .distance_model import TimeBasedDistanceModel
from .fare_policy import FarePolicy
from .booking_calculator import BookingCalculator
from .booking_ledger import BookingLedger
from .seat_inventory import SeatInventory
from .json_schedule_repository import JsonScheduleRepository
from .route_quote_service import RouteQuoteService
from ...cache.consistency_cache import ConsistencyCache
from ...managers.config_manager import EngineConfig


class ServiceFactory:
    """Factory for creating and managing engine service instances."""

    def __init__(self, config: Optional[EngineConfig] = None,
                 schedule_repository: Optional[IScheduleRepository] = None,
                 station_directory: Optional[IStationDirectory] = None,
                 distance_model: Optional[IDistanceModel] = None):
        """
        Initialize the service factory.

        Args:
            config: Engine configuration (defaults apply if None)
            schedule_repository: Schedule source (bundled JSON sample if None)
            station_directory: Station name source (the schedule repository if None)
            distance_model: Replacement distance model
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or EngineConfig()

        self._schedule_repository = schedule_repository
        self._station_directory = station_directory
        self._distance_model = distance_model

        self._schedule_index: Optional[ScheduleIndex] = None
        self._fare_policy: Optional[FarePolicy] = None
        self._cache: Optional[ConsistencyCache] = None
        self._route_quote_service: Optional[RouteQuoteService] = None

    def get_schedule_repository(self) -> IScheduleRepository:
        """Get or create the schedule repository."""
        if self._schedule_repository is None:
            self._schedule_repository = JsonScheduleRepository()
            self.logger.info("Created JsonScheduleRepository instance")
        return self._schedule_repository

    def get_station_directory(self) -> IStationDirectory:
        """Get the station directory, falling back to the schedule repository."""
        if self._station_directory is None:
            repository = self.get_schedule_repository()
            if not isinstance(repository, IStationDirectory):
                raise TypeError("A station directory is required when the schedule "
                                "repository does not provide station names")
            self._station_directory = repository
        return self._station_directory

    def get_schedule_index(self) -> ScheduleIndex:
        """Get or create the schedule index."""
        if self._schedule_index is None:
            self._schedule_index = ScheduleIndex()
        return self._schedule_index

    def get_distance_model(self) -> IDistanceModel:
        """Get or create the distance model."""
        if self._distance_model is None:
            self._distance_model = TimeBasedDistanceModel(
                self.config.distance, self.get_schedule_index()
            )
            self.logger.info(
                f"Created TimeBasedDistanceModel at {self.config.distance.average_speed_kmh:g} km/h"
            )
        return self._distance_model

    def get_fare_policy(self) -> FarePolicy:
        """Get or create the fare policy."""
        if self._fare_policy is None:
            self._fare_policy = FarePolicy(self.config.fares, self.config.popular_routes)
        return self._fare_policy

    def get_consistency_cache(self) -> ConsistencyCache:
        """Get or create the shared consistency cache."""
        if self._cache is None:
            self._cache = ConsistencyCache(
                schedule_index=self.get_schedule_index(),
                distance_model=self.get_distance_model(),
                fare_policy=self.get_fare_policy(),
                fallback=self.config.schedule_fallback,
            )
            self.logger.info("Created ConsistencyCache instance")
        return self._cache

    def get_route_quote_service(self) -> RouteQuoteService:
        """Get or create the route quote service."""
        if self._route_quote_service is None:
            self._route_quote_service = RouteQuoteService(
                schedule_repository=self.get_schedule_repository(),
                station_directory=self.get_station_directory(),
                cache=self.get_consistency_cache(),
                calculator=BookingCalculator(self.config.booking),
                ledger=BookingLedger(),
                seat_inventory=SeatInventory(),
            )
            self.logger.info("Created RouteQuoteService instance")
        return self._route_quote_service
