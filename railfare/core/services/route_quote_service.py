"""
Route Quote Service
Author: Oliver Ernster

Caller-facing facade used by search, booking and payment screens. Every
route evaluation goes through the shared consistency cache, and every
booking total is derived from the cached record.
"""

import logging
from datetime import date
from typing import Optional, Sequence, Union, List

from ..exceptions import NotFoundError
from ..interfaces.i_schedule_repository import IScheduleRepository, IStationDirectory
from ..models.booking import BookingQuote
from ..models.consistency_record import ConsistencyRecord
from ..models.passenger import PassengerEntry
from ..models.travel_class import TravelClass
from .booking_calculator import BookingCalculator
from .booking_ledger import BookingLedger
from .seat_inventory import SeatInventory
from ...cache.consistency_cache import ConsistencyCache


class RouteQuoteService:
    """Resolves schedules and station names, then reads through the cache."""

    def __init__(self,
                 schedule_repository: IScheduleRepository,
                 station_directory: IStationDirectory,
                 cache: ConsistencyCache,
                 calculator: Optional[BookingCalculator] = None,
                 ledger: Optional[BookingLedger] = None,
                 seat_inventory: Optional[SeatInventory] = None):
        """
        Initialize the route quote service.

        Args:
            schedule_repository: Source of train schedules
            station_directory: Source of station names
            cache: Shared consistency cache
            calculator: Booking total calculator
            ledger: Store of priced bookings
            seat_inventory: Seat counts per journey
        """
        self.schedule_repository = schedule_repository
        self.station_directory = station_directory
        self.cache = cache
        self.calculator = calculator or BookingCalculator()
        self.ledger = ledger or BookingLedger()
        self.seat_inventory = seat_inventory or SeatInventory()
        self.logger = logging.getLogger(__name__)

    def quote_route(self, train_id: int, origin_station_id: int,
                    destination_station_id: int) -> ConsistencyRecord:
        """
        Get the authoritative record for a train between two stations.

        Args:
            train_id: Train identifier
            origin_station_id: Boarding station
            destination_station_id: Alighting station

        Returns:
            Cached consistency record
        """
        cached = self.cache.get(train_id, origin_station_id, destination_station_id)
        if cached is not None:
            return cached

        route = self.schedule_repository.get_schedule_for_train(train_id)
        if route is None:
            self.logger.warning(f"No schedule found for train {train_id}")

        return self.cache.get_or_compute(
            train_id,
            route,
            origin_station_id,
            destination_station_id,
            self.station_directory.get_station_name(origin_station_id),
            self.station_directory.get_station_name(destination_station_id),
        )

    def quote_route_by_name(self, train_id: int, origin_name: str,
                            destination_name: str) -> ConsistencyRecord:
        """
        Get the record for a train between two stations given by name.

        Raises:
            NotFoundError: If either station name is unknown
        """
        origin_id = self.station_directory.find_station_id(origin_name)
        if origin_id is None:
            raise NotFoundError(origin_name, train_id)
        destination_id = self.station_directory.find_station_id(destination_name)
        if destination_id is None:
            raise NotFoundError(destination_name, train_id)
        return self.quote_route(train_id, origin_id, destination_id)

    def quote_booking(self, train_id: int, origin_station_id: int, destination_station_id: int,
                      travel_class: Union[TravelClass, str],
                      passengers: Union[int, Sequence[PassengerEntry]]) -> BookingQuote:
        """
        Price a booking from the cached route record.

        Returns:
            Booking quote whose total is final
        """
        record = self.quote_route(train_id, origin_station_id, destination_station_id)
        return self.calculator.quote(record, travel_class, passengers)

    def create_booking(self, train_id: int, origin_station_id: int, destination_station_id: int,
                       travel_class: Union[TravelClass, str],
                       passengers: Sequence[PassengerEntry],
                       journey_date: Optional[date] = None) -> str:
        """
        Price a booking, reserve its seats and store it in the ledger.

        Args:
            train_id: Train identifier
            origin_station_id: Boarding station
            destination_station_id: Alighting station
            travel_class: Selected class
            passengers: Passenger entries
            journey_date: Date of travel (defaults to today)

        Returns:
            Booking reference

        Raises:
            SeatUnavailableError: If the class does not have enough seats
        """
        quote = self.quote_booking(train_id, origin_station_id, destination_station_id,
                                   travel_class, passengers)
        route = self.schedule_repository.get_schedule_for_train(train_id)
        self.seat_inventory.reserve(
            train_id,
            journey_date or date.today(),
            quote.travel_class,
            quote.passenger_count,
            train_name=route.train_name if route is not None else None,
        )
        return self.ledger.record(quote)

    def seat_status(self, train_id: int, journey_date: Optional[date] = None) -> dict:
        """
        Get display status for every class on a journey.

        Returns:
            Class code -> "Available: N" or "Waitlist"
        """
        route = self.schedule_repository.get_schedule_for_train(train_id)
        availability = self.seat_inventory.availability(
            train_id,
            journey_date or date.today(),
            train_name=route.train_name if route is not None else None,
        )
        return {
            travel_class.code: availability.status_text(travel_class)
            for travel_class in TravelClass.ordered()
        }

    def on_schedule_changed(self, train_id: int) -> int:
        """
        Drop cached records after a train's schedule is edited.

        Returns:
            Number of records removed
        """
        return self.cache.invalidate(train_id)

    def reload_schedules(self) -> int:
        """
        Reload schedules from the repository and drop every cached record.

        Any train may have been edited, added or removed, so records for all
        cached trains are invalidated, including fallback records for trains
        that had no schedule before.

        Returns:
            Number of records removed
        """
        self.schedule_repository.reload()
        removed = sum(self.cache.invalidate(train_id) for train_id in self.cache.train_ids())
        self.logger.info(f"Reloaded schedules, invalidated {removed} cached records")
        return removed

    def search(self, origin_station_id: int, destination_station_id: int,
               train_ids: Sequence[int]) -> List[ConsistencyRecord]:
        """
        Evaluate a list of candidate trains for a station pair.

        Args:
            origin_station_id: Boarding station
            destination_station_id: Alighting station
            train_ids: Candidate trains

        Returns:
            One record per train, in the order given
        """
        return [
            self.quote_route(train_id, origin_station_id, destination_station_id)
            for train_id in train_ids
        ]
