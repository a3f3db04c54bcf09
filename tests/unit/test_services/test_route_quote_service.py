"""
Tests for RouteQuoteService and ServiceFactory wiring.
"""

import json
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import Mock

from railfare.core.exceptions import NotFoundError, SeatUnavailableError
from railfare.core.models.passenger import PassengerEntry
from railfare.core.models.seat_availability import SeatAvailability
from railfare.core.models.travel_class import TravelClass
from railfare.core.services.json_schedule_repository import JsonScheduleRepository
from railfare.core.services.service_factory import ServiceFactory

JOURNEY = date(2026, 11, 2)


@pytest.fixture
def service(factory):
    return factory.get_route_quote_service()


def passengers(count):
    return [PassengerEntry(name=f"Passenger {i}", age=30, gender="Other") for i in range(count)]


class TestQuoteRoute:
    """Test route evaluation through the cache."""

    def test_shatabdi_record(self, service):
        """Bangalore -> Chennai is 350 km, popular, 7h."""
        record = service.quote_route(12007, 6, 8)

        assert record.distance_km == 350
        assert record.duration == "7h 00m"
        assert record.departure_time == "06:00"
        assert record.arrival_time == "13:00"
        assert record.halts == 1
        assert record.is_popular
        assert record.fare_for(TravelClass.AC3) == Decimal("483")

    def test_repeat_calls_return_same_record(self, service):
        """The second call is served from the cache."""
        first = service.quote_route(12951, 1, 5)
        second = service.quote_route(12951, 1, 5)

        assert first is second
        assert service.cache.get_stats()["computations"] == 1

    def test_quote_by_name(self, service):
        """Station names resolve to ids."""
        record = service.quote_route_by_name(12951, "New Delhi", "Mumbai Central")

        assert record.key == (12951, 1, 5)
        assert record.duration == "15h 40m"

    def test_unknown_station_name(self, service):
        """Unknown names raise NotFoundError."""
        with pytest.raises(NotFoundError):
            service.quote_route_by_name(12951, "New Delhi", "Atlantis")

    def test_unknown_train_uses_fallback(self, service):
        """A train without a schedule gets fallback data."""
        record = service.quote_route(99999, 1, 5)

        assert record.is_fallback
        assert record.distance_km == 1200
        assert record.departure_time == "06:00"
        assert record.arrival_time == "18:30"
        assert record.duration == "12h 30m"

    def test_search(self, service):
        """Search returns one record per candidate train."""
        records = service.search(1, 5, [12951, 12007])

        assert [record.train_id for record in records] == [12951, 12007]
        assert not records[0].is_fallback
        assert records[1].is_fallback

    def test_schedule_change_invalidates(self, service):
        """Editing a schedule drops that train's records."""
        service.quote_route(12951, 1, 5)
        service.quote_route(12951, 2, 4)
        service.quote_route(12007, 6, 8)

        assert service.on_schedule_changed(12951) == 2
        assert service.cache.get(12951, 1, 5) is None
        assert service.cache.get(12007, 6, 8) is not None


class TestBooking:
    """Test booking creation through the service."""

    def test_create_booking(self, service):
        """Booking reserves seats and records the total."""
        reference = service.create_booking(12007, 6, 8, "3A", passengers(2), JOURNEY)

        assert service.ledger.payment_amount(reference) == Decimal("986.00")
        assert service.seat_status(12007, JOURNEY)["3A"] == "Available: 58"

    def test_booking_without_seats(self, service):
        """A full class rejects the booking and records nothing."""
        service.seat_inventory.set_availability(12007, JOURNEY, SeatAvailability({"1A": 0}))

        with pytest.raises(SeatUnavailableError):
            service.create_booking(12007, 6, 8, "1A", passengers(1), JOURNEY)
        assert service.ledger.references() == []
        assert service.seat_status(12007, JOURNEY)["1A"] == "Waitlist"


class TestServiceFactory:
    """Test the factory shares one instance of each service."""

    def test_instances_shared(self, factory):
        """Repeated getters return the same objects."""
        assert factory.get_consistency_cache() is factory.get_consistency_cache()
        assert factory.get_route_quote_service().cache is factory.get_consistency_cache()
        assert factory.get_distance_model().schedule_index is factory.get_schedule_index()

    def test_station_directory_defaults_to_repository(self, factory, repository):
        """The JSON repository also serves station names."""
        assert factory.get_station_directory() is repository

    def test_station_directory_required(self):
        """A schedule-only repository needs a separate directory."""
        factory = ServiceFactory(schedule_repository=Mock(spec=["get_schedule_for_train",
                                                                "get_train_ids"]))
        with pytest.raises(TypeError):
            factory.get_station_directory()

    def test_config_flows_into_services(self, engine_config, repository):
        """Configured fee and speed are used."""
        engine_config.booking.convenience_fee = Decimal("0")
        engine_config.distance.average_speed_kmh = 70.0
        service = ServiceFactory(engine_config, schedule_repository=repository).get_route_quote_service()

        record = service.quote_route(12007, 6, 8)
        assert record.distance_km == 490
        assert service.calculator.convenience_fee == Decimal("0")


class TestReloadSchedules:
    """Test that schedule reloads refresh cached records."""

    def test_reload_recomputes_edited_train(self, temp_network_file, network_data):
        """A schedule edited on disk is priced from the new timings after reload."""
        repository = JsonScheduleRepository(temp_network_file)
        service = ServiceFactory(schedule_repository=repository).get_route_quote_service()
        assert service.quote_route(12007, 6, 8).distance_km == 350

        network_data["trains"][1]["stops"][2]["arrival_time"] = "16:00"
        with open(temp_network_file, "w", encoding="utf-8") as f:
            json.dump(network_data, f)

        assert service.reload_schedules() == 1
        record = service.quote_route(12007, 6, 8)
        assert record.distance_km == 500
        assert record.duration == "10h 00m"

    def test_reload_drops_fallback_records(self, network_data):
        """Trains added by a reload replace their earlier fallback records."""
        repository = JsonScheduleRepository(data=network_data)
        service = ServiceFactory(schedule_repository=repository).get_route_quote_service()
        assert service.quote_route(12301, 1, 5).is_fallback

        network_data["trains"].append({
            "id": 12301,
            "name": "Mumbai Express",
            "stops": [
                {"station_id": 1, "sequence_order": 1, "arrival_time": None, "departure_time": "08:00"},
                {"station_id": 5, "sequence_order": 2, "day_number": 2,
                 "arrival_time": "04:00", "departure_time": None},
            ],
        })
        service.reload_schedules()

        record = service.quote_route(12301, 1, 5)
        assert not record.is_fallback
        assert record.distance_km == 1000

    def test_reload_with_empty_cache(self, service):
        """Reloading before any quote removes nothing."""
        assert service.reload_schedules() == 0
