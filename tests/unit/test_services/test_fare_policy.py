"""
Tests for FarePolicy pricing and surge.
"""

import pytest
from decimal import Decimal

from railfare.core.exceptions import ConfigurationError
from railfare.core.models.travel_class import TravelClass
from railfare.core.services.fare_policy import FarePolicy
from railfare.managers.config_manager import ClassFareConfig, FareConfig, PopularRoute


@pytest.fixture
def policy():
    return FarePolicy()


class TestBaseFare:
    """Test distance-based fares and minimums."""

    def test_rate_times_distance(self, policy):
        """350 km in 3A at 1.20/km is 420."""
        assert policy.base_fare(TravelClass.AC3, 350) == Decimal("420")

    def test_minimum_fare_applies(self, policy):
        """Short journeys pay the class minimum."""
        assert policy.base_fare(TravelClass.SL, 50) == Decimal("120")
        assert policy.base_fare(TravelClass.AC1, 50) == Decimal("750")

    def test_missing_class_raises(self):
        """A class without a rate entry is a configuration error."""
        config = FareConfig(classes={
            "SL": ClassFareConfig(rate_per_km=Decimal("0.45"), minimum_fare=Decimal("120"),
                                  surge_multiplier=Decimal("1.2")),
        })
        with pytest.raises(ConfigurationError):
            FarePolicy(config).base_fare(TravelClass.AC1, 100)


class TestSurge:
    """Test popular-route surge."""

    def test_surge_on_popular_route(self, policy):
        """420 x 1.15 = 483 for 3A on a popular route."""
        assert policy.surged_fare(TravelClass.AC3, 350, True) == Decimal("483")

    def test_no_surge_off_popular_route(self, policy):
        """Non-popular routes pay the base fare."""
        assert policy.surged_fare(TravelClass.AC3, 350, False) == Decimal("420")

    @pytest.mark.parametrize("distance", [50, 120, 350, 783, 1200, 2500])
    def test_surge_never_lowers_fare(self, policy, distance):
        """Surged fare is always above the base fare."""
        for travel_class in TravelClass:
            assert (policy.surged_fare(travel_class, distance, True)
                    > policy.surged_fare(travel_class, distance, False))


class TestPopularRoute:
    """Test popular-route matching."""

    def test_fragment_match(self, policy):
        """Name fragments match case-insensitively."""
        assert policy.is_popular_route("New Delhi", "Mumbai Central")
        assert policy.is_popular_route("BANGALORE CITY", "chennai central")

    def test_either_direction(self, policy):
        """Reverse direction is also popular."""
        assert policy.is_popular_route("Mumbai Central", "New Delhi")
        assert policy.is_popular_route("Howrah Junction Kolkata", "New Delhi")

    def test_unlisted_route(self, policy):
        """Unlisted pairs are not popular."""
        assert not policy.is_popular_route("Kota Junction", "Surat")

    def test_missing_names(self, policy):
        """Unknown names never match."""
        assert not policy.is_popular_route(None, "Mumbai Central")
        assert not policy.is_popular_route("New Delhi", "")

    def test_configured_list(self):
        """The allow-list is replaceable."""
        policy = FarePolicy(popular_routes=[PopularRoute(origin="Kota", destination="Surat")])

        assert policy.is_popular_route("Kota Junction", "Surat")
        assert not policy.is_popular_route("New Delhi", "Mumbai Central")


class TestQuoteAllClasses:
    """Test pricing every class together."""

    def test_all_classes_quoted(self, policy):
        """Every class gets a fare."""
        fares = policy.quote_all_classes(350, True)
        assert list(fares) == TravelClass.ordered()

    @pytest.mark.parametrize("distance", [50, 200, 350, 1000, 2500])
    @pytest.mark.parametrize("is_popular", [True, False])
    def test_fares_strictly_increase_by_class(self, policy, distance, is_popular):
        """SL < 3A < 2A < 1A for any distance."""
        amounts = list(policy.quote_all_classes(distance, is_popular).values())
        assert all(lower < higher for lower, higher in zip(amounts, amounts[1:]))

    def test_values(self, policy):
        """Per-class fares for 350 km on a popular route."""
        fares = policy.quote_all_classes(350, True)

        assert fares[TravelClass.SL] == Decimal("189")
        assert fares[TravelClass.AC3] == Decimal("483")
        assert fares[TravelClass.AC2] == Decimal("673.75")
        assert fares[TravelClass.AC1] == Decimal("1065.75")
