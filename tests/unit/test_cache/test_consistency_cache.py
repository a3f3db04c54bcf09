"""
Tests for the ConsistencyCache.
"""

import threading
import pytest
from decimal import Decimal
from unittest.mock import Mock

from railfare.cache.consistency_cache import ConsistencyCache
from railfare.core.exceptions import ConfigurationError
from railfare.core.services.fare_policy import FarePolicy
from railfare.core.services.schedule_index import ScheduleIndex
from railfare.core.models.travel_class import TravelClass
from railfare.managers.config_manager import ScheduleFallbackConfig


class TestGetOrCompute:
    """Test record computation and reuse."""

    def test_record_contents(self, cache, rajdhani_route):
        """Record carries timings, distance and all fares."""
        record = cache.get_or_compute(12951, rajdhani_route, 1, 5, "New Delhi", "Mumbai Central")

        assert record.departure_time == "16:55"
        assert record.arrival_time == "08:35"
        assert record.duration == "15h 40m"
        assert record.duration_minutes == 940
        assert record.halts == 3
        assert record.distance_km == 783
        assert record.is_popular
        assert not record.is_fallback
        assert set(record.fares) == set(TravelClass)

    def test_second_call_returns_same_object(self, cache, shatabdi_route):
        """Later calls for the same key return the stored record."""
        first = cache.get_or_compute(12007, shatabdi_route, 6, 8)
        second = cache.get_or_compute(12007, shatabdi_route, 6, 8)

        assert first is second
        stats = cache.get_stats()
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["computations"] == 1
        assert stats["hit_rate"] == 0.5

    def test_collaborators_called_once(self, shatabdi_route):
        """Schedule and fare work happens only on the first request."""
        index = Mock(wraps=ScheduleIndex())
        policy = Mock(wraps=FarePolicy())
        cache = ConsistencyCache(schedule_index=index, fare_policy=policy)

        for _ in range(5):
            cache.get_or_compute(12007, shatabdi_route, 6, 8, "Bangalore City", "Chennai Central")

        assert policy.quote_all_classes.call_count == 1
        assert index.halts_between.call_count == 1

    def test_names_only_affect_first_computation(self, cache, shatabdi_route):
        """A cached record is not re-priced for different display names."""
        popular = cache.get_or_compute(12007, shatabdi_route, 6, 8, "Bangalore City", "Chennai Central")
        again = cache.get_or_compute(12007, shatabdi_route, 6, 8)

        assert again.is_popular
        assert again.fare_for("3A") == popular.fare_for("3A") == Decimal("483")

    def test_distinct_keys(self, cache, rajdhani_route):
        """Different station pairs are different records."""
        cache.get_or_compute(12951, rajdhani_route, 1, 5)
        cache.get_or_compute(12951, rajdhani_route, 1, 3)

        assert len(cache) == 2
        assert (12951, 1, 3) in cache

    def test_train_ids(self, cache, rajdhani_route, shatabdi_route):
        """Cached trains are listed once each."""
        cache.get_or_compute(12951, rajdhani_route, 1, 5)
        cache.get_or_compute(12951, rajdhani_route, 1, 3)
        cache.get_or_compute(12007, shatabdi_route, 6, 8)

        assert cache.train_ids() == [12007, 12951]


class TestFallback:
    """Test fallback records for unusable schedules."""

    def test_missing_route(self, cache):
        """No schedule gives placeholder timings and the fallback distance."""
        record = cache.get_or_compute(1, None, 1, 2)

        assert record.is_fallback
        assert record.departure_time == "06:00"
        assert record.arrival_time == "18:30"
        assert record.duration == "12h 30m"
        assert record.duration_minutes == 750
        assert record.halts == 0
        assert record.distance_km == 1200

    def test_reverse_direction(self, cache, rajdhani_route):
        """A backwards pair falls back rather than raising."""
        record = cache.get_or_compute(12951, rajdhani_route, 5, 1)

        assert record.is_fallback
        assert record.distance_km == 1200

    def test_configured_placeholders(self, rajdhani_route):
        """Placeholder timings come from configuration."""
        cache = ConsistencyCache(fallback=ScheduleFallbackConfig(
            departure_time="7:05", arrival_time="19:00", duration="11h 55m"))
        record = cache.get_or_compute(12951, rajdhani_route, 1, 99)

        assert record.departure_time == "07:05"
        assert record.duration == "11h 55m"

    def test_configuration_errors_propagate(self, shatabdi_route):
        """Fare configuration problems are not hidden by the fallback."""
        policy = Mock(wraps=FarePolicy())
        policy.quote_all_classes.side_effect = ConfigurationError("no fares")
        cache = ConsistencyCache(fare_policy=policy)

        with pytest.raises(ConfigurationError):
            cache.get_or_compute(12007, shatabdi_route, 6, 8)
        assert len(cache) == 0


class TestInvalidation:
    """Test invalidate, recompute and clear."""

    def test_invalidate_train(self, cache, rajdhani_route, shatabdi_route):
        """Only the given train's records are removed."""
        cache.get_or_compute(12951, rajdhani_route, 1, 5)
        cache.get_or_compute(12951, rajdhani_route, 2, 4)
        cache.get_or_compute(12007, shatabdi_route, 6, 8)

        assert cache.invalidate(12951) == 2
        assert cache.get(12951, 1, 5) is None
        assert cache.get(12007, 6, 8) is not None
        assert cache.invalidate(12951) == 0

    def test_invalidate_then_recompute(self, cache, rajdhani_route):
        """After invalidation the next request computes again."""
        first = cache.get_or_compute(12951, rajdhani_route, 1, 5)
        cache.invalidate(12951)
        second = cache.get_or_compute(12951, rajdhani_route, 1, 5)

        assert first is not second
        assert first == second
        assert cache.get_stats()["computations"] == 2

    def test_recompute_overwrites(self, cache, rajdhani_route):
        """recompute() replaces the stored record."""
        first = cache.get_or_compute(12951, rajdhani_route, 1, 5)
        second = cache.recompute(12951, rajdhani_route, 1, 5)

        assert second is not first
        assert cache.get(12951, 1, 5) is second

    def test_clear(self, cache, rajdhani_route):
        """clear() empties the cache and its statistics."""
        cache.get_or_compute(12951, rajdhani_route, 1, 5)
        cache.clear()

        assert len(cache) == 0
        assert cache.get_stats() == {
            'size': 0, 'hits': 0, 'misses': 0, 'computations': 0, 'hit_rate': 0,
        }


class TestConcurrency:
    """Test concurrent access."""

    def test_concurrent_requests_share_one_record(self, rajdhani_route):
        """Many threads asking for one key see a single computation."""
        policy = Mock(wraps=FarePolicy())
        cache = ConsistencyCache(fare_policy=policy)
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            record = cache.get_or_compute(12951, rajdhani_route, 1, 5)
            with lock:
                results.append(record)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(record is results[0] for record in results)
        assert policy.quote_all_classes.call_count == 1
