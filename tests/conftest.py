"""
Global pytest configuration and fixtures.
"""

import json
import tempfile
import pytest
from datetime import time
from pathlib import Path

from railfare.cache.consistency_cache import ConsistencyCache
from railfare.core.models.schedule import Route, Stop
from railfare.core.services.json_schedule_repository import JsonScheduleRepository
from railfare.core.services.service_factory import ServiceFactory
from railfare.managers.config_manager import EngineConfig

DELHI = 1
KOTA = 2
VADODARA = 3
SURAT = 4
MUMBAI = 5
BANGALORE = 6
KATPADI = 7
CHENNAI = 8


@pytest.fixture
def network_data():
    """Provide a small network: an overnight Rajdhani and a same-day Shatabdi."""
    return {
        "stations": [
            {"id": DELHI, "name": "New Delhi"},
            {"id": KOTA, "name": "Kota Junction"},
            {"id": VADODARA, "name": "Vadodara Junction"},
            {"id": SURAT, "name": "Surat"},
            {"id": MUMBAI, "name": "Mumbai Central"},
            {"id": BANGALORE, "name": "Bangalore City"},
            {"id": KATPADI, "name": "Katpadi Junction"},
            {"id": CHENNAI, "name": "Chennai Central"},
        ],
        "trains": [
            {
                "id": 12951,
                "name": "Mumbai Rajdhani",
                "stops": [
                    {"station_id": DELHI, "sequence_order": 1, "day_number": 1,
                     "arrival_time": None, "departure_time": "16:55"},
                    {"station_id": KOTA, "sequence_order": 2, "day_number": 1,
                     "arrival_time": "21:30", "departure_time": "21:40"},
                    {"station_id": VADODARA, "sequence_order": 3, "day_number": 2,
                     "arrival_time": "03:23", "departure_time": "03:33"},
                    {"station_id": SURAT, "sequence_order": 4, "day_number": 2,
                     "arrival_time": "05:10", "departure_time": "05:15"},
                    {"station_id": MUMBAI, "sequence_order": 5, "day_number": 2,
                     "arrival_time": "08:35", "departure_time": None},
                ],
            },
            {
                "id": 12007,
                "name": "Chennai Shatabdi Express",
                "stops": [
                    {"station_id": BANGALORE, "sequence_order": 1, "day_number": 1,
                     "arrival_time": None, "departure_time": "06:00"},
                    {"station_id": KATPADI, "sequence_order": 2, "day_number": 1,
                     "arrival_time": "10:30", "departure_time": "10:32"},
                    {"station_id": CHENNAI, "sequence_order": 3, "day_number": 1,
                     "arrival_time": "13:00", "departure_time": None},
                ],
            },
        ],
    }


@pytest.fixture
def rajdhani_route():
    """Overnight route New Delhi -> Mumbai Central."""
    return Route(
        train_id=12951,
        train_name="Mumbai Rajdhani",
        stops=(
            Stop(DELHI, 1, 1, None, time(16, 55)),
            Stop(KOTA, 2, 1, time(21, 30), time(21, 40)),
            Stop(VADODARA, 3, 2, time(3, 23), time(3, 33)),
            Stop(SURAT, 4, 2, time(5, 10), time(5, 15)),
            Stop(MUMBAI, 5, 2, time(8, 35), None),
        ),
    )


@pytest.fixture
def shatabdi_route():
    """Same-day route Bangalore City -> Chennai Central, 7h end to end (350 km at 50 km/h)."""
    return Route(
        train_id=12007,
        train_name="Chennai Shatabdi Express",
        stops=(
            Stop(BANGALORE, 1, 1, None, time(6, 0)),
            Stop(KATPADI, 2, 1, time(10, 30), time(10, 32)),
            Stop(CHENNAI, 3, 1, time(13, 0), None),
        ),
    )


@pytest.fixture
def engine_config():
    """Provide the default engine configuration."""
    return EngineConfig()


@pytest.fixture
def repository(network_data):
    """Provide a repository over the test network."""
    return JsonScheduleRepository(data=network_data)


@pytest.fixture
def cache():
    """Provide a consistency cache with default collaborators."""
    return ConsistencyCache()


@pytest.fixture
def factory(engine_config, repository):
    """Provide a service factory wired to the test network."""
    return ServiceFactory(engine_config, schedule_repository=repository)


@pytest.fixture
def temp_network_file(network_data):
    """Provide the test network as a temporary JSON file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        json.dump(network_data, f, indent=2)
        temp_path = f.name

    yield temp_path

    Path(temp_path).unlink(missing_ok=True)


@pytest.fixture
def temp_config_path():
    """Provide a path for a config file that does not exist yet."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir) / "Railfare" / "config.json"
