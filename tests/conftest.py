# shared fixtures: json payloads from tests/data and a client double that never touches the network

import copy
import json
from pathlib import Path
import pytest
from weatherview.client import CityNotFoundError, WeatherAPIError

DATA = Path(__file__).parent / "data"

def load_payload(name):
    return json.loads((DATA / name).read_text())

class FakeClient:
    def __init__(self, cities=None, groups=None):
        # values are payload dicts or exceptions to raise
        self.cities = cities or {}
        self.groups = groups or {}
        self.calls = []

    def get_current_weather(self, city, unit):
        self.calls.append(("weather", city, unit))
        result = self.cities.get(city, CityNotFoundError(f"No match for {city!r}"))
        if isinstance(result, Exception):
            raise result
        return copy.deepcopy(result)

    def get_group(self, city_ids, unit):
        key = tuple(city_ids)
        self.calls.append(("group", key, unit))
        result = self.groups.get(key, WeatherAPIError(f"HTTP 500 for group {key}"))
        if isinstance(result, Exception):
            raise result
        return copy.deepcopy(result)

def city(name, temp, description="clear sky"):
    return {
        "id": abs(hash(name)) % 10_000_000,
        "name": name,
        "main": {"temp": temp, "humidity": 50},
        "weather": [{"id": 800, "main": "Clear", "description": description}],
        "wind": {"speed": 1.0},
    }

@pytest.fixture
def london():
    return load_payload("london.json")

@pytest.fixture
def group_region():
    return load_payload("group_region.json")
