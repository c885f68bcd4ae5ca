# value objects and unit helpers, kept free of i/o so every consumer can share them

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple, Union

HISTORY_LIMIT = 5
NOT_FOUND_MESSAGE = "City not found. Please enter a valid city name."
MPH_IN_MS = 0.44704

class WeatherUnit(str, Enum):
    # the value is also the provider's "units" query parameter
    METRIC = "metric"
    IMPERIAL = "imperial"

    def toggled(self) -> "WeatherUnit":
        return WeatherUnit.IMPERIAL if self is WeatherUnit.METRIC else WeatherUnit.METRIC

    @property
    def temperature_symbol(self) -> str:
        return "°C" if self is WeatherUnit.METRIC else "°F"

    @property
    def speed_symbol(self) -> str:
        return "m/s" if self is WeatherUnit.METRIC else "mph"

@dataclass(frozen=True)
class CurrentWeather:
    # temperature in celsius and wind in m/s, whatever unit the fetch used
    name: str
    temperature: float
    description: str
    wind_speed: float

@dataclass(frozen=True)
class RecentSearchEntry:
    # snapshot taken at search time, never updated afterwards
    name: str
    temperature: float
    description: str
    wind_speed: float

@dataclass(frozen=True)
class CityWeather:
    # provider fields are passed through unshaped
    name: str
    main: Dict[str, Any]
    weather: List[Dict[str, Any]]

    @property
    def temp(self) -> float:
        return float(self.main["temp"])

@dataclass(frozen=True)
class RegionSummary:
    # name comes from the first city of the payload, not from the region id
    name: str
    cities: Tuple[CityWeather, ...]
    unit: WeatherUnit = WeatherUnit.METRIC

@dataclass(frozen=True)
class SearchSuccess:
    weather: CurrentWeather
    entry: RecentSearchEntry

@dataclass(frozen=True)
class SearchNotFound:
    query: str
    message: str = NOT_FOUND_MESSAGE

SearchResult = Union[SearchSuccess, SearchNotFound]

def to_celsius(value: float, unit: WeatherUnit) -> float:
    return (value - 32) * 5 / 9 if unit is WeatherUnit.IMPERIAL else value

def to_display(celsius: float, unit: WeatherUnit) -> float:
    # imperial display is rounded to 2 places, metric is shown as received
    if unit is WeatherUnit.IMPERIAL:
        return round(celsius * 9 / 5 + 32, 2)
    return celsius

def to_metres_per_second(value: float, unit: WeatherUnit) -> float:
    return value * MPH_IN_MS if unit is WeatherUnit.IMPERIAL else value

def speed_for_display(ms: float, unit: WeatherUnit) -> float:
    if unit is WeatherUnit.IMPERIAL:
        return round(ms / MPH_IN_MS, 2)
    return ms

def classify_temperature(celsius: float) -> str:
    # both thresholds are exclusive
    if celsius > 25:
        return "hot"
    if celsius < 10:
        return "cold"
    return "neutral"

BAND_COLORS = {"hot": "red", "cold": "blue", "neutral": "white"}

def temperature_color(celsius: float) -> str:
    return BAND_COLORS[classify_temperature(celsius)]

def format_number(value: float) -> str:
    # full precision, but integral values read "15" rather than "15.0"
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)

def format_temperature(celsius: float, unit: WeatherUnit) -> str:
    if unit is WeatherUnit.IMPERIAL:
        return f"{to_display(celsius, unit):.2f}"
    return format_number(celsius)

def format_speed(ms: float, unit: WeatherUnit) -> str:
    if unit is WeatherUnit.IMPERIAL:
        return f"{speed_for_display(ms, unit):.2f}"
    return format_number(ms)
