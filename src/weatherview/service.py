# business rules.
# pure functions shape provider payloads (process_search, aggregate_regions, push_history)
# search_city and fetch_regions are the coordinators that touch the client

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence, Tuple
from .client import OpenWeatherClient, WeatherAPIError
from .models import (
    HISTORY_LIMIT,
    CityWeather,
    CurrentWeather,
    RecentSearchEntry,
    RegionSummary,
    SearchNotFound,
    SearchResult,
    SearchSuccess,
    WeatherUnit,
    to_celsius,
    to_metres_per_second,
)

logger = logging.getLogger(__name__)

# openweathermap single city shape: name, main.temp, weather[0].description, wind.speed
def process_search(payload: Dict[str, Any], unit: WeatherUnit) -> CurrentWeather:
    try:
        return CurrentWeather(
            name=str(payload["name"]),
            temperature=to_celsius(float(payload["main"]["temp"]), unit),
            description=str(payload["weather"][0]["description"]),
            wind_speed=to_metres_per_second(float(payload["wind"]["speed"]), unit),
        )
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ValueError(f"Unsupported payload shape for process_search(): {exc}") from exc

def recent_entry(current: CurrentWeather) -> RecentSearchEntry:
    return RecentSearchEntry(
        name=current.name,
        temperature=current.temperature,
        description=current.description,
        wind_speed=current.wind_speed,
    )

def push_history(
    history: Sequence[RecentSearchEntry],
    entry: RecentSearchEntry,
    limit: int = HISTORY_LIMIT,
) -> Tuple[RecentSearchEntry, ...]:
    # most recent first, the oldest falls off the end
    return (entry, *history[: limit - 1])

# single city path: fetch -> process; every failure mode becomes the same not-found result
def search_city(client: OpenWeatherClient, city: str, unit: WeatherUnit) -> SearchResult:
    try:
        payload = client.get_current_weather(city, unit)
        current = process_search(payload, unit)
    except (WeatherAPIError, ValueError) as exc:
        logger.info("Search for %r failed: %s", city, exc)
        return SearchNotFound(query=city)
    return SearchSuccess(weather=current, entry=recent_entry(current))

def shape_region(payload: Dict[str, Any], unit: WeatherUnit) -> Optional[RegionSummary]:
    if not isinstance(payload, dict):
        raise TypeError(f"region payload must be an object, got {type(payload).__name__}")
    records = payload.get("list") or []
    if not records:
        logger.warning("Dropping region payload with no cities")
        return None
    cities = []
    for c in records:
        # the chart needs a numeric temperature for every city
        float(c["main"]["temp"])
        cities.append(CityWeather(name=c["name"], main=c["main"], weather=c["weather"]))
    return RegionSummary(name=cities[0].name, cities=tuple(cities), unit=unit)

def aggregate_regions(
    responses: Sequence[Optional[Dict[str, Any]]],
    unit: WeatherUnit = WeatherUnit.METRIC,
) -> List[RegionSummary]:
    # None marks a failed fetch; survivors keep their request order
    regions: List[RegionSummary] = []
    for payload in responses:
        if payload is None:
            continue
        try:
            region = shape_region(payload, unit)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Dropping malformed region payload: %s", exc)
            continue
        if region is not None:
            regions.append(region)
    return regions

def fetch_region(
    client: OpenWeatherClient, city_ids: Sequence[int], unit: WeatherUnit
) -> Optional[Dict[str, Any]]:
    # small enough to submit straight to the pool
    try:
        return client.get_group(city_ids, unit)
    except WeatherAPIError as exc:
        logger.warning("Error fetching data for region %s: %s", ",".join(map(str, city_ids)), exc)
        return None

# one request per region, joined once all of them settle
def fetch_regions(
    client: OpenWeatherClient,
    region_ids: Sequence[Sequence[int]],
    unit: WeatherUnit,
    max_workers: int = 8,
) -> List[RegionSummary]:
    if not region_ids:
        return []
    workers = max(1, min(max_workers, len(region_ids)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(fetch_region, client, ids, unit) for ids in region_ids]
        responses = [fut.result() for fut in futures]
    regions = aggregate_regions(responses, unit)
    logger.debug("Loaded %d of %d regions (%s)", len(regions), len(region_ids), unit.value)
    return regions
