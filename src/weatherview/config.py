# settings come from the environment; a local .env is read first for development

from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import Mapping, Tuple
from dotenv import load_dotenv
from .models import WeatherUnit

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
# one region per entry; "+" groups several city ids into the same region
DEFAULT_REGION_IDS = "1273294,1275339,1264527,1258526,1275004,1275817,1279259,1255634"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 8

class ConfigError(ValueError):
    pass

@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    unit: WeatherUnit = WeatherUnit.METRIC
    region_ids: Tuple[Tuple[int, ...], ...] = field(default_factory=tuple)
    timeout: float = DEFAULT_TIMEOUT
    max_workers: int = DEFAULT_MAX_WORKERS

def parse_region_ids(raw: str) -> Tuple[Tuple[int, ...], ...]:
    regions = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            ids = tuple(int(part) for part in chunk.split("+") if part.strip())
        except ValueError as exc:
            raise ConfigError(f"Invalid region id in {chunk!r}") from exc
        if ids:
            regions.append(ids)
    return tuple(regions)

def parse_unit(raw: str) -> WeatherUnit:
    try:
        return WeatherUnit(raw.strip().lower())
    except ValueError as exc:
        raise ConfigError(f"Unknown unit {raw!r}, expected 'metric' or 'imperial'") from exc

def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    if env is None:
        load_dotenv()  # in production the variables are injected by the runtime
        env = os.environ

    api_key = env.get("OPENWEATHER_API_KEY", "").strip()
    if not api_key:
        # fail early rather than send unauthenticated requests
        raise ConfigError("OPENWEATHER_API_KEY not set")

    try:
        timeout = float(env.get("WEATHERVIEW_TIMEOUT", DEFAULT_TIMEOUT))
        max_workers = int(env.get("WEATHERVIEW_MAX_WORKERS", DEFAULT_MAX_WORKERS))
    except ValueError as exc:
        raise ConfigError(f"Invalid numeric setting: {exc}") from exc
    if timeout <= 0 or max_workers < 1:
        raise ConfigError("WEATHERVIEW_TIMEOUT must be > 0 and WEATHERVIEW_MAX_WORKERS >= 1")

    return Settings(
        api_key=api_key,
        base_url=env.get("OPENWEATHER_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        unit=parse_unit(env.get("WEATHERVIEW_UNIT", WeatherUnit.METRIC.value)),
        region_ids=parse_region_ids(env.get("WEATHERVIEW_REGION_IDS", DEFAULT_REGION_IDS)),
        timeout=timeout,
        max_workers=max_workers,
    )
