# explicit session state and a pure reducer: reduce(state, event) -> state
# every fetch carries a request id and responses for an older id are discarded

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple, Union
from .models import (
    CurrentWeather,
    RecentSearchEntry,
    RegionSummary,
    SearchNotFound,
    SearchResult,
    SearchSuccess,
    WeatherUnit,
)
from .service import push_history

@dataclass(frozen=True)
class AppState:
    unit: WeatherUnit = WeatherUnit.METRIC
    current: Optional[CurrentWeather] = None
    error: Optional[str] = None
    history: Tuple[RecentSearchEntry, ...] = ()
    show_history: bool = False
    regions: Tuple[RegionSummary, ...] = ()
    hovered: Optional[RegionSummary] = None
    search_request_id: int = 0
    region_request_id: int = 0

    def region_named(self, name: str) -> Optional[RegionSummary]:
        for region in self.regions:
            if region.name == name:
                return region
        return None

@dataclass(frozen=True)
class SearchStarted:
    query: str

@dataclass(frozen=True)
class SearchFinished:
    request_id: int
    result: SearchResult

@dataclass(frozen=True)
class UnitToggled:
    pass

@dataclass(frozen=True)
class RegionsRequested:
    pass

@dataclass(frozen=True)
class RegionsLoaded:
    request_id: int
    regions: Sequence[RegionSummary]

@dataclass(frozen=True)
class RegionHovered:
    name: str

@dataclass(frozen=True)
class HoverCleared:
    pass

Event = Union[
    SearchStarted,
    SearchFinished,
    UnitToggled,
    RegionsRequested,
    RegionsLoaded,
    RegionHovered,
    HoverCleared,
]

def _finish_search(state: AppState, event: SearchFinished) -> AppState:
    if event.request_id != state.search_request_id:
        return state
    result = event.result
    if isinstance(result, SearchSuccess):
        return replace(
            state,
            current=result.weather,
            error=None,
            history=push_history(state.history, result.entry),
        )
    if isinstance(result, SearchNotFound):
        # history is left as it was
        return replace(state, current=None, error=result.message)
    raise TypeError(f"Unknown search result {result!r}")

def _load_regions(state: AppState, event: RegionsLoaded) -> AppState:
    if event.request_id != state.region_request_id:
        return state
    regions = tuple(event.regions)
    hovered = None
    if state.hovered is not None:
        # keep the pointer on the same region across a reload
        hovered = next((r for r in regions if r.name == state.hovered.name), None)
    return replace(state, regions=regions, hovered=hovered)

def reduce(state: AppState, event: Event) -> AppState:
    if isinstance(event, SearchStarted):
        return replace(
            state,
            search_request_id=state.search_request_id + 1,
            show_history=True,
        )
    if isinstance(event, SearchFinished):
        return _finish_search(state, event)
    if isinstance(event, UnitToggled):
        # the stored search is re-derived from celsius, old-unit regions wait for the re-fetch
        return replace(
            state,
            unit=state.unit.toggled(),
            region_request_id=state.region_request_id + 1,
            regions=(),
            hovered=None,
        )
    if isinstance(event, RegionsRequested):
        return replace(state, region_request_id=state.region_request_id + 1)
    if isinstance(event, RegionsLoaded):
        return _load_regions(state, event)
    if isinstance(event, RegionHovered):
        region = state.region_named(event.name)
        if region is None:
            return state
        return replace(state, hovered=region)
    if isinstance(event, HoverCleared):
        return replace(state, hovered=None)
    raise TypeError(f"Unknown event {event!r}")
