# one ui session: owns the state, dispatches events and keeps the chart slot in step with hover

from __future__ import annotations
import logging
from typing import Optional, Sequence
from .chart import Chart, ChartSlot
from .client import OpenWeatherClient
from .config import Settings
from .models import WeatherUnit
from .service import fetch_regions, search_city
from .state import (
    AppState,
    Event,
    HoverCleared,
    RegionHovered,
    RegionsLoaded,
    RegionsRequested,
    SearchFinished,
    SearchStarted,
    UnitToggled,
    reduce,
)

logger = logging.getLogger(__name__)

class WeatherSession:
    def __init__(
        self,
        client: OpenWeatherClient,
        region_ids: Sequence[Sequence[int]] = (),
        unit: WeatherUnit = WeatherUnit.METRIC,
        max_workers: int = 8,
        autoload: bool = True,
    ):
        self.client = client
        self.region_ids = tuple(tuple(ids) for ids in region_ids)
        self.max_workers = max_workers
        self.chart_slot = ChartSlot()
        self.state = AppState(unit=unit)
        if autoload:
            self.load_regions()

    @classmethod
    def from_settings(cls, settings: Settings, autoload: bool = True) -> "WeatherSession":
        return cls(
            OpenWeatherClient.from_settings(settings),
            region_ids=settings.region_ids,
            unit=settings.unit,
            max_workers=settings.max_workers,
            autoload=autoload,
        )

    @property
    def chart(self) -> Optional[Chart]:
        return self.chart_slot.chart

    def dispatch(self, event: Event) -> AppState:
        previous = self.state.hovered
        self.state = reduce(self.state, event)
        if self.state.hovered is not previous:
            if self.state.hovered is None:
                self.chart_slot.release()
            else:
                self.chart_slot.show(self.state.hovered)
        return self.state

    def search(self, city: str) -> AppState:
        query = city.strip()
        if not query:
            return self.state
        self.dispatch(SearchStarted(query))
        request_id = self.state.search_request_id
        result = search_city(self.client, query, self.state.unit)
        return self.dispatch(SearchFinished(request_id, result))

    def load_regions(self) -> AppState:
        self.dispatch(RegionsRequested())
        request_id = self.state.region_request_id
        regions = fetch_regions(self.client, self.region_ids, self.state.unit, self.max_workers)
        return self.dispatch(RegionsLoaded(request_id, regions))

    def toggle_unit(self) -> AppState:
        self.dispatch(UnitToggled())
        logger.debug("Unit switched to %s, reloading regions", self.state.unit.value)
        return self.load_regions()

    def hover(self, name: str) -> AppState:
        return self.dispatch(RegionHovered(name))

    def leave(self) -> AppState:
        return self.dispatch(HoverCleared())
