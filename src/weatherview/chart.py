# hover bar chart: a renderer-agnostic spec plus the single render target it occupies

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
from .models import RegionSummary

CHART_TARGET = "city-temperature-chart"

@dataclass(frozen=True)
class ChartSpec:
    labels: Tuple[str, ...]
    values: Tuple[float, ...]
    y_title: str
    x_title: str = "Cities"
    kind: str = "bar"
    begin_at_zero: bool = True

def build_chart(region: RegionSummary) -> ChartSpec:
    # values stay in the unit the region was fetched in
    return ChartSpec(
        labels=tuple(city.name for city in region.cities),
        values=tuple(city.temp for city in region.cities),
        y_title=f"Temperature ({region.unit.temperature_symbol})",
    )

class Chart:
    def __init__(self, target: str, spec: ChartSpec):
        self.target = target
        self.spec = spec
        self.destroyed = False

    def destroy(self) -> None:
        self.destroyed = True

class ChartSlot:
    """Owns one render target; at most one live chart points at it."""

    def __init__(self, target: str = CHART_TARGET):
        self.target = target
        self._chart: Optional[Chart] = None

    @property
    def chart(self) -> Optional[Chart]:
        return self._chart

    def release(self) -> None:
        if self._chart is not None:
            self._chart.destroy()
            self._chart = None

    def show(self, region: RegionSummary) -> Chart:
        # destroy before recreate
        self.release()
        self._chart = Chart(self.target, build_chart(region))
        return self._chart

    @contextmanager
    def acquire(self, region: RegionSummary) -> Iterator[Chart]:
        chart = self.show(region)
        try:
            yield chart
        finally:
            if self._chart is chart:
                self.release()
