# rich views of the session state; the caller's Console decides on colour and terminal width

from __future__ import annotations
from typing import List, Sequence
from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text
from .chart import ChartSpec
from .models import (
    CurrentWeather,
    RecentSearchEntry,
    WeatherUnit,
    format_number,
    format_speed,
    format_temperature,
    temperature_color,
)
from .state import AppState

BAR_WIDTH = 40

def temperature_text(celsius: float, unit: WeatherUnit) -> Text:
    return Text(
        f"{format_temperature(celsius, unit)} {unit.temperature_symbol}",
        style=temperature_color(celsius),
    )

def speed_text(ms: float, unit: WeatherUnit) -> str:
    return f"{format_speed(ms, unit)} {unit.speed_symbol}"

def render_current(current: CurrentWeather, unit: WeatherUnit) -> Table:
    table = Table(title=Text(current.name), show_header=False, box=None, title_justify="left")
    table.add_column("field", style="cyan")
    table.add_column("value")
    table.add_row("Temperature:", temperature_text(current.temperature, unit))
    table.add_row("Weather:", Text(current.description))
    table.add_row("Wind Speed:", speed_text(current.wind_speed, unit))
    return table

def render_history(history: Sequence[RecentSearchEntry], unit: WeatherUnit) -> Table:
    table = Table(title="Recent Searches", title_justify="left")
    table.add_column("Name", style="bold")
    table.add_column("Temperature")
    table.add_column("Weather")
    table.add_column("Wind Speed")
    for entry in history:
        table.add_row(
            Text(entry.name),
            temperature_text(entry.temperature, unit),
            Text(entry.description),
            speed_text(entry.wind_speed, unit),
        )
    return table

def render_chart(spec: ChartSpec) -> Text:
    if not spec.values:
        return Text(spec.y_title)
    top = max(max(spec.values), 0) or 1
    width = max(len(label) for label in spec.labels)
    lines = [f"{spec.y_title} by {spec.x_title.lower()}"]
    for label, value in zip(spec.labels, spec.values):
        bar = "#" * int(round(max(value, 0) / top * BAR_WIDTH))
        lines.append(f"{label.ljust(width)} | {bar} {format_number(value)}")
    return Text("\n".join(lines))

def render_regions(state: AppState) -> Text:
    text = Text("Regions")
    for region in state.regions:
        marker = "* " if region is state.hovered else "  "
        text.append(f"\n{marker}{region.name}", style="bold" if region is state.hovered else None)
    return text

def render_state(state: AppState, chart: ChartSpec | None = None) -> Group:
    blocks: List[RenderableType] = []
    if state.error:
        blocks.append(Text(state.error, style="bold red"))
    if state.current is not None:
        blocks.append(render_current(state.current, state.unit))
    if state.show_history:
        blocks.append(render_history(state.history, state.unit))
    if state.regions:
        blocks.append(render_regions(state))
    if chart is not None:
        blocks.append(render_chart(chart))
    return Group(*blocks)
