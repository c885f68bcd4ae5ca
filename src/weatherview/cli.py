# connects terminal input to a WeatherSession and prints the rendered state.

from __future__ import annotations
import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional
from rich.console import Console
from .client import WeatherAPIError
from .config import ConfigError, load_settings, parse_unit
from .render import render_chart, render_history, render_state
from .session import WeatherSession

logger = logging.getLogger(__name__)

HELP = """commands:
  search <city>    look up current weather
  toggle           switch between metric and imperial
  regions          reload and list regions
  hover <region>   show the temperature chart of a region
  leave            hide the chart
  history          show recent searches
  quit             exit"""

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="weatherview", description="Weather lookup in the terminal")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--unit", type=parse_unit, default=None, help="metric or imperial")
    parser.add_argument("--no-color", action="store_true", help="disable colours")
    sub = parser.add_subparsers(dest="command")

    search = sub.add_parser("search", help="current weather for a city")
    search.add_argument("city", nargs="+")

    regions = sub.add_parser("regions", help="list the configured regions")
    regions.add_argument("--chart", action="store_true", help="print a chart for every region")

    sub.add_parser("interactive", help="interactive session (default)")
    return parser

def run_interactive(session: WeatherSession, console: Console) -> None:
    console.print(render_state(session.state))
    console.print(HELP, markup=False)
    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            break
        if not line:
            continue
        command, _, arg = line.partition(" ")
        command = command.lower()
        if command in ("quit", "exit"):
            break
        if command == "search":
            session.search(arg)
        elif command == "toggle":
            session.toggle_unit()
        elif command == "regions":
            session.load_regions()
        elif command == "hover":
            name = arg.strip()
            if session.state.region_named(name) is None:
                console.print(f"Unknown region {name!r}", markup=False)
                continue
            session.hover(name)
        elif command == "leave":
            session.leave()
        elif command == "history":
            # shown even before the first search
            console.print(render_history(session.state.history, session.state.unit))
            continue
        else:
            console.print(HELP, markup=False)
            continue
        chart = session.chart.spec if session.chart else None
        console.print(render_state(session.state, chart))

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        settings = load_settings()
        if args.unit is not None:
            settings = replace(settings, unit=args.unit)
        # one-shot search does not need the region list
        session = WeatherSession.from_settings(settings, autoload=args.command != "search")
    except (ConfigError, WeatherAPIError) as exc:
        logger.error("%s", exc)
        return 2

    # colour is dropped automatically when stdout is not a terminal
    console = Console(no_color=args.no_color, highlight=False)
    if args.command == "search":
        state = session.search(" ".join(args.city))
        console.print(render_state(state))
        return 1 if state.error else 0
    if args.command == "regions":
        console.print(render_state(session.state))
        if args.chart:
            for region in session.state.regions:
                with session.chart_slot.acquire(region) as chart:
                    console.print()
                    console.print(render_chart(chart.spec))
        return 0

    run_interactive(session, console)
    return 0

if __name__ == "__main__":
    sys.exit(main())
