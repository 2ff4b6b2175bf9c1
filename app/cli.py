"""
app/cli.py

Command-line front end over the same client and store the API uses.
- weather CITY : print current conditions and the 5-day forecast, record CITY in history
- history      : list saved searches
- forget ID    : delete a saved search

Usage:
  python -m app.cli weather Paris
  python -m app.cli history
  python -m app.cli forget 3f2b...

Environment: see util/config.py
"""

import argparse
import sys

from history.store import HistoryStore
from util.config import Settings
from util.logging import setup_logging
from weather.client import WeatherClient
from weather.errors import DuplicateError, HistoryError, WeatherError


def _format_record(record):
    return (
        f"{record.date}  {record.temperature_f:6.2f}°F  wind {record.wind_speed} m/s  "
        f"humidity {record.humidity_percent}%  {record.description}"
    )


def cmd_weather(client, store, city):
    records = client.resolve_weather(city)
    current, forecast = records[0], records[1:]
    print(f"{current.city} now: {_format_record(current)}")
    for day in forecast:
        print(f"  {_format_record(day)}")
    try:
        store.add(city)
    except DuplicateError:
        pass
    return 0


def cmd_history(store):
    entries = store.list()
    if not entries:
        print("No saved searches.")
    for entry in entries:
        print(f"{entry.id}  {entry.name}")
    return 0


def cmd_forget(store, entry_id):
    store.remove(entry_id)
    print(f"Removed {entry_id}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="city-weather", description="City weather and search history")
    sub = parser.add_subparsers(dest="command", required=True)
    p_weather = sub.add_parser("weather", help="current weather and 5-day forecast")
    p_weather.add_argument("city", nargs="+")
    sub.add_parser("history", help="list saved searches")
    p_forget = sub.add_parser("forget", help="delete a saved search")
    p_forget.add_argument("id")
    return parser


def main(argv=None, settings=None, client=None, store=None):
    args = build_parser().parse_args(argv)
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)
    client = client or WeatherClient.from_settings(settings)
    store = store or HistoryStore.from_settings(settings)

    try:
        if args.command == "weather":
            return cmd_weather(client, store, " ".join(args.city))
        if args.command == "history":
            return cmd_history(store)
        return cmd_forget(store, args.id)
    except (WeatherError, HistoryError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
