"""
scripts/check_cities.py

Live smoke check against the configured weather provider.

Resolves a few cities and checks each result:
- Exactly 1 current record plus between 1 and 5 forecast days
- Forecast days are distinct and in ascending order
- Temperatures are plausible Fahrenheit values, humidity is 0-100

Usage:
  API_BASE_URL=https://api.openweathermap.org API_KEY=... python3 scripts/check_cities.py [CITY ...]
"""

from __future__ import annotations

import os
import sys


# Allow imports from project root
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from util.config import Settings
from util.logging import setup_logging
from weather.client import WeatherClient
from weather.errors import WeatherError


DEFAULT_CITIES = ["Paris", "Tokyo", "New York", "Sydney"]


def check(records) -> dict[str, bool]:
    forecast = records[1:]
    days = [r.date for r in forecast]
    return {
        "shape": 1 <= len(forecast) <= 5,
        "distinct_days": len(days) == len(set(days)),
        "ordered_days": days == sorted(days),
        "plausible_temp": all(-100.0 < r.temperature_f < 150.0 for r in records),
        "humidity_range": all(0 <= r.humidity_percent <= 100 for r in records),
    }


def main(argv=None):
    cities = (argv if argv is not None else sys.argv[1:]) or DEFAULT_CITIES
    settings = Settings.from_env()
    setup_logging("WARNING")
    client = WeatherClient.from_settings(settings)

    ok = True
    for city in cities:
        try:
            flags = check(client.resolve_weather(city))
        except WeatherError as exc:
            print(f"{city}: ERROR {exc}")
            ok = False
            continue
        print(f"{city}: " + ", ".join(f"{k}={'OK' if v else 'FAIL'}" for k, v in flags.items()))
        ok = ok and all(flags.values())
    if not ok:
        sys.exit(2)


if __name__ == "__main__":
    main()
