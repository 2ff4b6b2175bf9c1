"""
weather/reducer.py

Reduce a provider forecast series into WeatherRecords.

Functions:
- round_cents(value): 2-place rounding, half away from zero on the exact binary value.
- kelvin_to_fahrenheit(k): Kelvin -> Fahrenheit rounded with round_cents.
- to_record(entry, city): map one series entry to a WeatherRecord.
- entry_day(entry): calendar date of an entry, taken from its text timestamp.
- reduce_series(series, city): (current, forecast) where forecast holds the first
  entry of each distinct day, capped at FORECAST_DAYS days.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal, ROUND_HALF_UP

from util.dates import text_to_iso_date, unix_to_iso_date
from weather.errors import ReduceError
from weather.models import WeatherRecord

logger = logging.getLogger(__name__)

FORECAST_DAYS = 5

_CENTS = Decimal("0.01")


def round_cents(value) -> float:
    """Round to two decimals the way JavaScript's `toFixed(2)` does.

    Works on the exact binary value and breaks ties away from zero, so
    0.125 -> 0.13, -0.125 -> -0.13 and 2.675 (stored as 2.67499...) -> 2.67.
    """
    return float(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP))


def kelvin_to_fahrenheit(kelvin) -> float:
    """Convert Kelvin to Fahrenheit rounded to two decimals.

    Raises ValueError for non-finite input and decimal.InvalidOperation when
    the result has too many digits to round.
    """
    kelvin = float(kelvin)
    if not math.isfinite(kelvin):
        raise ValueError(f"non-finite temperature: {kelvin!r}")
    return round_cents((kelvin - 273.15) * 9 / 5 + 32)


def to_record(entry, city) -> WeatherRecord:
    """Map one forecast series entry to a WeatherRecord.

    Raises ReduceError if a required field is missing or has the wrong type.
    """
    try:
        condition = entry["weather"][0]
        main = entry["main"]
        return WeatherRecord(
            city=city,
            date=unix_to_iso_date(entry["dt"]),
            icon=str(condition["icon"]),
            description=str(condition["description"]),
            temperature_f=kelvin_to_fahrenheit(main["temp"]),
            wind_speed=float(entry["wind"]["speed"]),
            humidity_percent=int(main["humidity"]),
        )
    except (KeyError, IndexError, TypeError, ValueError, ArithmeticError) as exc:
        raise ReduceError(f"Malformed forecast entry: {exc!r}") from exc


def entry_day(entry) -> str:
    """Calendar date from the `dt_txt` text timestamp (not `dt`, to avoid timezone drift)."""
    try:
        return text_to_iso_date(entry["dt_txt"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ReduceError(f"Malformed forecast timestamp: {exc!r}") from exc


def reduce_series(series, city="") -> tuple[WeatherRecord, list[WeatherRecord]]:
    """Return (current, forecast) for a time-ordered forecast series."""
    if not isinstance(series, (list, tuple)) or not series:
        raise ReduceError("Forecast series is empty or not a list")

    current = to_record(series[0], city)

    forecast: list[WeatherRecord] = []
    seen_days: set[str] = set()
    for entry in series:
        if len(seen_days) >= FORECAST_DAYS:
            break
        day = entry_day(entry)
        if day in seen_days:
            continue
        seen_days.add(day)
        forecast.append(to_record(entry, city))

    logger.debug(f"Reduced {len(series)} entries for {city!r} into {len(forecast)} forecast days")
    return current, forecast
