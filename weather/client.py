"""
weather/client.py

Geocoding and forecast client for an OpenWeatherMap-compatible provider.

- geocode_city(name): resolve a city name to Coordinates via /geo/1.0/direct
- fetch_forecast(coords): fetch the 3-hourly forecast series via /data/2.5/forecast
- resolve_weather(name): both calls in sequence, reduced to [current, *forecast]

Two outbound calls per lookup; nothing is cached or retried.
"""

from __future__ import annotations

import logging

import requests

from util.http import get_json
from weather.errors import FetchError
from weather.models import Coordinates, WeatherRecord
from weather.reducer import reduce_series

logger = logging.getLogger(__name__)

GEOCODE_PATH = "/geo/1.0/direct"
FORECAST_PATH = "/data/2.5/forecast"


def _status_of(exc):
    response = getattr(exc, "response", None)
    return getattr(response, "status_code", None)


class WeatherClient:
    def __init__(self, base_url="", api_key="", timeout=None):
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key or ""
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> WeatherClient:
        return cls(settings.api_base_url, settings.api_key, timeout=settings.http_timeout)

    def _get(self, stage, path, params):
        try:
            return get_json(
                f"{self.base_url}{path}",
                params={**params, "appid": self.api_key},
                timeout=self.timeout,
            )
        except requests.HTTPError as exc:
            status = _status_of(exc)
            logger.error(f"Provider returned HTTP {status} during {stage}")
            raise FetchError(stage, "Provider rejected the request", status=status) from exc
        except ValueError as exc:
            # requests' JSONDecodeError is both a ValueError and a RequestException
            logger.error(f"Malformed JSON body during {stage}: {exc}")
            raise FetchError(stage, "Provider returned a malformed body") from exc
        except requests.RequestException as exc:
            logger.error(f"Network failure during {stage}: {exc}")
            raise FetchError(stage, f"Network failure: {exc}") from exc

    def geocode_city(self, name) -> Coordinates:
        """Return Coordinates for a city name.

        Raises FetchError(stage="geocode") when the call fails or nothing matches.
        """
        name = (name or "").strip()
        if not name:
            raise FetchError("geocode", "City name is required")
        data = self._get("geocode", GEOCODE_PATH, {"q": name, "limit": 1})
        if not isinstance(data, list) or not data:
            logger.error(f"No geocoding match for {name!r}")
            raise FetchError("geocode", f"No coordinates found for {name!r}")
        top = data[0]
        try:
            return Coordinates(lat=float(top["lat"]), lon=float(top["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            logger.error(f"Geocoding entry without coordinates for {name!r}: {top!r}")
            raise FetchError("geocode", "Geocoding response lacks coordinates") from exc

    def fetch_forecast(self, coords) -> list[dict]:
        """Return the provider's time-ordered forecast series for coordinates."""
        data = self._get("forecast", FORECAST_PATH, {"lat": coords.lat, "lon": coords.lon})
        if not isinstance(data, dict):
            logger.error(f"Forecast body is not an object: {type(data).__name__}")
            raise FetchError("forecast", "Forecast response is not an object")
        series = data.get("list")
        if not isinstance(series, list) or not series:
            logger.error(f"Empty forecast series for {coords}")
            raise FetchError("empty-result", "No weather data available")
        return series

    def resolve_weather(self, name) -> list[WeatherRecord]:
        """Current conditions followed by up to five forecast days for a city."""
        city = (name or "").strip()
        coords = self.geocode_city(city)
        series = self.fetch_forecast(coords)
        current, forecast = reduce_series(series, city)
        logger.info(f"Resolved weather for {city!r}: {len(forecast)} forecast days")
        return [current, *forecast]
