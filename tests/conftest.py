"""Pytest fixtures: provider payloads, a fake HTTP layer and a temp history store."""

import calendar
from datetime import datetime, timedelta

import pytest
import requests

from history.store import HistoryStore
from weather.models import WeatherRecord


def make_entry(dt_txt, temp=293.15, humidity=50, wind=3.5, icon="01d", description="clear sky"):
    """One provider forecast entry; `dt` is derived from `dt_txt` (UTC)."""
    stamp = datetime.strptime(dt_txt, "%Y-%m-%d %H:%M:%S")
    return {
        "dt": calendar.timegm(stamp.timetuple()),
        "dt_txt": dt_txt,
        "main": {"temp": temp, "humidity": humidity},
        "weather": [{"icon": icon, "description": description}],
        "wind": {"speed": wind},
    }


def make_series(start="2024-05-01 00:00:00", days=6, step_hours=3):
    """3-hourly series covering `days` calendar days starting at `start`."""
    first = datetime.strptime(start, "%Y-%m-%d %H:%M:%S")
    end = datetime(first.year, first.month, first.day) + timedelta(days=days)
    series = []
    t = first
    while t < end:
        series.append(make_entry(t.strftime("%Y-%m-%d %H:%M:%S"), temp=280.0 + len(series) * 0.1))
        t += timedelta(hours=step_hours)
    return series


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self.payload = payload
        self.status_code = status_code
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeProvider:
    """Stands in for requests.get; routes by URL suffix and records every call."""

    def __init__(self, geocode=None, forecast=None):
        self.geocode = geocode if geocode is not None else FakeResponse([{"name": "Paris", "lat": 48.85, "lon": 2.35}])
        self.forecast = forecast if forecast is not None else FakeResponse({"list": make_series()})
        self.calls = []

    def __call__(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        route = self.geocode if url.endswith("/geo/1.0/direct") else self.forecast
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture
def provider(monkeypatch):
    fake = FakeProvider()
    monkeypatch.setattr(requests, "get", fake)
    return fake


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path / "data" / "searchHistory.json")


def sample_records(city="Paris", days=5):
    dates = [f"2024-05-0{i}" for i in range(1, days + 1)]
    current = WeatherRecord(city, dates[0], "01d", "clear sky", 68.0, 3.5, 50)
    return [current] + [WeatherRecord(city, d, "02d", "few clouds", 70.25, 4.0, 55) for d in dates]


class FakeClient:
    def __init__(self, records=None, error=None):
        self.records = records
        self.error = error
        self.cities = []

    def resolve_weather(self, name):
        self.cities.append(name)
        if self.error is not None:
            raise self.error
        return self.records if self.records is not None else sample_records(name)
