"""
weather/models.py

Value types passed between the client, the reducer and the history store.

Classes:
- Coordinates: geocoding result, consumed immediately by the forecast fetch.
- WeatherRecord: one current-conditions or forecast-day entry.
- HistoryEntry: one looked-up city in the persisted search history.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class WeatherRecord:
    city: str
    date: str  # ISO YYYY-MM-DD
    icon: str
    description: str
    temperature_f: float
    wind_speed: float
    humidity_percent: int

    def to_dict(self):
        """Wire shape returned by the API."""
        return {
            "city": self.city,
            "date": self.date,
            "icon": self.icon,
            "description": self.description,
            "temperatureF": self.temperature_f,
            "windSpeed": self.wind_speed,
            "humidityPercent": self.humidity_percent,
        }


@dataclass(frozen=True)
class HistoryEntry:
    name: str
    id: str

    def to_dict(self):
        return {"name": self.name, "id": self.id}

    @classmethod
    def from_dict(cls, raw) -> HistoryEntry:
        """Build an entry from a persisted object; raises ValueError if it is not one."""
        if not isinstance(raw, dict):
            raise ValueError(f"history entry is not an object: {raw!r}")
        name, entry_id = raw.get("name"), raw.get("id")
        if not isinstance(name, str) or not isinstance(entry_id, str):
            raise ValueError(f"history entry lacks name/id: {raw!r}")
        return cls(name=name, id=entry_id)
