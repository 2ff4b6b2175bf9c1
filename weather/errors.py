"""
weather/errors.py

Exceptions raised by the weather pipeline and the history store.
Wrapping sites chain the underlying cause with `raise ... from exc`.
"""

FETCH_STAGES = ("geocode", "forecast", "empty-result")


class WeatherError(Exception):
    """Base class for weather lookup failures."""


class FetchError(WeatherError):
    """Provider call failed; `stage` tells which step."""

    def __init__(self, stage, message, status=None):
        if stage not in FETCH_STAGES:
            raise ValueError(f"unknown fetch stage: {stage!r}")
        super().__init__(message)
        self.stage = stage
        self.message = message
        self.status = status

    def __str__(self):
        if self.status is not None:
            return f"[{self.stage}] {self.message} (HTTP {self.status})"
        return f"[{self.stage}] {self.message}"


class ReduceError(WeatherError):
    """Forecast payload did not have the expected shape."""


class HistoryError(Exception):
    """Base class for search history failures."""


class DuplicateError(HistoryError):
    def __init__(self, name):
        super().__init__(f'City "{name}" already exists in history.')
        self.name = name


class NotFoundError(HistoryError):
    def __init__(self, entry_id):
        super().__init__(f'City with ID "{entry_id}" not found.')
        self.entry_id = entry_id
