from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from history.store import HistoryStore
from util.config import Settings
from util.logging import setup_logging
from weather.client import WeatherClient
from weather.errors import DuplicateError, FetchError, NotFoundError, ReduceError

logger = logging.getLogger(__name__)


class WeatherRequest(BaseModel):
    cityName: str | None = None


def get_client(request: Request) -> WeatherClient:
    return request.app.state.weather_client


def get_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


def _error(status_code: int, kind: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": kind, "message": str(exc)})


def create_app(settings: Settings | None = None, client: WeatherClient | None = None,
               store: HistoryStore | None = None) -> FastAPI:
    """Build the API with one weather client and one history store shared by all requests."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="City Weather API")
    app.state.settings = settings
    app.state.weather_client = client or WeatherClient.from_settings(settings)
    app.state.history_store = store or HistoryStore.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(FetchError)
    async def _fetch_error(_request: Request, exc: FetchError):
        logger.error(f"Weather fetch failed: {exc}")
        return _error(502, "Failed to retrieve weather data", exc)

    @app.exception_handler(ReduceError)
    async def _reduce_error(_request: Request, exc: ReduceError):
        logger.error(f"Weather payload malformed: {exc}")
        return _error(500, "Failed to retrieve weather data", exc)

    @app.exception_handler(DuplicateError)
    async def _duplicate_error(_request: Request, exc: DuplicateError):
        logger.warning(str(exc))
        return _error(409, "Duplicate city", exc)

    @app.exception_handler(NotFoundError)
    async def _not_found_error(_request: Request, exc: NotFoundError):
        logger.warning(str(exc))
        return _error(404, "Not found", exc)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/api/weather")
    def weather(req: WeatherRequest, client: WeatherClient = Depends(get_client),
                store: HistoryStore = Depends(get_store)):
        city = (req.cityName or "").strip()
        if not city:
            return JSONResponse(status_code=400, content={"msg": "City name is required"})

        records = client.resolve_weather(city)

        try:
            store.add(city)
        except DuplicateError:
            logger.info(f"{city!r} already in history")

        return [r.to_dict() for r in records]

    @app.get("/api/weather/history")
    def history(store: HistoryStore = Depends(get_store)):
        return [e.to_dict() for e in store.list()]

    @app.delete("/api/weather/history/{entry_id}")
    def delete_history(entry_id: str, store: HistoryStore = Depends(get_store)):
        store.remove(entry_id)
        return {"message": "City deleted from history."}

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = Settings.from_env()
    setup_logging(_settings.log_level)
    uvicorn.run(create_app(_settings), host=_settings.host, port=_settings.port)
