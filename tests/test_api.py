import pytest
from fastapi.testclient import TestClient

from api import create_app
from conftest import FakeClient
from util.config import Settings
from weather.errors import FetchError, ReduceError


@pytest.fixture
def weather_client():
    return FakeClient()


@pytest.fixture
def api(weather_client, store):
    app = create_app(settings=Settings(), client=weather_client, store=store)
    return TestClient(app)


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_post_weather_returns_records_and_records_history(api, weather_client, store):
    resp = api.post("/api/weather", json={"cityName": "Paris"})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 6
    assert body[0]["city"] == "Paris"
    assert set(body[0]) == {"city", "date", "icon", "description", "temperatureF", "windSpeed", "humidityPercent"}
    assert weather_client.cities == ["Paris"]
    assert [e.name for e in store.list()] == ["Paris"]


def test_repeat_lookup_still_succeeds_without_duplicate_history(api, store):
    assert api.post("/api/weather", json={"cityName": "Paris"}).status_code == 200
    assert api.post("/api/weather", json={"cityName": "paris"}).status_code == 200
    assert [e.name for e in store.list()] == ["Paris"]


@pytest.mark.parametrize("payload", [{}, {"cityName": ""}, {"cityName": "   "}])
def test_post_weather_requires_city(api, payload, weather_client):
    resp = api.post("/api/weather", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"msg": "City name is required"}
    assert weather_client.cities == []


def test_fetch_error_maps_to_502_and_skips_history(api, weather_client, store):
    weather_client.error = FetchError("geocode", "No coordinates found", status=404)
    resp = api.post("/api/weather", json={"cityName": "Atlantis"})

    assert resp.status_code == 502
    assert "geocode" in resp.json()["message"]
    assert store.list() == []


def test_reduce_error_maps_to_500(api, weather_client):
    weather_client.error = ReduceError("Malformed forecast entry")
    resp = api.post("/api/weather", json={"cityName": "Paris"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to retrieve weather data"


def test_history_list_and_delete(api, store):
    paris = store.add("Paris")
    tokyo = store.add("Tokyo")

    assert api.get("/api/weather/history").json() == [paris.to_dict(), tokyo.to_dict()]

    resp = api.delete(f"/api/weather/history/{tokyo.id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "City deleted from history."}
    assert api.get("/api/weather/history").json() == [paris.to_dict()]


def test_delete_unknown_id_is_404(api, store):
    store.add("Paris")
    resp = api.delete("/api/weather/history/nope")
    assert resp.status_code == 404
    assert len(store.list()) == 1


def test_history_empty_on_fresh_store(api):
    assert api.get("/api/weather/history").json() == []


def test_internal_value_error_is_not_a_client_error(weather_client, store):
    weather_client.error = ValueError("unexpected")
    app = create_app(settings=Settings(), client=weather_client, store=store)
    resp = TestClient(app, raise_server_exceptions=False).post("/api/weather", json={"cityName": "Paris"})

    assert resp.status_code == 500
    assert store.list() == []
