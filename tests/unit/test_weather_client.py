"""
Unit tests for forecast normalization and the weather client error paths
"""
import httpx
import pytest

from app.core.exceptions import ErrorCode, ExternalServiceError, ServiceNotConfiguredError
from app.services.weather_client import WeatherClient, normalize_forecast


def test_normalize_forecast_maps_entries_in_order():
    payload = {
        "list": [
            {
                "dt": 1767225600,
                "main": {"temp_min": 3.5, "temp_max": 8.1, "humidity": 71},
                "weather": [{"description": "light rain"}, {"description": "mist"}],
                "wind": {"speed": 4.2},
            },
            {"dt": 1767236400, "main": {"temp_min": 2.0, "temp_max": 6.4}},
        ]
    }

    forecast = normalize_forecast(payload)

    assert forecast[0] == {
        "date": "2026-01-01T00:00:00+00:00",
        "temperature": {"min": 3.5, "max": 8.1},
        "condition": "light rain",
        "humidity": 71,
        "wind_speed": 4.2,
    }
    assert forecast[1]["date"] == "2026-01-01T03:00:00+00:00"
    assert forecast[1]["condition"] == ""
    assert forecast[1]["wind_speed"] is None


def test_normalize_empty_payload():
    assert normalize_forecast({}) == []


def test_normalize_rejects_entry_without_temperatures():
    payload = {"list": [{"dt": 1767225600, "main": {"humidity": 70}, "weather": [{"description": "fog"}]}]}
    with pytest.raises(ValueError):
        normalize_forecast(payload)


@pytest.mark.asyncio
async def test_get_forecast_sends_city_country_and_key():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"list": []})

    client = WeatherClient(
        api_key="abc123",
        api_url="https://weather.test/data/2.5/",
        transport=httpx.MockTransport(handler),
    )
    assert await client.get_forecast("Oslo", "Norway") == []
    assert seen["path"] == "/data/2.5/forecast"
    assert seen["params"] == {"q": "Oslo,Norway", "appid": "abc123", "units": "metric"}


@pytest.mark.asyncio
async def test_get_forecast_returns_normalized_entries(weather_factory):
    forecast = await weather_factory().get_forecast("Lisbon", "Portugal")
    assert [day["condition"] for day in forecast] == ["light rain", "overcast clouds"]


@pytest.mark.asyncio
async def test_non_200_is_weather_provider_error(weather_factory):
    with pytest.raises(ExternalServiceError) as exc:
        await weather_factory(status_code=404, payload={"message": "city not found"}).get_forecast("Nowhere", "XX")
    assert exc.value.error_code == ErrorCode.WEATHER_PROVIDER_ERROR
    assert exc.value.details["status_code"] == 404
    assert exc.value.status_code == 502


@pytest.mark.asyncio
async def test_transport_failure_is_weather_provider_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = WeatherClient(api_key="k", transport=httpx.MockTransport(handler))
    with pytest.raises(ExternalServiceError) as exc:
        await client.get_forecast("Lisbon", "Portugal")
    assert exc.value.error_code == ErrorCode.WEATHER_PROVIDER_ERROR


@pytest.mark.asyncio
async def test_unexpected_payload_is_weather_provider_error(weather_factory):
    with pytest.raises(ExternalServiceError):
        await weather_factory(payload={"list": [{"main": {}}]}).get_forecast("Lisbon", "Portugal")


@pytest.mark.asyncio
async def test_missing_key_is_not_configured(weather_factory):
    with pytest.raises(ServiceNotConfiguredError):
        await weather_factory(api_key=None).get_forecast("Lisbon", "Portugal")


@pytest.mark.asyncio
async def test_partial_entry_is_weather_provider_error(weather_factory):
    payload = {"list": [{"dt": 1767225600, "main": {"humidity": 70}, "weather": [{"description": "fog"}]}]}
    with pytest.raises(ExternalServiceError) as exc:
        await weather_factory(payload=payload).get_forecast("Lisbon", "Portugal")
    assert exc.value.error_code == ErrorCode.WEATHER_PROVIDER_ERROR
