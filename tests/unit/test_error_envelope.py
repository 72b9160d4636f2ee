import json

import pytest
from starlette.requests import Request

from app.core.error_handlers import ErrorHandler
from app.core.exceptions import ConflictError, ExternalServiceError, ErrorCode, ServiceNotConfiguredError
from app.schemas.base import envelope


def _request():
    return Request({"type": "http", "method": "POST", "path": "/api/packing/trip/1", "headers": []})


@pytest.mark.asyncio
async def test_conflict_envelope():
    handler = ErrorHandler()
    response = await handler.handle_packpal_exception(_request(), ConflictError("Packing list already exists for this trip"))

    assert response.status_code == 409
    body = json.loads(response.body)
    assert body == {
        "success": False,
        "message": "Packing list already exists for this trip",
        "error_code": "CONFLICT",
    }


@pytest.mark.asyncio
async def test_provider_errors_keep_distinct_codes():
    handler = ErrorHandler()
    weather = await handler.handle_packpal_exception(
        _request(), ExternalServiceError("openweathermap", error_code=ErrorCode.WEATHER_PROVIDER_ERROR)
    )
    missing = await handler.handle_packpal_exception(_request(), ServiceNotConfiguredError("gemini"))

    assert weather.status_code == 502
    assert json.loads(weather.body)["details"] == {"service_name": "openweathermap"}
    assert missing.status_code == 503
    assert json.loads(missing.body)["error_code"] == "SERVICE_NOT_CONFIGURED"

    stats = handler.get_error_statistics()
    assert stats["total_errors"] == 2
    assert stats["error_counts"]["WEATHER_PROVIDER_ERROR"] == 1


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(async_client):
    r = await async_client.get("/api/does-not-exist")
    assert r.status_code == 404
    body = r.json()
    assert body["success"] is False
    assert body["error_code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_invalid_body_lists_field_errors(async_client):
    r = await async_client.post("/api/auth/register", json={"email": "not-an-email"})
    assert r.status_code == 422
    fields = {e["field"] for e in r.json()["details"]["validation_errors"]}
    assert {"body.name", "body.email", "body.password"} <= fields


def test_success_envelope_shape():
    assert envelope() == {"success": True}
    assert envelope("Trip deleted successfully") == {"success": True, "message": "Trip deleted successfully"}
    assert envelope(liked=True, likes=1) == {"success": True, "liked": True, "likes": 1}
