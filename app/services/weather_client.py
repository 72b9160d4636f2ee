"""
Weather client - multi-day forecasts from the OpenWeatherMap API.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from app.core.exceptions import ErrorCode, ExternalServiceError, ServiceNotConfiguredError
from app.schemas.trip import WeatherDay

logger = logging.getLogger(__name__)


def normalize_forecast(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Map an OpenWeatherMap ``/forecast`` response to the trip's forecast array.

    Args:
        payload: Decoded JSON body with a ``list`` of 3-hour entries

    Returns:
        List of ``{date, temperature: {min, max}, condition, humidity, wind_speed}``
        in provider order, with ``date`` as an ISO-8601 UTC string

    Raises:
        ValueError: an entry lacks the fields a cached forecast day needs
        KeyError: an entry has no ``dt`` timestamp
    """
    forecast = []
    for entry in payload.get("list", []):
        main = entry.get("main", {})
        conditions = entry.get("weather") or [{}]
        record = {
            "date": datetime.fromtimestamp(entry["dt"], tz=timezone.utc).isoformat(),
            "temperature": {
                "min": main.get("temp_min"),
                "max": main.get("temp_max"),
            },
            "condition": conditions[0].get("description", ""),
            "humidity": main.get("humidity"),
            "wind_speed": entry.get("wind", {}).get("speed"),
        }
        # Same shape the trip read model expects, checked before anything is stored
        WeatherDay.model_validate(record)
        forecast.append(record)
    return forecast


class WeatherClient:
    """Forecast lookups by city and country."""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.openweathermap.org/data/2.5",
        timeout_seconds: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout_seconds
        self._transport = transport

        if not self.api_key:
            logger.warning(
                "OpenWeatherMap API key not configured. "
                "Set OPENWEATHER_API_KEY in .env file."
            )

    async def get_forecast(self, city: str, country: str) -> List[Dict[str, Any]]:
        """
        Fetch the forecast for a destination.

        Raises:
            ServiceNotConfiguredError: no API key
            ExternalServiceError: provider unreachable or non-200 answer
        """
        if not self.api_key:
            raise ServiceNotConfiguredError("openweathermap")

        params = {
            "q": f"{city},{country}",
            "appid": self.api_key,
            "units": "metric",
        }

        logger.info(f"Fetching forecast for: {city}, {country}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(f"{self.api_url}/forecast", params=params)
        except httpx.HTTPError as e:
            raise ExternalServiceError(
                "openweathermap",
                f"Weather provider unreachable: {e}",
                error_code=ErrorCode.WEATHER_PROVIDER_ERROR,
            ) from e

        if response.status_code != 200:
            logger.warning(
                f"OpenWeatherMap returned {response.status_code} for '{city},{country}'"
            )
            raise ExternalServiceError(
                "openweathermap",
                f"Weather provider returned {response.status_code}",
                error_code=ErrorCode.WEATHER_PROVIDER_ERROR,
                details={"status_code": response.status_code},
            )

        try:
            return normalize_forecast(response.json())
        except (ValueError, KeyError, TypeError) as e:
            raise ExternalServiceError(
                "openweathermap",
                "Weather provider returned an unexpected payload",
                error_code=ErrorCode.WEATHER_PROVIDER_ERROR,
            ) from e
