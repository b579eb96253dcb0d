"""
Current-weather proxy for the marketplace header widget.

Upstream problems never reach the client: any failure is logged and a
fixed fallback report is served instead.
"""
import math
from typing import Optional

import httpx

from agroconnect.core.config import Settings
from agroconnect.error_handlers import UpstreamUnavailableError
from agroconnect.logging_config import get_logger
from agroconnect.schemas.weather import WeatherReport

logger = get_logger("weather")

FALLBACK_REPORT = WeatherReport(
    temperature=28,
    humidity=72,
    description="sunny",
    wind_speed=15,
    rainfall=0,
)


def _round(value: float) -> int:
    # half-up, not Python's banker's rounding
    return int(math.floor(value + 0.5))


class WeatherClient:
    """OpenWeatherMap client returning ``WeatherReport`` summaries."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = settings.openweather_url
        self.api_key = settings.openweather_api_key
        self.country_code = settings.weather_country_code
        self.default_location = settings.weather_default_location
        self.timeout = settings.weather_timeout_seconds
        self._transport = transport

    async def fetch(self, location: str) -> WeatherReport:
        """
        Query the provider.

        Raises:
            UpstreamUnavailableError: transport error, non-2xx answer or unexpected payload
        """
        params = {
            "q": f"{location},{self.country_code}" if self.country_code else location,
            "appid": self.api_key,
            "units": "metric",
        }
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.get(self.url, params=params)
                response.raise_for_status()
                data = response.json()
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                raise UpstreamUnavailableError("Weather service", str(e))
            except ValueError as e:
                raise UpstreamUnavailableError("Weather service", f"invalid JSON: {e}")

        try:
            rain = data.get("rain") or {}
            return WeatherReport(
                temperature=_round(data["main"]["temp"]),
                humidity=_round(data["main"]["humidity"]),
                description=data["weather"][0]["description"],
                wind_speed=_round(data["wind"]["speed"] * 3.6),  # m/s -> km/h
                rainfall=_round(rain.get("1h", 0)),
            )
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise UpstreamUnavailableError("Weather service", f"unexpected payload: {e!r}")

    async def current(self, location: Optional[str] = None) -> WeatherReport:
        location = (location or "").strip() or self.default_location
        try:
            return await self.fetch(location)
        except UpstreamUnavailableError as e:
            logger.warning(f"{e.message}; serving fallback weather for {location}")
            return FALLBACK_REPORT
