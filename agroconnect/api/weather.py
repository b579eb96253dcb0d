"""
Weather proxy endpoint.
"""
from typing import Optional
from fastapi import APIRouter, Depends

from agroconnect.api.deps import get_weather_client
from agroconnect.schemas.weather import WeatherReport
from agroconnect.services.weather import WeatherClient

router = APIRouter(tags=["Weather"])


@router.get("/weather", response_model=WeatherReport)
async def get_weather(
    location: Optional[str] = None,
    client: WeatherClient = Depends(get_weather_client)
):
    """Current conditions for a location; a fixed report is served if the provider fails."""
    return await client.current(location)
