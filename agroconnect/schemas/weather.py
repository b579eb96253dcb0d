"""
Weather summary returned by the weather proxy.
"""
from agroconnect.schemas.base import CamelModel


class WeatherReport(CamelModel):
    temperature: int
    humidity: int
    description: str
    wind_speed: int  # km/h
    rainfall: int  # mm over the last hour
