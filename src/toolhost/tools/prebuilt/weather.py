"""Simulated weather tools.

Readings are pseudo-random but reproducible: the generator is seeded with
the normalized location and the day of year, so the same city gives the
same answer all day and a different one tomorrow.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import datetime, timedelta

from toolhost.foundation.core import ParamKind, param
from toolhost.foundation.registry import ToolRegistry
from toolhost.records import WeatherInfo, utcnow

CONDITIONS = ("Sunny", "Cloudy", "Partly Cloudy", "Rainy", "Stormy", "Foggy", "Windy")

BASE_TEMPERATURES: dict[str, float] = {
    "tokyo": 18,
    "london": 12,
    "new york": 15,
    "paris": 14,
    "sydney": 22,
    "mumbai": 30,
    "dubai": 35,
    "singapore": 28,
}

MAX_FORECAST_DAYS = 7


def normalize_location(location: str) -> str:
    return location.strip().lower()


def _rng(location: str, day: datetime) -> random.Random:
    return random.Random(f"{normalize_location(location)}|{day.timetuple().tm_yday}")


class WeatherTools:
    """Weather handlers. `clock` is injectable so tests can pin the day."""

    __slots__ = ("_clock",)

    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self._clock = clock

    def get_weather(self, location: str, unit: str = "celsius") -> WeatherInfo:
        now = self._clock()
        rng = _rng(location, now)
        key = normalize_location(location)

        base = BASE_TEMPERATURES[key] if key in BASE_TEMPERATURES else rng.randrange(5, 30)
        temperature = base + rng.randrange(-5, 5)
        condition = rng.choice(CONDITIONS)
        humidity = rng.randrange(30, 90)
        wind_speed = round(rng.random() * 30, 1)

        fahrenheit = unit.strip().lower() == "fahrenheit"
        if fahrenheit:
            temperature = temperature * 9 / 5 + 32

        return WeatherInfo(
            location=location,
            temperature=round(temperature, 1),
            unit="°F" if fahrenheit else "°C",
            condition=condition,
            humidity=humidity,
            wind_speed=wind_speed,
            timestamp=now,
        )

    def get_forecast(self, location: str, days: int = 3) -> list[WeatherInfo]:
        days = max(1, min(days, MAX_FORECAST_DAYS))
        now = self._clock()
        forecast: list[WeatherInfo] = []
        for i in range(days):
            day = now + timedelta(days=i)
            rng = _rng(location, day)
            forecast.append(WeatherInfo(
                location=location,
                temperature=round(rng.randrange(5, 30) + rng.random() * 5, 1),
                unit="°C",
                condition=rng.choice(CONDITIONS),
                humidity=rng.randrange(30, 90),
                wind_speed=round(rng.random() * 30, 1),
                timestamp=day,
            ))
        return forecast


def register_weather_tools(registry: ToolRegistry, tools: WeatherTools | None = None) -> WeatherTools:
    tools = tools if tools is not None else WeatherTools()
    registry.add(
        "GetWeather",
        "Gets the current weather for a specified location. Returns temperature, conditions, humidity, and wind speed.",
        tools.get_weather,
        param("location", ParamKind.STRING, "The city name to get weather for (e.g., 'New York', 'London', 'Tokyo')"),
        param("unit", ParamKind.STRING, "Temperature unit: 'celsius' or 'fahrenheit'. Defaults to celsius.", default="celsius"),
        category="weather",
    )
    registry.add(
        "GetForecast",
        "Gets weather forecast for a location for the next specified number of days (1-7).",
        tools.get_forecast,
        param("location", ParamKind.STRING, "The city name to get the forecast for"),
        param("days", ParamKind.INTEGER, "Number of days for the forecast (1-7)", default=3),
        category="weather",
    )
    return tools
