"""Weather API Tool - Open-Meteo integration."""

import os

import httpx

from observability import trace_tool
from src.tools.shared_libraries.errors import TransportError
from src.tools.shared_libraries.schemas import CurrentWeather, DailyForecast

DEFAULT_WEATHER_API_URL = 'https://api.open-meteo.com/v1/forecast'
FORECAST_DAYS = 15


def get_weather_api_url() -> str:
    """Get the Open-Meteo forecast endpoint."""
    return os.getenv('WEATHER_API_URL', DEFAULT_WEATHER_API_URL)


async def _fetch(client: httpx.AsyncClient, params: dict) -> dict:
    try:
        response = await client.get(get_weather_api_url(), params=params)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        raise TransportError(f'Weather request failed: {e}') from e
    except ValueError as e:
        raise TransportError('Invalid JSON response from weather API.') from e

    if not isinstance(data, dict):
        raise TransportError('Unexpected weather response shape.')
    return data


@trace_tool(name='api.get_current_weather')
async def get_current_weather(
    client: httpx.AsyncClient,
    lat: float,
    lon: float,
) -> CurrentWeather:
    """Get the current weather snapshot at a location.

    The provider resolves the local timezone from the coordinates, so
    ``time`` is the local observation time.

    Args:
        client: Shared async HTTP client.
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.

    Returns:
        Temperature (°C), wind speed (km/h) and observation time.

    Raises:
        TransportError: The request failed or the response was unusable.
    """
    data = await _fetch(
        client,
        {
            'latitude': lat,
            'longitude': lon,
            'current_weather': 'true',
            'timezone': 'auto',
        },
    )
    try:
        weather = data['current_weather']
        return CurrentWeather(
            temperature=weather['temperature'],
            windspeed=weather['windspeed'],
            time=weather['time'],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(f'Malformed current weather data: {e}') from e


@trace_tool(name='api.get_forecast')
async def get_forecast(
    client: httpx.AsyncClient,
    lat: float,
    lon: float,
    days: int = FORECAST_DAYS,
) -> list[DailyForecast]:
    """Get the daily max/min temperature forecast at a location.

    Args:
        client: Shared async HTTP client.
        lat: Latitude in decimal degrees.
        lon: Longitude in decimal degrees.
        days: Forecast horizon. Defaults to 15.

    Returns:
        One entry per day, in the provider's chronological order.

    Raises:
        TransportError: The request failed, the response was unusable or
            the daily arrays have different lengths.
    """
    data = await _fetch(
        client,
        {
            'latitude': lat,
            'longitude': lon,
            'daily': 'temperature_2m_max,temperature_2m_min',
            'timezone': 'auto',
            'forecast_days': days,
        },
    )
    try:
        daily = data['daily']
        dates = daily['time']
        maxima = daily['temperature_2m_max']
        minima = daily['temperature_2m_min']
    except (KeyError, TypeError) as e:
        raise TransportError(f'Malformed forecast data: {e}') from e

    if not len(dates) == len(maxima) == len(minima):
        raise TransportError(
            'Inconsistent forecast data: '
            f'{len(dates)} dates, {len(maxima)} maxima, {len(minima)} minima.'
        )

    try:
        return [
            DailyForecast(date=date, temp_max=high, temp_min=low)
            for date, high, low in zip(dates, maxima, minima)
        ]
    except ValueError as e:
        raise TransportError(f'Malformed forecast data: {e}') from e
