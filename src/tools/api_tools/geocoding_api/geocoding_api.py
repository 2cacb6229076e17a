"""Geocoding API Tool - Nominatim (OpenStreetMap) integration."""

import os

import httpx

from observability import trace_tool
from src.tools.shared_libraries.errors import NotFoundError, TransportError
from src.tools.shared_libraries.schemas import GeocodeResult

DEFAULT_GEOCODING_URL = 'https://nominatim.openstreetmap.org'
DEFAULT_USER_AGENT = 'city-weather-search/1.0'

NOT_FOUND_MESSAGE = 'No se encontró la localidad.'


def get_geocoding_url() -> str:
    """Get the Nominatim base URL."""
    return os.getenv('GEOCODING_URL', DEFAULT_GEOCODING_URL).rstrip('/')


@trace_tool(name='api.resolve_place')
async def resolve_place(
    client: httpx.AsyncClient,
    place_name: str,
) -> GeocodeResult:
    """Resolve a free-text place name to coordinates.

    Args:
        client: Shared async HTTP client.
        place_name: The place to look up (e.g., "Madrid", "Lyon, France").

    Returns:
        The first, most likely match with its display name and coordinates.

    Raises:
        NotFoundError: The provider returned no matches.
        TransportError: The request failed or the response was unusable.
    """
    try:
        response = await client.get(
            f'{get_geocoding_url()}/search',
            params={'format': 'json', 'q': place_name},
            headers={
                'User-Agent': os.getenv('GEOCODING_USER_AGENT', DEFAULT_USER_AGENT),
            },
        )
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPError as e:
        raise TransportError(f'Geocoding request failed: {e}') from e
    except ValueError as e:
        raise TransportError('Invalid JSON response from geocoding API.') from e

    if not isinstance(data, list):
        raise TransportError('Unexpected geocoding response shape.')
    if not data:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    best = data[0]
    try:
        return GeocodeResult(
            display_name=best['display_name'],
            lat=float(best['lat']),
            lon=float(best['lon']),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise TransportError(f'Malformed geocoding result: {e}') from e
