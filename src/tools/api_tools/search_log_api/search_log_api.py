"""Search Log API Tool - client for the server's /api/search and /api/history."""

import httpx
from pydantic import TypeAdapter

from observability import trace_tool
from src.tools.shared_libraries.errors import StoreError, TransportError
from src.tools.shared_libraries.schemas import SearchEvent, SearchSaved

_events_adapter = TypeAdapter(list[SearchEvent])


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json().get('error') or response.reason_phrase
    except (ValueError, AttributeError):
        return response.reason_phrase


async def _request(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    try:
        response = await client.request(method, url, **kwargs)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(f'Search log server unreachable: {e}') from e
    if response.is_error:
        raise StoreError(f'{response.status_code}: {_error_message(response)}')
    return response


@trace_tool(name='api.save_search', capture_input=False)
async def save_search(
    client: httpx.AsyncClient,
    server_url: str,
    search_type: str,
    city: str,
    result: str,
) -> SearchSaved:
    """Log a displayed search on the server.

    Args:
        client: Shared async HTTP client.
        server_url: Base URL of the search log server.
        search_type: Label of the search (see ``SearchType``).
        city: Place name as typed by the user.
        result: Rendered markup shown to the user.

    Returns:
        The server confirmation with the new event id.

    Raises:
        StoreError: The server answered with an error status.
        TransportError: The server could not be reached or answered garbage.
    """
    response = await _request(
        client,
        'POST',
        f'{server_url}/api/search',
        json={'search_type': search_type, 'city': city, 'result': result},
    )
    try:
        return SearchSaved.model_validate(response.json())
    except ValueError as e:
        raise TransportError(f'Invalid response from search log server: {e}') from e


@trace_tool(name='api.fetch_history', capture_output=False)
async def fetch_history(
    client: httpx.AsyncClient,
    server_url: str,
) -> list[SearchEvent]:
    """Get the searches logged for the caller's IP, newest first.

    Raises:
        StoreError: The server answered with an error status.
        TransportError: The server could not be reached or answered garbage.
    """
    response = await _request(client, 'GET', f'{server_url}/api/history')
    try:
        return _events_adapter.validate_python(response.json())
    except ValueError as e:
        raise TransportError(f'Invalid response from search log server: {e}') from e
