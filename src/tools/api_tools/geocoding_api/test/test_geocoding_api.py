"""Unit tests for Geocoding API tool."""

import httpx
import pytest

from src.tools.api_tools.geocoding_api.geocoding_api import (
    NOT_FOUND_MESSAGE,
    resolve_place,
)
from src.tools.shared_libraries.errors import NotFoundError, TransportError


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestResolvePlace:
    """Tests for resolve_place function."""

    @pytest.mark.asyncio
    async def test_returns_first_match(self):
        """Test the first provider result is used."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[
                {'display_name': 'Madrid, Spain', 'lat': '40.4168', 'lon': '-3.7038'},
                {'display_name': 'Madrid, Iowa', 'lat': '41.8767', 'lon': '-93.8233'},
            ])

        async with make_client(handler) as client:
            result = await resolve_place(client, 'Madrid')

        assert result.display_name == 'Madrid, Spain'
        assert result.lat == pytest.approx(40.4168)
        assert result.lon == pytest.approx(-3.7038)
        assert seen[0].url.path == '/search'
        assert seen[0].url.params['format'] == 'json'
        assert seen[0].url.params['q'] == 'Madrid'
        assert seen[0].headers['User-Agent']

    @pytest.mark.asyncio
    async def test_place_name_is_percent_encoded(self):
        """Test spaces and accents survive the query string."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[
                {'display_name': 'A Coruña, Spain', 'lat': '43.37', 'lon': '-8.40'},
            ])

        async with make_client(handler) as client:
            await resolve_place(client, 'A Coruña')

        assert seen[0].url.params['q'] == 'A Coruña'
        assert b' ' not in seen[0].url.raw_path

    @pytest.mark.asyncio
    async def test_empty_result_raises_not_found(self):
        """Test an empty result list is reported as not found."""
        async with make_client(lambda request: httpx.Response(200, json=[])) as client:
            with pytest.raises(NotFoundError) as excinfo:
                await resolve_place(client, 'Xyzzzabc')

        assert str(excinfo.value) == NOT_FOUND_MESSAGE

    @pytest.mark.asyncio
    async def test_http_error_raises_transport_error(self):
        """Test a provider error status becomes a TransportError."""
        async with make_client(lambda request: httpx.Response(503)) as client:
            with pytest.raises(TransportError):
                await resolve_place(client, 'Madrid')

    @pytest.mark.asyncio
    async def test_network_failure_raises_transport_error(self):
        """Test a connection failure becomes a TransportError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        async with make_client(handler) as client:
            with pytest.raises(TransportError):
                await resolve_place(client, 'Madrid')

    @pytest.mark.asyncio
    async def test_invalid_json_raises_transport_error(self):
        """Test a non-JSON body becomes a TransportError."""
        async with make_client(lambda request: httpx.Response(200, text='<html>')) as client:
            with pytest.raises(TransportError):
                await resolve_place(client, 'Madrid')

    @pytest.mark.asyncio
    async def test_missing_coordinates_raise_transport_error(self):
        """Test a result without usable coordinates is never returned."""
        body = [{'display_name': 'Nowhere', 'lat': '', 'lon': None}]
        async with make_client(lambda request: httpx.Response(200, json=body)) as client:
            with pytest.raises(TransportError):
                await resolve_place(client, 'Nowhere')
