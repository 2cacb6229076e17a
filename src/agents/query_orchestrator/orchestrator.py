"""Query Orchestrator - validate, geocode, fetch, render, then log the search.

Each public action runs its stages strictly in order. The final logging
stage is detached from the action: it never delays the displayed result
and its failures only reach the log and the trace.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Literal

import httpx
from pydantic import BaseModel

from observability import trace_span
from src.tools.api_tools.geocoding_api.geocoding_api import resolve_place
from src.tools.api_tools.map_api.map_api import build_map_view
from src.tools.api_tools.search_log_api.search_log_api import save_search
from src.tools.api_tools.weather_api.weather_api import get_current_weather, get_forecast
from src.tools.shared_libraries.config import get_server_url
from src.tools.shared_libraries.errors import (
    NotFoundError,
    TransportError,
    ValidationError,
    WeatherSearchError,
)
from src.tools.shared_libraries.helpers import render_current_weather, render_forecast
from src.tools.shared_libraries.schemas import GeocodeResult, SearchType

logger = logging.getLogger(__name__)

Display = Callable[[str], None]
Fetcher = Callable[[GeocodeResult], Awaitable[str]]


class QueryOutcome(BaseModel):
    """Terminal state of one orchestrated action."""

    state: Literal['displayed', 'failed']
    search_type: SearchType
    city: str
    content: str


class QueryOrchestrator:
    """Drives one user action from raw input to displayed, logged result."""

    VALIDATION_MESSAGE = 'Por favor, introduce una localidad válida.'

    def __init__(
        self,
        client: httpx.AsyncClient,
        server_url: str | None = None,
        display: Display | None = None,
    ):
        self.client = client
        self.server_url = (server_url or get_server_url()).rstrip('/')
        self.display = display or logger.debug
        self._pending: set[asyncio.Task] = set()

    def read_city(self, raw_city: str | None) -> str:
        """Trim the input, rejecting blank place names.

        Raises:
            ValidationError: If nothing is left after trimming.
        """
        city = (raw_city or '').strip()
        if not city:
            self.display(self.VALIDATION_MESSAGE)
            raise ValidationError(self.VALIDATION_MESSAGE)
        return city

    @trace_span('orchestrator.current_weather')
    async def current_weather(self, raw_city: str | None) -> QueryOutcome:
        async def fetch(location: GeocodeResult) -> str:
            weather = await get_current_weather(self.client, location.lat, location.lon)
            return render_current_weather(location, weather)

        return await self._run(SearchType.CURRENT, raw_city, fetch)

    @trace_span('orchestrator.forecast')
    async def forecast(self, raw_city: str | None) -> QueryOutcome:
        async def fetch(location: GeocodeResult) -> str:
            days = await get_forecast(self.client, location.lat, location.lon)
            return render_forecast(location, days)

        return await self._run(SearchType.FORECAST, raw_city, fetch)

    @trace_span('orchestrator.show_map')
    async def show_map(self, raw_city: str | None) -> QueryOutcome:
        async def fetch(location: GeocodeResult) -> str:
            return build_map_view(location.lat, location.lon, location.display_name)

        return await self._run(SearchType.MAP, raw_city, fetch)

    async def run(self, search_type: SearchType, raw_city: str | None) -> QueryOutcome:
        """Dispatch an action by its search type."""
        actions = {
            SearchType.CURRENT: self.current_weather,
            SearchType.FORECAST: self.forecast,
            SearchType.MAP: self.show_map,
        }
        return await actions[SearchType(search_type)](raw_city)

    async def _run(
        self,
        search_type: SearchType,
        raw_city: str | None,
        fetch: Fetcher,
    ) -> QueryOutcome:
        city = self.read_city(raw_city)
        self.display(f'Buscando la localidad "{city}"...')

        try:
            location = await resolve_place(self.client, city)
            content = await fetch(location)
        except (NotFoundError, TransportError) as e:
            content = f'Error: {e}'
            logger.info(f'{search_type.value} for "{city}" failed: {e}')
            self.display(content)
            return QueryOutcome(state='failed', search_type=search_type, city=city, content=content)

        self.display(content)
        self._persist_detached(search_type, city, content)
        return QueryOutcome(state='displayed', search_type=search_type, city=city, content=content)

    def _persist_detached(self, search_type: SearchType, city: str, content: str) -> None:
        task = asyncio.create_task(self._persist(search_type, city, content))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _persist(self, search_type: SearchType, city: str, content: str) -> None:
        try:
            saved = await save_search(
                self.client,
                self.server_url,
                search_type.value,
                city,
                content,
            )
        except WeatherSearchError as e:
            logger.error(f'Error saving search for "{city}": {e}')
            return
        logger.info(f'Search saved with id {saved.id}')

    @property
    def pending(self) -> int:
        """Number of log writes still in flight."""
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for in-flight log writes before the event loop goes away."""
        if not self._pending:
            return
        results = await asyncio.gather(*list(self._pending), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                logger.error(f'Unexpected error while saving search: {result!r}')
