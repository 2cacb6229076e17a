"""History Presenter - replays the searches logged for the current client."""

import logging
from collections.abc import Callable, Iterable

import httpx

from observability import trace_span
from src.tools.api_tools.search_log_api.search_log_api import fetch_history
from src.tools.shared_libraries.config import get_server_url
from src.tools.shared_libraries.errors import WeatherSearchError
from src.tools.shared_libraries.helpers import render_history
from src.tools.shared_libraries.schemas import SearchEvent

logger = logging.getLogger(__name__)


class HistoryPresenter:
    ERROR_PREFIX = 'Error al obtener el historial: '

    def __init__(
        self,
        client: httpx.AsyncClient,
        server_url: str | None = None,
        display: Callable[[str], None] | None = None,
    ):
        self.client = client
        self.server_url = (server_url or get_server_url()).rstrip('/')
        self.display = display or logger.debug

    async def fetch(self) -> list[SearchEvent]:
        return await fetch_history(self.client, self.server_url)

    def render(self, events: Iterable[SearchEvent]) -> str:
        return render_history(events)

    @trace_span('history.show')
    async def show(self) -> str:
        """Fetch, render and display the history.

        Returns:
            The displayed content, an error line if the fetch failed.
        """
        try:
            events = await self.fetch()
        except WeatherSearchError as e:
            logger.error(f'Error fetching history: {e}')
            content = f'{self.ERROR_PREFIX}{e}'
        else:
            content = self.render(events)
        self.display(content)
        return content
