"""Terminal front-end for the weather search orchestrator."""

import asyncio
import logging
import sys

import click
import httpx
from dotenv import load_dotenv

from observability import init_tracing
from src.tools.shared_libraries.config import get_http_timeout, tracing_enabled
from src.tools.shared_libraries.errors import ValidationError
from src.tools.shared_libraries.schemas import SearchType

from .history import HistoryPresenter
from .orchestrator import QueryOrchestrator


load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def _run_search(search_type: SearchType, city: str, server_url: str | None) -> bool:
    async with httpx.AsyncClient(timeout=get_http_timeout()) as client:
        orchestrator = QueryOrchestrator(client, server_url=server_url, display=click.echo)
        try:
            outcome = await orchestrator.run(search_type, city)
        except ValidationError:
            return False
        await orchestrator.drain()
        return outcome.state == 'displayed'


async def _show_history(server_url: str | None) -> None:
    async with httpx.AsyncClient(timeout=get_http_timeout()) as client:
        await HistoryPresenter(client, server_url=server_url, display=click.echo).show()


@click.group()
@click.option('--server-url', 'server_url', default=None, help='Search log server URL')
@click.pass_context
def main(ctx: click.Context, server_url: str | None):
    """Look up the weather of a city and keep a search history."""
    ctx.obj = {'server_url': server_url}
    if tracing_enabled():
        init_tracing(project_name='weather-search-cli')


@main.command()
@click.argument('city')
@click.pass_obj
def current(obj: dict, city: str):
    """Show the current weather in CITY."""
    sys.exit(0 if asyncio.run(_run_search(SearchType.CURRENT, city, obj['server_url'])) else 1)


@main.command()
@click.argument('city')
@click.pass_obj
def forecast(obj: dict, city: str):
    """Show the 15-day forecast for CITY."""
    sys.exit(0 if asyncio.run(_run_search(SearchType.FORECAST, city, obj['server_url'])) else 1)


@main.command(name='map')
@click.argument('city')
@click.pass_obj
def show_map(obj: dict, city: str):
    """Print the embeddable map of CITY."""
    sys.exit(0 if asyncio.run(_run_search(SearchType.MAP, city, obj['server_url'])) else 1)


@main.command()
@click.pass_obj
def history(obj: dict):
    """Show the searches logged for this machine's IP."""
    asyncio.run(_show_history(obj['server_url']))


if __name__ == '__main__':
    main()
