"""Weather Search Server - Entry point for the search log API."""

import logging
import os
import sys

import click
import uvicorn
from dotenv import load_dotenv

from observability import init_tracing
from src.tools.shared_libraries.config import tracing_enabled

from .app import create_app


load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@click.command()
@click.option('--host', 'host', default=lambda: os.getenv('HOST', '0.0.0.0'), help='Server host')
@click.option('--port', 'port', default=lambda: int(os.getenv('PORT', '3000')), type=int, help='Server port')
@click.option('--db-path', 'db_path', default=None, help='SQLite file for the search log')
@click.option('--static-dir', 'static_dir', default=None, help='Directory served as the front-end')
def main(host: str, port: int, db_path: str | None, static_dir: str | None):
    """Starts the Weather Search server."""
    try:
        if tracing_enabled():
            init_tracing(project_name='weather-search-server')

        app = create_app(db_path=db_path, static_dir=static_dir)

        logger.info(f'Starting Weather Search server at http://{host}:{port}')
        uvicorn.run(app, host=host, port=port)

    except Exception as e:
        logger.error(f'An error occurred during server startup: {e}')
        sys.exit(1)


if __name__ == '__main__':
    main()
