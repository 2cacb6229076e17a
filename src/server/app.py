"""Search log HTTP API plus the static front-end."""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from observability import trace_span
from src.tools.data_tools.search_db.search_db import SearchLogStore
from src.tools.shared_libraries.errors import StoreError
from src.tools.shared_libraries.schemas import SearchEvent, SearchRequest, SearchSaved

logger = logging.getLogger(__name__)

SAVED_MESSAGE = 'Búsqueda guardada correctamente.'


def get_static_dir() -> str:
    """Get the directory served as the browser front-end."""
    return os.getenv('STATIC_DIR', str(Path(__file__).resolve().parents[2] / 'public'))


def get_store(request: Request) -> SearchLogStore:
    return request.app.state.store


def client_ip(request: Request) -> str:
    return request.client.host if request.client else 'unknown'


def create_app(
    db_path: str | None = None,
    static_dir: str | None = None,
    log_store: SearchLogStore | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        db_path: SQLite file backing the search log. Defaults to
            ``$SEARCH_DB_DIR/db.sqlite``.
        static_dir: Directory served at ``/``. Defaults to ``$STATIC_DIR``.
        log_store: Already opened store to use instead of opening one. The
            caller keeps ownership and closes it.

    Returns:
        The FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if log_store is not None:
            app.state.store = log_store
            yield
            return
        with SearchLogStore(db_path) as owned:
            app.state.store = owned
            yield

    app = FastAPI(title='Weather Search', version='1.0.0', lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=['*'],
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(f'{request.method} {request.url.path} failed: {exc}')
        return JSONResponse(status_code=500, content={'error': str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = ', '.join(str(err['loc'][-1]) for err in exc.errors())
        return JSONResponse(status_code=400, content={'error': f'Invalid or missing fields: {fields}'})

    @app.post('/api/search', response_model=SearchSaved)
    @trace_span('server.save_search')
    async def save_search(
        body: SearchRequest,
        request: Request,
        store: SearchLogStore = Depends(get_store),
    ) -> SearchSaved:
        search_id = store.append(client_ip(request), body.city, body.search_type, body.result)
        return SearchSaved(message=SAVED_MESSAGE, id=search_id)

    @app.get('/api/history', response_model=list[SearchEvent])
    @trace_span('server.get_history')
    async def get_history(
        request: Request,
        store: SearchLogStore = Depends(get_store),
    ) -> list[SearchEvent]:
        return store.list_by_ip(client_ip(request))

    app.mount(
        '/',
        StaticFiles(directory=static_dir or get_static_dir(), html=True, check_dir=False),
        name='static',
    )
    return app
