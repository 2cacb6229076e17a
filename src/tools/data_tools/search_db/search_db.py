"""Search log store - SQLite operations for per-IP search history."""

import logging
import os
import sqlite3
from pathlib import Path

from observability import trace_tool
from src.tools.shared_libraries.errors import StoreError
from src.tools.shared_libraries.schemas import SearchEvent

from .models import INSERT_SEARCH_SQL, SCHEMA_SQL, SELECT_BY_IP_SQL

logger = logging.getLogger(__name__)


def get_db_path() -> str:
    """Get the database file path."""
    db_dir = Path(os.getenv('SEARCH_DB_DIR', './data'))
    db_dir.mkdir(parents=True, exist_ok=True)
    return str(db_dir / 'db.sqlite')


class SearchLogStore:
    """Append-only search log backed by a single owned SQLite connection.

    The store must be opened before use and closed when the owner shuts
    down, either explicitly or with ``with SearchLogStore(path) as store``.
    """

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or get_db_path()
        self._conn: sqlite3.Connection | None = None

    def open(self) -> 'SearchLogStore':
        """Open the connection and create the schema if needed."""
        if self._conn is not None:
            return self
        try:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.executescript(SCHEMA_SQL)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f'Could not open database {self.db_path}: {e}') from e
        self._conn = conn
        logger.info(f'Connected to SQLite database at {self.db_path}')
        return self

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info('SQLite connection closed')

    def __enter__(self) -> 'SearchLogStore':
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError('Search log store is not open.')
        return self._conn

    @trace_tool(name='db.append_search', capture_input=False)
    def append(self, ip: str, city: str, search_type: str, result: str) -> int:
        """Insert one search event.

        Args:
            ip: Address of the requesting client.
            city: Place name as typed by the user.
            search_type: Label of the search (see ``SearchType``).
            result: Rendered markup shown to the user.

        Returns:
            The id assigned to the new event.

        Raises:
            StoreError: If the insert fails.
        """
        conn = self.connection
        try:
            cursor = conn.execute(INSERT_SEARCH_SQL, (ip, city, search_type, result))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(str(e)) from e
        return cursor.lastrowid

    @trace_tool(name='db.list_searches_by_ip', capture_output=False)
    def list_by_ip(self, ip: str) -> list[SearchEvent]:
        """Get every event logged for an IP, newest first.

        Raises:
            StoreError: If the query fails.
        """
        try:
            rows = self.connection.execute(SELECT_BY_IP_SQL, (ip,)).fetchall()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return [SearchEvent(**dict(row)) for row in rows]
