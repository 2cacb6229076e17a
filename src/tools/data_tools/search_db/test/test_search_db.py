"""Unit tests for the search log store."""

import os
import sqlite3

import pytest

from src.tools.data_tools.search_db.search_db import SearchLogStore, get_db_path
from src.tools.shared_libraries.errors import StoreError


@pytest.fixture
def store(tmp_path):
    """Open a store on a temporary database file."""
    with SearchLogStore(str(tmp_path / 'searches.sqlite')) as opened:
        yield opened


class TestSearchLogStore:
    """Tests for search log operations."""

    def test_get_db_path_uses_env_dir(self, tmp_path, monkeypatch):
        """Test the database lands in SEARCH_DB_DIR."""
        monkeypatch.setenv('SEARCH_DB_DIR', str(tmp_path / 'data'))

        path = get_db_path()

        assert path == str(tmp_path / 'data' / 'db.sqlite')
        assert os.path.isdir(tmp_path / 'data')

    def test_open_creates_schema(self, store):
        """Test the searches table exists after opening."""
        tables = store.connection.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        ).fetchall()

        assert 'searches' in [row['name'] for row in tables]

    def test_append_assigns_increasing_ids(self, store):
        """Test ids are store-assigned and increasing."""
        first = store.append('10.0.0.1', 'Madrid', 'Tiempo Actual', '<p>a</p>')
        second = store.append('10.0.0.1', 'Lyon', 'Mapa', '<p>b</p>')

        assert second > first

    def test_append_then_list_returns_newest_first(self, store):
        """Test a fresh event is the first one listed."""
        store.append('10.0.0.1', 'Madrid', 'Tiempo Actual', '<p>a</p>')
        newest = store.append('10.0.0.1', 'Lyon', 'Pronóstico 15 Días', '<p>b</p>')

        events = store.list_by_ip('10.0.0.1')

        assert events[0].id == newest
        assert events[0].city == 'Lyon'
        assert events[0].search_type == 'Pronóstico 15 Días'
        assert events[0].timestamp
        assert [event.city for event in events] == ['Lyon', 'Madrid']

    def test_older_timestamps_listed_last(self, store):
        """Test ordering follows the stored timestamp."""
        store.connection.execute(
            "INSERT INTO searches (ip, city, search_type, result, timestamp) "
            "VALUES ('10.0.0.1', 'Old', 'Mapa', '', '2000-01-01 00:00:00')"
        )
        store.connection.commit()
        store.append('10.0.0.1', 'New', 'Mapa', '')

        assert [event.city for event in store.list_by_ip('10.0.0.1')] == ['New', 'Old']

    def test_list_is_scoped_to_ip(self, store):
        """Test events of other clients are never returned."""
        store.append('10.0.0.1', 'Madrid', 'Mapa', '')
        store.append('10.0.0.2', 'Lyon', 'Mapa', '')
        store.append('10.0.0.10', 'Oslo', 'Mapa', '')

        events = store.list_by_ip('10.0.0.1')

        assert [event.ip for event in events] == ['10.0.0.1']

    def test_list_is_repeatable(self, store):
        """Test two reads without writes in between agree."""
        store.append('10.0.0.1', 'Madrid', 'Mapa', '')
        store.append('10.0.0.1', 'Lyon', 'Mapa', '')

        assert store.list_by_ip('10.0.0.1') == store.list_by_ip('10.0.0.1')

    def test_unknown_ip_has_empty_history(self, store):
        """Test an IP with no searches gets an empty list."""
        assert store.list_by_ip('192.168.1.1') == []

    def test_closed_store_raises_store_error(self, tmp_path):
        """Test use after close is reported as a StoreError."""
        store = SearchLogStore(str(tmp_path / 'closed.sqlite')).open()
        store.close()

        with pytest.raises(StoreError):
            store.append('10.0.0.1', 'Madrid', 'Mapa', '')
        with pytest.raises(StoreError):
            store.list_by_ip('10.0.0.1')

    def test_write_failure_raises_store_error(self, store):
        """Test an underlying SQLite failure is wrapped."""
        store.connection.execute('DROP TABLE searches')

        with pytest.raises(StoreError):
            store.append('10.0.0.1', 'Madrid', 'Mapa', '')

    def test_unopenable_path_raises_store_error(self, tmp_path):
        """Test a bad database path fails to open."""
        with pytest.raises(StoreError):
            SearchLogStore(str(tmp_path / 'missing' / 'dir' / 'db.sqlite')).open()

    def test_data_survives_reopen(self, tmp_path):
        """Test events are persisted to disk."""
        path = str(tmp_path / 'persist.sqlite')
        with SearchLogStore(path) as first:
            first.append('10.0.0.1', 'Madrid', 'Mapa', '')
        with SearchLogStore(path) as second:
            assert [event.city for event in second.list_by_ip('10.0.0.1')] == ['Madrid']

    def test_rows_are_plain_sqlite(self, tmp_path):
        """Test the table is readable without the store."""
        path = str(tmp_path / 'raw.sqlite')
        with SearchLogStore(path) as store:
            store.append('10.0.0.1', 'Madrid', 'Mapa', '<p>x</p>')

        conn = sqlite3.connect(path)
        try:
            row = conn.execute('SELECT ip, city, search_type, result FROM searches').fetchone()
        finally:
            conn.close()
        assert row == ('10.0.0.1', 'Madrid', 'Mapa', '<p>x</p>')
