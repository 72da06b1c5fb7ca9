"""
Connection provider and scoped transaction tests.
"""

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from db.connection import PooledConnectionProvider, transaction


class TestTransaction:

    def test_commits_and_releases_on_success(self):
        provider = MagicMock()

        with transaction(provider) as conn:
            assert conn is provider.acquire.return_value

        conn.commit.assert_called_once()
        conn.rollback.assert_not_called()
        provider.release.assert_called_once_with(conn)

    def test_rolls_back_and_releases_on_error(self):
        provider = MagicMock()

        with pytest.raises(ValueError):
            with transaction(provider) as conn:
                raise ValueError("bad row")

        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        provider.release.assert_called_once_with(conn)

    def test_failed_commit_is_rolled_back(self):
        provider = MagicMock()
        conn = provider.acquire.return_value
        conn.commit.side_effect = psycopg2.OperationalError("connection lost")

        with pytest.raises(psycopg2.OperationalError):
            with transaction(provider):
                pass

        conn.rollback.assert_called_once()
        provider.release.assert_called_once_with(conn)


class TestPooledConnectionProvider:

    @patch("db.connection.pool.SimpleConnectionPool")
    def test_acquire_opens_pool_lazily(self, mock_pool_cls):
        provider = PooledConnectionProvider("postgresql://test", min_conn=1, max_conn=3)

        conn = provider.acquire()

        mock_pool_cls.assert_called_once_with(1, 3, "postgresql://test")
        assert conn is mock_pool_cls.return_value.getconn.return_value

    @patch("db.connection.pool.SimpleConnectionPool")
    def test_open_is_idempotent(self, mock_pool_cls):
        provider = PooledConnectionProvider("postgresql://test")

        provider.open()
        provider.open()
        provider.acquire()

        assert mock_pool_cls.call_count == 1

    @patch("db.connection.pool.SimpleConnectionPool")
    def test_release_and_close(self, mock_pool_cls):
        provider = PooledConnectionProvider("postgresql://test")
        conn = provider.acquire()
        pg_pool = mock_pool_cls.return_value

        provider.release(conn)
        provider.close()
        provider.close()

        pg_pool.putconn.assert_called_once_with(conn)
        pg_pool.closeall.assert_called_once()

    @patch("db.connection.pool.SimpleConnectionPool")
    def test_unreachable_database_propagates(self, mock_pool_cls):
        mock_pool_cls.side_effect = psycopg2.OperationalError("could not connect to server")
        provider = PooledConnectionProvider("postgresql://test")

        with pytest.raises(psycopg2.OperationalError):
            provider.acquire()
