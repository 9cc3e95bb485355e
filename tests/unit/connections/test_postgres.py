"""
Unit tests for src/connections/postgres.py
"""

import asyncio

import pytest

from config.settings import PostgresSettings
from src.connections.postgres import PostgresConnection
from src.connections.schema import SCHEMA_STATEMENTS
from tests.fixtures.asyncpg import FakeConnection, FakePool


def connected(conn: FakeConnection) -> PostgresConnection:
    postgres = PostgresConnection(PostgresSettings(host="db", user="u", password="p", database="d"))
    postgres._pool = FakePool(conn)
    return postgres


class TestPostgresConnection:
    """Tests for PostgresConnection."""

    def test_dsn(self):
        settings = PostgresSettings(host="db", port=5433, user="u", password="p", database="d")
        assert settings.dsn == "postgresql://u:p@db:5433/d"

    def test_pool_before_connect(self):
        with pytest.raises(RuntimeError):
            PostgresConnection(PostgresSettings()).pool

    def test_ensure_schema_in_one_transaction(self):
        conn = FakeConnection()
        asyncio.run(connected(conn).ensure_schema())

        assert conn.log[0] == "BEGIN"
        assert conn.log[-1] == "COMMIT"
        assert len(conn.queries) == len(SCHEMA_STATEMENTS)

    def test_schema_tables(self):
        ddl = " ".join(SCHEMA_STATEMENTS)
        for table in ("users", "roommate_preferences", "likes", "passes", "notifications"):
            assert f"CREATE TABLE IF NOT EXISTS {table}" in ddl

    def test_transaction_rolls_back_on_error(self):
        conn = FakeConnection()
        postgres = connected(conn)

        async def scenario():
            async with postgres.transaction() as c:
                await c.execute("DELETE FROM passes")
                raise ValueError("boom")

        with pytest.raises(ValueError):
            asyncio.run(scenario())
        assert conn.log[-1] == "ROLLBACK"

    def test_ping(self):
        assert asyncio.run(connected(FakeConnection(fetchval=[1])).ping()) is True
