"""Tests for engine setup and table creation."""

from __future__ import annotations

from expensedesk.database.database import _engine_kwargs, test_connection as check_connection
from expensedesk.database.migration import has_table, run_migration
from expensedesk.database.models.record import Record


class TestEngineKwargs:

    def test_in_memory_sqlite_shares_one_connection(self) -> None:
        kwargs = _engine_kwargs("sqlite://")
        assert kwargs["connect_args"] == {"check_same_thread": False}
        assert "poolclass" in kwargs

    def test_file_sqlite(self) -> None:
        assert "poolclass" not in _engine_kwargs("sqlite:///./expensedesk.db")

    def test_postgres_pool_settings(self) -> None:
        kwargs = _engine_kwargs("postgresql://user:pw@db/expenses")
        assert kwargs["pool_pre_ping"] is True
        assert kwargs["connect_args"]["application_name"] == "expensedesk_api"


class TestMigration:

    def test_connection_and_table_creation(self) -> None:
        assert check_connection() is True
        run_migration()
        assert has_table(Record.__tablename__)

    def test_migration_is_idempotent(self) -> None:
        run_migration()
        run_migration()
        assert has_table("kv_records")
