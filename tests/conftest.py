from __future__ import annotations

import os
from types import SimpleNamespace
from typing import Any

import pytest
from loguru import logger
from sqlalchemy import create_engine, text

from tablemeta.config import get_settings

ORDERS_DDL = [
    """
    CREATE TABLE orders (
        id BIGINT PRIMARY KEY,
        ref VARCHAR(20) NOT NULL,
        status VARCHAR(32) NOT NULL DEFAULT 'new',
        note TEXT
    )
    """,
    "CREATE UNIQUE INDEX uq_orders_ref ON orders (ref)",
    "CREATE INDEX ix_orders_status_note ON orders (status, note)",
    "CREATE TABLE customers (id INTEGER PRIMARY KEY, email TEXT NOT NULL)",
    "CREATE TABLE order_lines (order_id BIGINT, line INTEGER, sku TEXT, PRIMARY KEY (order_id, line))",
]


class FakeResult:
    """Stands in for a CursorResult: mapping rows plus a cursor description."""

    def __init__(self, rows: list[dict] | None = None, description: list[tuple] | None = None):
        self._rows = list(rows or [])
        self.cursor = SimpleNamespace(description=description)
        self.closed = False

    def mappings(self) -> "FakeResult":
        return self

    def all(self) -> list[dict]:
        return list(self._rows)

    def close(self) -> None:
        self.closed = True


class FakeConnection:
    """
    Connection double answering statements by substring match.

    responses: list of (needle, FakeResult | Exception); the first needle
    found in the statement text wins.
    """

    def __init__(self, dialect: Any, responses: list[tuple[str, Any]] | None = None):
        self.dialect = dialect
        self.responses = list(responses or [])
        self.statements: list[tuple[str, Any]] = []

    def execute(self, statement: Any, params: Any = None) -> FakeResult:
        sql = str(statement)
        self.statements.append((sql, params))
        for needle, response in self.responses:
            if needle in sql:
                if isinstance(response, Exception):
                    raise response
                return response
        raise AssertionError(f"unexpected statement: {sql}")


@pytest.fixture
def fake_connection():
    return FakeConnection


@pytest.fixture
def fake_result():
    return FakeResult


@pytest.fixture
def sqlite_connection():
    engine = create_engine("sqlite://")
    with engine.connect() as conn:
        for ddl in ORDERS_DDL:
            conn.execute(text(ddl))
        yield conn
    engine.dispose()


@pytest.fixture
def sqlite_file(tmp_path):
    path = tmp_path / "shop.db"
    engine = create_engine(f"sqlite:///{path}")
    with engine.begin() as conn:
        for ddl in ORDERS_DDL:
            conn.execute(text(ddl))
    engine.dispose()
    return path


@pytest.fixture
def warnings_logged():
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Isolate Settings from the developer's environment and .env file."""
    for key in list(os.environ):
        if key.upper().startswith("DB_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
