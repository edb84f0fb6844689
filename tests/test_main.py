from __future__ import annotations

import json
import sys

import pytest
from loguru import logger
from typer.testing import CliRunner

from tablemeta import __version__
from tablemeta.extractors.metadata_providers import SQLiteMetadataProvider
from tablemeta.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def local_db(clean_settings, monkeypatch, sqlite_file):
    monkeypatch.setenv("DB_LOCAL_TYPE", "sqlite")
    monkeypatch.setenv("DB_LOCAL_DATABASE", str(sqlite_file))
    return sqlite_file


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_columns_json_includes_indexes(local_db) -> None:
    result = runner.invoke(app, ["columns", "orders", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [c["column_name"] for c in payload] == ["id", "ref", "status", "note"]
    assert payload[0]["indexes"][0]["index_name"] == "PRIMARY"
    assert payload[3]["indexes"][0]["seq_in_index"] == 2


def test_columns_json_without_indexes(local_db) -> None:
    result = runner.invoke(app, ["columns", "orders", "--json", "--no-indexes", "--db", "local"])

    assert result.exit_code == 0, result.output
    assert all(c["indexes"] == [] for c in json.loads(result.stdout))


def test_columns_table_output(local_db) -> None:
    result = runner.invoke(app, ["columns", "orders", "--no-indexes"])

    assert result.exit_code == 0, result.output
    assert "status" in result.stdout
    assert "orders" in result.stdout


def test_columns_unknown_database(local_db) -> None:
    result = runner.invoke(app, ["columns", "orders", "--db", "nope"])

    assert result.exit_code == 1
    assert "not configured" in result.stdout


def test_config_lists_databases(local_db) -> None:
    result = runner.invoke(app, ["config"])

    assert result.exit_code == 0
    assert "LOCAL" in result.stdout
    assert "sqlite" in result.stdout


def test_columns_skips_indexes_when_dialect_has_none(local_db, monkeypatch) -> None:
    monkeypatch.setattr(SQLiteMetadataProvider, "supports_indexes", False)
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    result = runner.invoke(app, ["columns", "orders", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [c["column_name"] for c in payload] == ["id", "ref", "status", "note"]
    assert all(c["indexes"] == [] for c in payload)
