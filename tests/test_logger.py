from __future__ import annotations

import sys

import pytest
from loguru import logger

from tablemeta.utils.logger import get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_file_handler_records_bound_module_name(tmp_path) -> None:
    log_file = tmp_path / "logs" / "tablemeta.log"
    setup_logging(level="INFO", log_file=log_file)

    get_logger("tablemeta.extractors.table_info").warning("Failed to fetch indexes for orders")
    get_logger().info("default name")
    logger.info("unbound record")
    get_logger("tablemeta.config").debug("below threshold")
    logger.remove()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    assert "| WARNING  | tablemeta.extractors.table_info:" in lines[0]
    assert lines[0].endswith("| Failed to fetch indexes for orders")
    assert "| tablemeta:" in lines[1]
    assert "| tablemeta:" in lines[2]


def test_console_handler_respects_level(capsys) -> None:
    setup_logging(level="WARNING")

    get_logger("tablemeta.main").info("hidden")
    get_logger("tablemeta.main").error("shown")

    err = capsys.readouterr().err
    assert "hidden" not in err
    assert "shown" in err
    assert "tablemeta.main" in err
