"""Unit tests for session logger setup."""

import pytest
from loguru import logger

from folio import __version__
from folio.utils.logger import setup_logger


@pytest.fixture(autouse=True)
def reset_loguru():
    yield
    logger.remove()


@pytest.mark.unit
def test_setup_logger_creates_session_log(tmp_path):
    log_dir = tmp_path / "render_20260101_000000"

    log_file = setup_logger("render", log_dir)

    assert log_file == log_dir / "render.log"
    assert log_file.exists()


@pytest.mark.unit
def test_session_header_records_build_and_settings(tmp_path):
    log_file = setup_logger("portfolio", tmp_path, settings={"Portfolio database": "outs/p.db"})
    logger.debug("after header")

    text = log_file.read_text(encoding="utf-8")

    assert f"Folio {__version__} portfolio session" in text
    assert f"Log file: {log_file}" in text
    assert "Portfolio database: outs/p.db" in text
    assert "after header" in text
