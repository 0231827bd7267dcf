"""Tests for config-driven log modes."""

import json
import logging
import os

import pytest

import arb_extractor.logger as logger_module
from arb_extractor.config import CONFIG_ENV_VAR
from arb_extractor.logger import _clear_log_mode_cache, get_logger


@pytest.fixture
def set_log_mode(tmp_path, monkeypatch):
    monkeypatch.setattr(logger_module, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(logger_module, "LOG_FILE", tmp_path / "logs" / "app.log")
    config_file = os.environ[CONFIG_ENV_VAR]

    def _set(mode):
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump({"log_mode": mode}, f)
        _clear_log_mode_cache()

    yield _set
    _set("off")


class TestLogModes:
    def test_debug_mode_writes_log_file(self, set_log_mode, tmp_path):
        set_log_mode("debug")
        logger = get_logger("arb_extractor.tests.debug")

        logger.debug("written to file")

        assert logger.level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert "written to file" in (tmp_path / "logs" / "app.log").read_text(encoding="utf-8")

    def test_off_mode_silences_existing_loggers(self, set_log_mode):
        set_log_mode("info")
        logger = get_logger("arb_extractor.tests.off")
        assert logger.level == logging.INFO

        set_log_mode("off")

        assert logger.level > logging.CRITICAL
        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
