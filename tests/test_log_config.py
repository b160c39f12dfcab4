"""Tests for the stderr level filter."""

from types import SimpleNamespace

import pytest
from loguru import logger

from conversation_manager import log_config


def _record(name: str, level: str) -> dict:
    return {"extra": {"name": name}, "level": SimpleNamespace(no=logger.level(level).no)}


@pytest.fixture
def levels(monkeypatch):
    monkeypatch.setattr(log_config, "_global_log_level", "INFO")
    monkeypatch.setattr(log_config, "_component_log_levels", {"dispatch": "", "store": ""})


class TestLogFilter:

    def test_global_level(self, levels):
        assert log_config._log_filter(_record("server", "INFO"))
        assert not log_config._log_filter(_record("server", "DEBUG"))

    def test_component_override(self, levels, monkeypatch):
        monkeypatch.setitem(log_config._component_log_levels, "dispatch", "DEBUG")

        assert log_config._log_filter(_record("dispatch", "DEBUG"))
        assert not log_config._log_filter(_record("store", "DEBUG"))

    def test_bad_override_falls_back_to_global(self, levels, monkeypatch):
        monkeypatch.setitem(log_config._component_log_levels, "store", "LOUD")

        assert not log_config._log_filter(_record("store", "DEBUG"))
        assert log_config._log_filter(_record("store", "WARNING"))

    def test_bad_global_level_lets_everything_through(self, levels, monkeypatch):
        monkeypatch.setattr(log_config, "_global_log_level", "LOUD")
        assert log_config._log_filter(_record("server", "TRACE"))


class TestLogTiming:

    def test_elapsed_recorded(self):
        with log_config.log_timing("noop", log_config.get_logger("test")) as timing:
            pass
        assert timing["elapsed_ms"] >= 0.0
