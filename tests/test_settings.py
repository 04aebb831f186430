"""Tests for environment driven settings and logger setup."""

import logging

import pytest

from utils.exceptions import ConfigError
from utils.logger import get_logger
from utils.settings import Settings, get_settings, load_settings


class TestLoadSettings:
    def test_defaults(self):
        s = load_settings()
        assert s.debug is __debug__
        assert s.log_level == "INFO"
        assert s.log_rich_tracebacks is True

    @pytest.mark.parametrize("raw, expected", [("1", True), ("yes", True), ("ON", True), ("0", False), ("false", False), ("off", False)])
    def test_debug_flag(self, monkeypatch, raw, expected):
        monkeypatch.setenv("INSTRUMENT_DEBUG", raw)
        assert load_settings().debug is expected

    def test_blank_flag_uses_default(self, monkeypatch):
        monkeypatch.setenv("INSTRUMENT_DEBUG", "  ")
        assert load_settings().debug is Settings().debug

    def test_invalid_flag(self, monkeypatch):
        monkeypatch.setenv("INSTRUMENT_DEBUG", "maybe")
        with pytest.raises(ConfigError, match="INSTRUMENT_DEBUG"):
            load_settings()

    def test_log_level_normalized(self, monkeypatch):
        monkeypatch.setenv("INSTRUMENT_LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("INSTRUMENT_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError, match="INSTRUMENT_LOG_LEVEL"):
            load_settings()


class TestGetSettings:
    def test_cached_until_cleared(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("INSTRUMENT_DEBUG", "0" if first.debug else "1")
        assert get_settings() is first
        get_settings.cache_clear()
        assert get_settings().debug is not first.debug


class TestLogger:
    def test_named_logger(self):
        log = get_logger("tests.logger")
        assert isinstance(log, logging.Logger)
        assert log.name == "tests.logger"
