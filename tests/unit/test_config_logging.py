"""Tests for settings loading and structlog configuration."""

import logging

import pytest
import structlog
from pydantic import ValidationError

from spcinsight.core.config import Settings, get_settings
from spcinsight.core.logging import configure_logging
from spcinsight.utils.statistics import DEFAULT_ZERO_SIGMA_EPSILON, guard_sigma


class TestSettings:

    def test_defaults(self, settings: Settings):
        assert settings.default_sample_size == 5
        assert settings.zero_sigma_epsilon == 1e-6
        assert settings.stat_decimals == 4
        assert settings.index_decimals == 2
        assert settings.spec_decimals == 3
        assert settings.log_format == "console"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPCINSIGHT_DEFAULT_SAMPLE_SIZE", "3")
        monkeypatch.setenv("SPCINSIGHT_ZERO_SIGMA_EPSILON", "0.001")
        settings = get_settings()
        assert settings.default_sample_size == 3
        assert settings.zero_sigma_epsilon == 0.001

    def test_epsilon_default_matches_guard_default(self, settings: Settings):
        assert settings.zero_sigma_epsilon == DEFAULT_ZERO_SIGMA_EPSILON
        assert guard_sigma(0.0) == settings.zero_sigma_epsilon

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_sample_size_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_sample_size=6)

    def test_epsilon_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, zero_sigma_epsilon=0)

    def test_settings_are_frozen(self, settings: Settings):
        with pytest.raises(ValidationError):
            settings.stat_decimals = 6


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:

    @pytest.mark.usefixtures("restore_logging")
    def test_installs_single_stderr_handler(self):
        configure_logging(log_format="json", log_level="DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        assert root.level == logging.DEBUG

    @pytest.mark.usefixtures("restore_logging")
    def test_falls_back_to_settings(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPCINSIGHT_LOG_LEVEL", "WARNING")
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    @pytest.mark.usefixtures("restore_logging")
    def test_unknown_level_defaults_to_info(self):
        configure_logging(log_format="console", log_level="chatty")
        assert logging.getLogger().level == logging.INFO
