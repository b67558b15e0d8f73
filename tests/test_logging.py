"""Unit tests for logging setup."""

import logging

import pytest

from forumprofile.config import LogFormat, ProfileConfig
from forumprofile.exceptions import ConfigError, ForumProfileError
from forumprofile.logging import configure_logging
from forumprofile.logging.setup import resolve_level


class TestResolveLevel:
    """Test level name lookup."""

    @pytest.mark.parametrize("name,expected", [
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        (" Warning ", logging.WARNING),
        ("error", logging.ERROR),
    ])
    def test_known_levels(self, name, expected):
        assert resolve_level(name) == expected

    @pytest.mark.parametrize("name", ["verbose", "", "loud"])
    def test_unknown_level_raises(self, name):
        with pytest.raises(ConfigError):
            resolve_level(name)


class TestConfigureLogging:
    """Test structlog configuration from ProfileConfig."""

    @pytest.mark.parametrize("log_format", [LogFormat.JSON, LogFormat.CONSOLE])
    def test_configures_both_formats(self, log_format):
        configure_logging(ProfileConfig(log_format=log_format, log_level="debug"))

    def test_unknown_level_from_env(self, monkeypatch):
        monkeypatch.setenv("FORUMPROFILE_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError, match="chatty"):
            configure_logging(ProfileConfig())

    def test_config_error_is_forumprofile_error(self):
        assert issubclass(ConfigError, ForumProfileError)
