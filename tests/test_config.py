"""Unit tests for configuration management."""

from forumprofile.config import ProfileConfig, CacheBackend, LogFormat


class TestProfileConfigDefaults:
    """Test default configuration values."""

    def test_default_base_url(self):
        config = ProfileConfig()
        assert config.base_url == "https://forums.somethingawful.com/"

    def test_default_timeout(self):
        config = ProfileConfig()
        assert config.fetch_timeout_seconds == 30.0

    def test_default_template(self):
        config = ProfileConfig()
        assert config.template_name == "profile.html"

    def test_default_cache_backend(self):
        config = ProfileConfig()
        assert config.cache_backend == CacheBackend.SQLITE

    def test_default_log_format(self):
        config = ProfileConfig()
        assert config.log_format == LogFormat.CONSOLE

    def test_default_dark_theme_off(self):
        config = ProfileConfig()
        assert config.dark_theme is False


class TestProfileConfigEnvVars:
    """Test configuration from environment variables."""

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("FORUMPROFILE_BASE_URL", "https://forums.example.com/")
        config = ProfileConfig()
        assert config.base_url == "https://forums.example.com/"

    def test_dark_theme_from_env(self, monkeypatch):
        monkeypatch.setenv("FORUMPROFILE_DARK_THEME", "true")
        config = ProfileConfig()
        assert config.dark_theme is True

    def test_cache_backend_from_env(self, monkeypatch):
        monkeypatch.setenv("FORUMPROFILE_CACHE_BACKEND", "none")
        config = ProfileConfig()
        assert config.cache_backend == CacheBackend.NONE

    def test_log_level_from_env(self, monkeypatch):
        monkeypatch.setenv("FORUMPROFILE_LOG_LEVEL", "DEBUG")
        config = ProfileConfig()
        assert config.log_level == "DEBUG"

    def test_cookies_from_env(self, monkeypatch):
        monkeypatch.setenv("FORUMPROFILE_COOKIES", '{"bbuserid": "42", "bbpassword": "hash"}')
        config = ProfileConfig()
        assert config.cookies == {"bbuserid": "42", "bbpassword": "hash"}


class TestEnums:
    """Test enum values."""

    def test_cache_backends(self):
        assert CacheBackend.SQLITE.value == "sqlite"
        assert CacheBackend.NONE.value == "none"

    def test_log_formats(self):
        assert LogFormat.JSON.value == "json"
        assert LogFormat.CONSOLE.value == "console"
