"""Unit tests for the command-line interface - no network or browser."""

import pytest
from typer.testing import CliRunner

from forumprofile import cli
from forumprofile.core.client import ForumsClient
from forumprofile.exceptions import RenderError

from conftest import make_profile


runner = CliRunner()


class ExplodingRenderer:
    def render(self, view_model, template_name):
        raise RenderError("template exploded")


@pytest.fixture
def offline(monkeypatch, tmp_path):
    """Disable the cache and serve a canned profile."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FORUMPROFILE_CACHE_BACKEND", "none")

    async def fetch_profile(self, user_id, username=None, force_refresh=False):
        return make_profile(user_id=user_id)

    monkeypatch.setattr(ForumsClient, "fetch_profile", fetch_profile)
    return tmp_path


class TestRenderCommand:
    """Test the render command."""

    def test_writes_document(self, offline):
        output = offline / "profile.html"
        result = runner.invoke(cli.app, ["render", "42", "--output", str(output), "--quiet"])

        assert result.exit_code == 0
        assert '<h1 id="username">tom</h1>' in output.read_text(encoding="utf-8")

    def test_render_failure_exits_cleanly(self, offline, monkeypatch):
        monkeypatch.setattr(cli, "TemplateRenderer", ExplodingRenderer)
        output = offline / "profile.html"

        result = runner.invoke(cli.app, ["render", "42", "--output", str(output)])

        assert result.exit_code == 1
        assert "Failed to render profile: template exploded" in result.output
        assert "Traceback" not in result.output
        assert not output.exists()

    def test_bad_log_level_exits_cleanly(self, offline, monkeypatch):
        monkeypatch.setenv("FORUMPROFILE_LOG_LEVEL", "chatty")
        output = offline / "profile.html"

        result = runner.invoke(cli.app, ["render", "42", "--output", str(output)])

        assert result.exit_code == 1
        assert "unknown log level" in result.output
