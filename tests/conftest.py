"""Shared fakes for screen tests - no browser, no internet."""

from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from forumprofile.core.activity import NetworkActivityIndicator
from forumprofile.models.profile import Profile
from forumprofile.models.user import User
from forumprofile.presentation import Presenter, ShareSheet
from forumprofile.surface.base import DisplaySurface


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeSurface(DisplaySurface):
    """Records documents and scripts instead of displaying them."""

    def __init__(self):
        super().__init__()
        self.documents: list[tuple[str, str]] = []
        self.evaluated: list[str] = []
        self.closed = False

    async def load_document(self, html: str, base_url: str) -> None:
        self._set_loading(True)
        self.documents.append((html, base_url))
        self._set_loading(False)

    async def evaluate_script(self, code: str) -> Any:
        self.evaluated.append(code)
        return None

    async def close(self) -> None:
        await super().close()
        self.closed = True


class RecordingPresenter(Presenter):
    """Remembers what it was asked to present."""

    def __init__(self):
        self.compose_recipients: list[User] = []
        self.share_sheets: list[ShareSheet] = []

    def present_message_compose(self, recipient: User) -> None:
        self.compose_recipients.append(recipient)

    def present_share_sheet(self, sheet: ShareSheet) -> None:
        self.share_sheets.append(sheet)


def make_profile(**overrides) -> Profile:
    """Build a Profile with sensible defaults."""
    data = {
        "user_id": "42",
        "username": "tom",
        "about_text": "<p>I like boats.</p>",
        "homepage_url": "/u/tom",
        "icq_name": "12345678",
        "location": "Seattle",
        "post_count": 12345,
        "post_rate": "1.85",
        "registration_date": datetime(2004, 3, 4),
        "fetched_at": datetime(2026, 10, 19, 12, 0),
    }
    data.update(overrides)
    return Profile(**data)


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture
def indicator() -> NetworkActivityIndicator:
    return NetworkActivityIndicator()


@pytest.fixture
def profile_html() -> str:
    return (FIXTURES_DIR / "profile_tom.html").read_text(encoding="utf-8")
