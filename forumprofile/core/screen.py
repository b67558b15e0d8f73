"""Profile screen: fetch a member's profile and show it in a display surface."""

import asyncio
import weakref
from importlib import resources
from typing import Any, Callable, Sequence

from forumprofile.config import ProfileConfig
from forumprofile.core.activity import ActivityTracker
from forumprofile.core.bridge import (
    MESSAGE_NAMES,
    Rect,
    SendPrivateMessage,
    ShowHomepageActions,
    parse_bridge_message,
    resolve_url,
)
from forumprofile.core.client import ForumsClient
from forumprofile.core.renderer import TemplateRenderer
from forumprofile.exceptions import BridgeMessageError, RenderError, ScriptResourceError
from forumprofile.logging import get_logger
from forumprofile.models.user import User
from forumprofile.models.view_model import ProfileViewModel
from forumprofile.presentation import Presenter, ShareSheet
from forumprofile.surface.base import DisplaySurface

# Injected at the end of every document load, in this order
PROFILE_SCRIPTS = ("bridge.js", "common.js", "profile.js")

DEFAULT_TITLE = "Profile"


def load_script_resource(filename: str) -> str:
    """
    Read a bundled script.

    Raises:
        ScriptResourceError: If the script is missing or unreadable
    """
    try:
        script = resources.files("forumprofile.resources").joinpath("scripts").joinpath(filename)
        return script.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ScriptResourceError(f"could not load script {filename}") from e


class ProfileScreen:
    """
    Shows detailed information about a particular user.

    Example:
        screen = ProfileScreen(user, client, TemplateRenderer(), presenter, lambda: surface)
        await screen.load()
        screen.did_appear()
    """

    def __init__(
        self,
        user: User,
        client: ForumsClient,
        renderer: TemplateRenderer,
        presenter: Presenter,
        surface_factory: Callable[[], DisplaySurface],
        config: ProfileConfig | None = None,
        scripts: Sequence[str] = PROFILE_SCRIPTS,
    ):
        self.user = user
        self.client = client
        self.renderer = renderer
        self.presenter = presenter
        self.config = config or client.config
        self.title = user.username or DEFAULT_TITLE
        self.dark_theme = self.config.dark_theme

        self.surface: DisplaySurface | None = None
        self.activity: ActivityTracker | None = None

        self._surface_factory = surface_factory
        self._scripts = tuple(scripts)
        self._renders: set[asyncio.Task] = set()
        self._closed = False
        self._log = get_logger("profile_screen").bind(user_id=user.user_id)

    @property
    def base_url(self) -> str:
        return self.client.base_url

    @property
    def closed(self) -> bool:
        return self._closed

    def create_surface(self) -> DisplaySurface:
        """
        Build the display surface with scripts injected and bridge channels registered.

        Raises:
            ScriptResourceError: If any script resource cannot be loaded
        """
        sources = [load_script_resource(filename) for filename in self._scripts]

        # The surface must not keep the screen alive
        screen_ref = weakref.ref(self)

        def handle_message(name: str, body: Any) -> None:
            screen = screen_ref()
            if screen is not None:
                screen.did_receive_message(name, body)

        surface = self._surface_factory()
        for source in sources:
            surface.add_user_script(source)
        for name in MESSAGE_NAMES:
            surface.add_message_handler(name, handle_message)

        if self.activity is not None:
            self.activity.close()
        self.surface = surface
        self.activity = ActivityTracker(surface)
        return surface

    async def load(self) -> None:
        """Create the surface and show whatever is known about the user so far."""
        self.create_surface()
        await self.render_current()

    def _require_surface(self) -> DisplaySurface:
        if self.surface is None:
            raise RuntimeError("display surface not created; call load() first")
        return self.surface

    async def render_current(self) -> None:
        """Render the user's profile, or an empty document if it is not known yet."""
        surface = self._require_surface()

        html = ""
        profile = self.user.profile
        if profile is not None:
            view_model = ProfileViewModel.from_profile(profile, dark_mode=self.dark_theme)
            try:
                html = self.renderer.render(view_model, self.config.template_name)
            except RenderError as e:
                self._log.error(
                    "render_failed",
                    username=self.user.username,
                    error=str(e),
                )

        await surface.load_document(html, self.base_url)

    def did_appear(self) -> asyncio.Task:
        """
        Fetch the user's profile and re-render once it arrives.

        Failures are logged and leave the current document alone.

        Returns:
            The fetch task
        """
        screen_ref = weakref.ref(self)
        user_id, username = self.user.user_id, self.user.username
        log = self._log

        def completion(error, profile) -> None:
            screen = screen_ref()
            if screen is None or screen.closed:
                log.debug("profile_fetch_discarded", username=username)
                return
            if error is not None:
                log.error(
                    "profile_fetch_failed",
                    username=username,
                    error=str(error),
                    error_type=type(error).__name__,
                )
                return
            screen._profile_did_load(profile)

        return self.client.profile_user(user_id, username, completion)

    def _profile_did_load(self, profile) -> None:
        self.user.profile = profile
        if not self.user.username:
            self.user.username = profile.username
            self.title = profile.username

        task = asyncio.get_running_loop().create_task(self.render_current())
        self._renders.add(task)
        task.add_done_callback(self._renders.discard)

    async def wait_idle(self) -> None:
        """Wait for renders scheduled by completed fetches."""
        while self._renders:
            await asyncio.gather(*list(self._renders))

    async def theme_did_change(self, dark_theme: bool | None = None) -> None:
        """
        Push the dark mode flag into the loaded document.

        Args:
            dark_theme: New setting; re-reads the configured value if None
        """
        self.dark_theme = self.config.dark_theme if dark_theme is None else dark_theme
        if self.surface is None:
            return
        dark_mode = "true" if self.dark_theme else "false"
        await self.surface.evaluate_script(f"darkMode({dark_mode})")

    def did_receive_message(self, name: str, body: Any) -> None:
        """Dispatch a message posted by script in the profile document."""
        try:
            message = parse_bridge_message(name, body)
        except BridgeMessageError as e:
            self._log.warning("malformed_bridge_message", name=name, error=str(e))
            return

        if isinstance(message, SendPrivateMessage):
            self.send_private_message()
        elif isinstance(message, ShowHomepageActions):
            url = resolve_url(message.url, self.base_url)
            if url is not None:
                self.show_actions_for_homepage(url, message.rect)
        else:
            self._log.warning("unknown_bridge_message", name=message.name)

    def send_private_message(self) -> None:
        self.presenter.present_message_compose(self.user)

    def show_actions_for_homepage(self, url: str, rect: Rect) -> None:
        sheet = ShareSheet(items=[url], anchor=rect, source=self.surface)
        self.presenter.present_share_sheet(sheet)

    async def close(self) -> None:
        """Tear down the screen. Fetches still in flight are ignored when they finish."""
        self._closed = True
        for task in list(self._renders):
            task.cancel()
        if self.activity is not None:
            self.activity.close()
        if self.surface is not None:
            await self.surface.close()
