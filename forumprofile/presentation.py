"""Screens presented in response to actions inside the profile document."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from rich.console import Console

from forumprofile.core.bridge import Rect
from forumprofile.models.user import User
from forumprofile.surface.base import DisplaySurface

# Extra share-sheet activities offered for homepage links
HOMEPAGE_ACTIVITIES = ("open-in-browser", "copy-link")


@dataclass
class ShareSheet:
    """Share/activity sheet anchored at a rectangle of a surface."""

    items: list[str]
    anchor: Rect
    source: DisplaySurface | None = None
    activities: list[str] = field(default_factory=lambda: list(HOMEPAGE_ACTIVITIES))


class Presenter(ABC):
    """Presents the screens the profile document can ask for."""

    @abstractmethod
    def present_message_compose(self, recipient: User) -> None:
        """Show a modal private message compose screen addressed to recipient."""
        ...

    @abstractmethod
    def present_share_sheet(self, sheet: ShareSheet) -> None:
        """Show a share sheet."""
        ...


class ConsolePresenter(Presenter):
    """Presenter for the command line: prints what would be shown."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def present_message_compose(self, recipient: User) -> None:
        name = recipient.username or f"user {recipient.user_id}"
        self.console.print(f"[bold]New private message[/bold] to {name}")

    def present_share_sheet(self, sheet: ShareSheet) -> None:
        rect = sheet.anchor
        self.console.print(
            f"[bold]Share[/bold] {', '.join(sheet.items)} "
            f"[dim]at ({rect.x:g}, {rect.y:g}, {rect.width:g}, {rect.height:g})[/dim]"
        )
        for activity in sheet.activities:
            self.console.print(f"  [dim]-[/dim] {activity}")
