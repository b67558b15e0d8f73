"""Messages posted from script running in the profile document."""

import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import urljoin, urlparse

from forumprofile.exceptions import BridgeMessageError

SEND_PRIVATE_MESSAGE = "sendPrivateMessage"
SHOW_HOMEPAGE_ACTIONS = "showHomepageActions"

MESSAGE_NAMES = (SEND_PRIVATE_MESSAGE, SHOW_HOMEPAGE_ACTIONS)

_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


@dataclass(frozen=True)
class Rect:
    """Rectangle in surface coordinates."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class SendPrivateMessage:
    """User tapped the "send private message" link."""


@dataclass(frozen=True)
class ShowHomepageActions:
    """User tapped the homepage link at ``rect``."""

    url: str
    rect: Rect


@dataclass(frozen=True)
class UnknownMessage:
    """Message with a name nobody handles."""

    name: str


BridgeMessage = SendPrivateMessage | ShowHomepageActions | UnknownMessage


def parse_rect(text: str) -> Rect:
    """
    Parse a rectangle encoded as four comma-separated numbers.

    Examples:
        "10,20,30,40" -> Rect(10, 20, 30, 40)
        "{{10, 20}, {30, 40}}" -> Rect(10, 20, 30, 40)

    Raises:
        BridgeMessageError: If the string does not hold exactly four numbers
    """
    if not isinstance(text, str):
        raise BridgeMessageError(f"rect must be a string, got {type(text).__name__}")

    stripped = text.replace("{", "").replace("}", "")
    parts = [part.strip() for part in stripped.split(",")]
    if len(parts) != 4 or not all(_NUMBER.fullmatch(part) for part in parts):
        raise BridgeMessageError(f"Malformed rect: {text!r}")

    x, y, width, height = (float(part) for part in parts)
    return Rect(x=x, y=y, width=width, height=height)


def resolve_url(url: str, base_url: str) -> str | None:
    """
    Resolve a possibly relative URL against the document's base address.

    Returns:
        Absolute URL, or None if the result has no scheme or host
    """
    if not url:
        return None
    try:
        resolved = urljoin(base_url, url.strip())
        parsed = urlparse(resolved)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return resolved


def parse_bridge_message(name: str, body: Any) -> BridgeMessage:
    """
    Turn a named message and its body into a typed message.

    Raises:
        BridgeMessageError: If a known message has a malformed body
    """
    if name == SEND_PRIVATE_MESSAGE:
        return SendPrivateMessage()

    if name == SHOW_HOMEPAGE_ACTIONS:
        if not isinstance(body, dict):
            raise BridgeMessageError(f"{name} body must be an object")
        url = body.get("URL")
        rect = body.get("rect")
        if not isinstance(url, str) or rect is None:
            raise BridgeMessageError(f"{name} body requires URL and rect")
        return ShowHomepageActions(url=url, rect=parse_rect(rect))

    return UnknownMessage(name=name)
