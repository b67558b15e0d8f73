"""Unit tests for bridge message parsing."""

import pytest

from forumprofile.core.bridge import (
    Rect,
    SendPrivateMessage,
    ShowHomepageActions,
    UnknownMessage,
    parse_bridge_message,
    parse_rect,
    resolve_url,
)
from forumprofile.exceptions import BridgeMessageError


class TestParseRect:
    """Test rectangle decoding."""

    def test_plain_numbers(self):
        assert parse_rect("10,20,30,40") == Rect(10, 20, 30, 40)

    def test_fractions_and_spaces(self):
        assert parse_rect(" 1.5, -2 , 30.25,40 ") == Rect(1.5, -2, 30.25, 40)

    def test_braced_format(self):
        assert parse_rect("{{10, 20}, {30, 40}}") == Rect(10, 20, 30, 40)

    @pytest.mark.parametrize("text", ["", "1,2,3", "1,2,3,4,5", "a,b,c,d", "10,20,,40"])
    def test_malformed(self, text):
        with pytest.raises(BridgeMessageError):
            parse_rect(text)

    def test_non_string(self):
        with pytest.raises(BridgeMessageError):
            parse_rect([10, 20, 30, 40])


class TestResolveUrl:
    """Test relative URL resolution."""

    def test_relative_path(self):
        assert resolve_url("/u/tom", "https://example.com") == "https://example.com/u/tom"

    def test_relative_to_base_directory(self):
        assert resolve_url("member.php?userid=1", "https://example.com/forum/") == (
            "https://example.com/forum/member.php?userid=1"
        )

    def test_absolute_url_kept(self):
        assert resolve_url("http://tom.example.org/", "https://example.com/") == "http://tom.example.org/"

    def test_empty_url(self):
        assert resolve_url("", "https://example.com/") is None

    def test_unresolvable_without_host(self):
        assert resolve_url("/u/tom", "not a url") is None

    def test_invalid_url(self):
        assert resolve_url("http://[::1", "https://example.com/") is None


class TestParseBridgeMessage:
    """Test message decoding."""

    def test_send_private_message(self):
        assert parse_bridge_message("sendPrivateMessage", None) == SendPrivateMessage()

    def test_send_private_message_ignores_body(self):
        assert parse_bridge_message("sendPrivateMessage", {"x": 1}) == SendPrivateMessage()

    def test_show_homepage_actions(self):
        message = parse_bridge_message(
            "showHomepageActions",
            {"URL": "/u/tom", "rect": "10,20,30,40"},
        )
        assert message == ShowHomepageActions(url="/u/tom", rect=Rect(10, 20, 30, 40))

    def test_unknown(self):
        assert parse_bridge_message("bogus", {"URL": "x"}) == UnknownMessage(name="bogus")

    @pytest.mark.parametrize("body", [
        None,
        "10,20,30,40",
        {"URL": "/u/tom"},
        {"rect": "10,20,30,40"},
        {"URL": 5, "rect": "10,20,30,40"},
        {"URL": "/u/tom", "rect": "nope"},
    ])
    def test_malformed_homepage_actions(self, body):
        with pytest.raises(BridgeMessageError):
            parse_bridge_message("showHomepageActions", body)
