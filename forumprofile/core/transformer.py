"""Data transformation and normalization for parsed profile pages."""

import re
from datetime import datetime

from forumprofile.core.parser import ParseResult
from forumprofile.exceptions import ParseError
from forumprofile.models.profile import Profile

DATE_FORMATS = [
    "%b %d, %Y %H:%M",
    "%b %d, %Y %I:%M %p",
    "%B %d, %Y %H:%M",
    "%b %d, %Y",
    "%B %d, %Y",
]


def normalize_count(count_str: str | None) -> int:
    """
    Convert count strings to integers.

    Examples:
        "1,234" -> 1234
        "500" -> 500
        None -> 0
    """
    if not count_str:
        return 0

    count_str = count_str.strip().replace(",", "")
    match = re.match(r"\d+", count_str)
    if not match:
        return 0
    return int(match.group())


def normalize_post_rate(rate_str: str | None) -> str | None:
    """
    Strip the unit from a post rate.

    Examples:
        "0.52 per day" -> "0.52"
        "12" -> "12"
    """
    if not rate_str:
        return None
    match = re.match(r"\s*([\d.,]+)", rate_str)
    if not match:
        return None
    return match.group(1)


def parse_forum_date(date_str: str | None) -> datetime | None:
    """
    Parse a date as printed on forum pages.

    Examples:
        "Mar 4, 2004" -> datetime(2004, 3, 4)
        "Oct 19, 2026 13:37" -> datetime(2026, 10, 19, 13, 37)
    """
    if not date_str:
        return None

    date_str = " ".join(date_str.split())
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(date_str, fmt)
        except ValueError:
            continue
    return None


def transform_profile(parse_result: ParseResult, user_id: str, username: str | None = None) -> Profile:
    """
    Validate raw parsed data into a Profile.

    Args:
        parse_result: Output of parse_page
        user_id: Requested user ID, used when the page does not carry one
        username: Requested username, used when the page does not carry one

    Returns:
        Profile

    Raises:
        ParseError: If the page held no recognizable profile
    """
    raw = parse_result.profile_data
    resolved_username = raw.get("username") or username
    if not raw or not resolved_username:
        detail = "; ".join(parse_result.parse_errors) or "no profile found on page"
        raise ParseError(f"Could not parse profile for user {user_id or username}: {detail}")

    return Profile(
        user_id=raw.get("user_id") or user_id,
        username=resolved_username,
        custom_title_html=raw.get("custom_title_html"),
        about_text=raw.get("about_text"),
        avatar_url=raw.get("avatar_url"),
        profile_picture_url=raw.get("profile_picture_url"),
        homepage_url=raw.get("homepage_url"),
        aim_name=raw.get("aim_name"),
        icq_name=raw.get("icq_name"),
        yahoo_name=raw.get("yahoo_name"),
        gender=raw.get("gender"),
        location=raw.get("location"),
        interests=raw.get("interests"),
        occupation=raw.get("occupation"),
        post_count=normalize_count(raw.get("post_count_raw")),
        post_rate=normalize_post_rate(raw.get("post_rate_raw")),
        registration_date=parse_forum_date(raw.get("registration_date_raw")),
        last_post_date=parse_forum_date(raw.get("last_post_date_raw")),
        private_messages_work=raw.get("private_messages_work", True),
        fetched_at=datetime.now(),
    )
