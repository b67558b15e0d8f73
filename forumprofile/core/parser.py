"""BeautifulSoup-based HTML parser for forum member profile pages."""

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from forumprofile.utils.sequences import find_first


@dataclass
class ParseResult:
    """Result of parsing a profile page."""

    profile_data: dict
    parse_errors: list[str] = field(default_factory=list)


# Selectors - centralized for easy updates when the forum changes its markup
SELECTORS = {
    "user_id": 'input[name="userid"]',
    "author": "dl.userinfo dt.author",
    "title": "dl.userinfo dd.title",
    "contacts": "dl.contacts",
    "additional": "dl.additional",
    "about": "div.about",
    "profile_picture": "div.userpic img",
    "pm_link": 'a[href*="private.php?action=newmessage"]',
    "login_form": 'form[action*="account.php"] input[name="password"]',
    "error_page": "div.standarderror",
}

# Contact labels on the page -> raw profile keys
CONTACT_FIELDS = {
    "AIM": "aim_name",
    "ICQ": "icq_name",
    "Yahoo!": "yahoo_name",
    "Homepage": "homepage_url",
}

# Additional info labels on the page -> raw profile keys
ADDITIONAL_FIELDS = {
    "Member Since": "registration_date_raw",
    "Post Count": "post_count_raw",
    "Post Rate": "post_rate_raw",
    "Last Post": "last_post_date_raw",
    "Gender": "gender",
    "Location": "location",
    "Interests": "interests",
    "Occupation": "occupation",
}


def _definition_pairs(dl: Tag) -> list[tuple[str, Tag]]:
    """Pair each <dt> label with the <dd> that follows it."""
    pairs = []
    for dt in dl.find_all("dt"):
        dd = dt.find_next_sibling("dd")
        if dd is not None:
            pairs.append((dt.get_text(strip=True).rstrip(":"), dd))
    return pairs


def _dd_value(dd: Tag) -> str | None:
    """Text of a <dd>, or None for the forum's "unset" placeholder."""
    if "unset" in (dd.get("class") or []):
        return None
    text = dd.get_text(" ", strip=True)
    return text or None


def _parse_definitions(dl: Tag | None, fields: dict[str, str], profile: dict) -> None:
    if dl is None:
        return
    pairs = _definition_pairs(dl)
    for label, key in fields.items():
        pair = find_first(pairs, lambda p: p[0] == label)
        if pair is None:
            continue
        dd = pair[1]
        if key == "homepage_url":
            link = dd.find("a")
            value = link.get("href") if link is not None else _dd_value(dd)
        else:
            value = _dd_value(dd)
        if value:
            profile[key] = value


def parse_profile(soup: BeautifulSoup) -> dict:
    """
    Extract profile data from parsed HTML.

    Args:
        soup: BeautifulSoup object of the page

    Returns:
        Dict with raw profile data (not yet validated)
    """
    profile = {}

    user_id_el = soup.select_one(SELECTORS["user_id"])
    if user_id_el and user_id_el.get("value"):
        profile["user_id"] = user_id_el.get("value")

    author_el = soup.select_one(SELECTORS["author"])
    if author_el:
        profile["username"] = author_el.get_text(strip=True)

    # Custom title holds arbitrary markup, the avatar is the first image in it
    title_el = soup.select_one(SELECTORS["title"])
    if title_el:
        avatar = title_el.find("img")
        if avatar and avatar.get("src"):
            profile["avatar_url"] = avatar.get("src")
        title_html = title_el.decode_contents().strip()
        if title_html:
            profile["custom_title_html"] = title_html

    _parse_definitions(soup.select_one(SELECTORS["contacts"]), CONTACT_FIELDS, profile)
    _parse_definitions(soup.select_one(SELECTORS["additional"]), ADDITIONAL_FIELDS, profile)

    about_el = soup.select_one(SELECTORS["about"])
    if about_el:
        about_html = about_el.decode_contents().strip()
        if about_html:
            profile["about_text"] = about_html

    picture_el = soup.select_one(SELECTORS["profile_picture"])
    if picture_el and picture_el.get("src"):
        profile["profile_picture_url"] = picture_el.get("src")

    profile["private_messages_work"] = bool(soup.select_one(SELECTORS["pm_link"]))

    return profile


def detect_page_kind(soup: BeautifulSoup) -> str:
    """
    Classify a response page.

    Returns:
        "login" if the forum asked us to log in, "error" for a forum error
        page, otherwise "profile"
    """
    if soup.select_one(SELECTORS["login_form"]):
        return "login"
    if soup.select_one(SELECTORS["error_page"]):
        return "error"
    return "profile"


def parse_page(html: str) -> ParseResult:
    """
    Full page parsing.

    Args:
        html: Raw HTML content

    Returns:
        ParseResult with profile_data and any parse_errors
    """
    soup = BeautifulSoup(html, "lxml")
    errors = []

    kind = detect_page_kind(soup)
    if kind == "login":
        return ParseResult(profile_data={}, parse_errors=["Login required"])
    if kind == "error":
        message = soup.select_one(SELECTORS["error_page"]).get_text(" ", strip=True)
        return ParseResult(profile_data={}, parse_errors=[f"Forum error: {message}"])

    try:
        profile_data = parse_profile(soup)
    except Exception as e:
        profile_data = {}
        errors.append(f"Profile parse error: {e}")

    return ParseResult(profile_data=profile_data, parse_errors=errors)
