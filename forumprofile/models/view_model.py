"""Render-ready projection of a Profile."""

from dataclasses import dataclass, field
from datetime import datetime

from forumprofile.models.profile import Profile
from forumprofile.utils.sequences import any_match


@dataclass(frozen=True)
class ContactInfo:
    """One row of the contact section."""

    service: str
    address: str


def format_date(value: datetime | None) -> str | None:
    """Format as e.g. "Mar 4, 2004"."""
    if value is None:
        return None
    return f"{value:%b} {value.day}, {value.year}"


def format_datetime(value: datetime | None) -> str | None:
    """Format as e.g. "Mar 4, 2004 13:37"."""
    if value is None:
        return None
    return f"{format_date(value)} {value:%H:%M}"


@dataclass(frozen=True)
class ProfileViewModel:
    """
    Fields the profile template expects.

    Built fresh for every render and never mutated.
    """

    username: str
    custom_title_html: str | None = None
    about_text: str | None = None
    avatar_url: str | None = None
    profile_picture_url: str | None = None
    homepage_url: str | None = None
    contact_info: list[ContactInfo] = field(default_factory=list)
    gender: str | None = None
    location: str | None = None
    interests: str | None = None
    occupation: str | None = None
    post_count: str = "0"
    post_rate: str | None = None
    registration_date: str | None = None
    last_post_date: str | None = None
    private_messages_work: bool = True
    dark_mode: bool = False

    @property
    def any_contact_info(self) -> bool:
        return any_match(self.contact_info, lambda info: bool(info.address))

    @property
    def any_additional_info(self) -> bool:
        return any_match(
            (self.gender, self.location, self.interests, self.occupation),
            lambda value: bool(value),
        )

    @classmethod
    def from_profile(cls, profile: Profile, dark_mode: bool = False) -> "ProfileViewModel":
        """
        Project a Profile into template fields.

        Args:
            profile: Fetched profile
            dark_mode: Whether the document should start in dark mode

        Returns:
            New ProfileViewModel
        """
        services = [
            ("AIM", profile.aim_name),
            ("ICQ", profile.icq_name),
            ("Yahoo!", profile.yahoo_name),
            ("Homepage", profile.homepage_url),
        ]
        contact_info = [
            ContactInfo(service=service, address=address)
            for service, address in services
            if address
        ]

        return cls(
            username=profile.username,
            custom_title_html=profile.custom_title_html,
            about_text=profile.about_text,
            avatar_url=profile.avatar_url,
            profile_picture_url=profile.profile_picture_url,
            homepage_url=profile.homepage_url,
            contact_info=contact_info,
            gender=profile.gender,
            location=profile.location,
            interests=profile.interests,
            occupation=profile.occupation,
            post_count=f"{profile.post_count:,}",
            post_rate=profile.post_rate,
            registration_date=format_date(profile.registration_date),
            last_post_date=format_datetime(profile.last_post_date),
            private_messages_work=profile.private_messages_work,
            dark_mode=dark_mode,
        )

    def as_context(self) -> dict:
        """Template context, including derived flags."""
        return {
            "username": self.username,
            "custom_title_html": self.custom_title_html,
            "about_text": self.about_text,
            "avatar_url": self.avatar_url,
            "profile_picture_url": self.profile_picture_url,
            "homepage_url": self.homepage_url,
            "contact_info": self.contact_info,
            "any_contact_info": self.any_contact_info,
            "any_additional_info": self.any_additional_info,
            "gender": self.gender,
            "location": self.location,
            "interests": self.interests,
            "occupation": self.occupation,
            "post_count": self.post_count,
            "post_rate": self.post_rate,
            "registration_date": self.registration_date,
            "last_post_date": self.last_post_date,
            "private_messages_work": self.private_messages_work,
            "dark_mode": self.dark_mode,
        }
