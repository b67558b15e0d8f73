"""Profile data model."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Profile(BaseModel):
    """Represents a forum member's profile as fetched from the getinfo page."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    username: str
    custom_title_html: str | None = None
    about_text: str | None = None
    avatar_url: str | None = None
    profile_picture_url: str | None = None

    # Contact info
    homepage_url: str | None = None
    aim_name: str | None = None
    icq_name: str | None = None
    yahoo_name: str | None = None

    # Additional info
    gender: str | None = None
    location: str | None = None
    interests: str | None = None
    occupation: str | None = None
    post_count: int = 0
    post_rate: str | None = None
    registration_date: datetime | None = None
    last_post_date: datetime | None = None

    private_messages_work: bool = True
    fetched_at: datetime
