"""User data model."""

from pydantic import BaseModel

from forumprofile.models.profile import Profile


class User(BaseModel):
    """A forum member. The profile is absent until it has been fetched."""

    user_id: str
    username: str | None = None
    profile: Profile | None = None
