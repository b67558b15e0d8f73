"""Pydantic models for forumprofile."""

from forumprofile.models.profile import Profile
from forumprofile.models.user import User
from forumprofile.models.view_model import ContactInfo, ProfileViewModel

__all__ = [
    "Profile",
    "User",
    "ContactInfo",
    "ProfileViewModel",
]
