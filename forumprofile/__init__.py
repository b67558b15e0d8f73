"""forumprofile - forum member profile screen."""

from forumprofile.models.profile import Profile
from forumprofile.models.user import User
from forumprofile.models.view_model import ProfileViewModel
from forumprofile.config import ProfileConfig
from forumprofile.core.client import ForumsClient
from forumprofile.core.renderer import TemplateRenderer
from forumprofile.core.screen import ProfileScreen
from forumprofile.presentation import Presenter, ShareSheet

__version__ = "0.1.0"

__all__ = [
    # Main interface
    "ProfileScreen",
    "ForumsClient",
    "TemplateRenderer",
    "ProfileConfig",
    "Presenter",
    "ShareSheet",
    # Models
    "Profile",
    "User",
    "ProfileViewModel",
    "__version__",
]
