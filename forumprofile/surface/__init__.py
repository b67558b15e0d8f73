"""Display surface implementations."""

from forumprofile.surface.base import DisplaySurface
from forumprofile.surface.playwright_surface import PlaywrightSurface, launch_surface

__all__ = ["DisplaySurface", "PlaywrightSurface", "launch_surface"]
