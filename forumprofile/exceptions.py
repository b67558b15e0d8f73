"""Custom exception hierarchy for forumprofile."""


class ForumProfileError(Exception):
    """Base exception for all forumprofile errors."""


class FetchError(ForumProfileError):
    """Failed to fetch a profile page."""


class ProfileNotFoundError(FetchError):
    """User does not exist or has been banned."""


class AccessDeniedError(FetchError):
    """Not logged in, or the forum refused the request."""


class ParseError(ForumProfileError):
    """Failed to parse profile page content."""


class RenderError(ForumProfileError):
    """Template rendering failed."""


class ScriptResourceError(ForumProfileError):
    """A script resource required by the display surface could not be loaded."""


class BridgeMessageError(ForumProfileError):
    """A message posted from the document has a malformed payload."""


class CacheError(ForumProfileError):
    """Cache operation failed."""


class ConfigError(ForumProfileError):
    """Invalid configuration."""
