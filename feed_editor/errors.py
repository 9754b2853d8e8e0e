"""Exception types raised by the feed editor."""


class FeedEditorError(Exception):
    """Base class for all feed editor errors."""


class NetworkError(FeedEditorError):
    """Raised when a feed cannot be retrieved (transport failure or bad status)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class XmlParseError(FeedEditorError):
    """Raised when a feed document is not well-formed XML."""


class MalformedLinkError(FeedEditorError):
    """Raised when a pasted aggregator link is not a valid absolute URL."""

    def __init__(self, link: str):
        self.link = link
        super().__init__(f"Not a valid URL: {link!r}")


class SlotLimitError(FeedEditorError):
    """Raised when adding a channel slot would exceed the configured maximum."""


class SlotNotFoundError(FeedEditorError):
    """Raised when no channel slot has the requested key."""


class SessionNotFoundError(FeedEditorError):
    """Raised when no editor session has the requested id."""
