"""Pydantic models for parsed feed data."""

from pydantic import BaseModel


class FeedEntry(BaseModel):
    """A single item from the merged feed, ready for display."""

    title: str
    link: str
    published_at: str
    channel_title: str


class ChannelMeta(BaseModel):
    """Display metadata for one channel."""

    title: str
    link: str
    thumbnail_url: str
