"""Feed fetching and parsing."""

from .fetcher import fetch_channel_feed, fetch_merged_feed, fetch_raw
from .models import ChannelMeta, FeedEntry
from .parser import (
    format_published,
    parse_channel_meta,
    parse_entries,
    use_system_locale,
)

__all__ = [
    "ChannelMeta",
    "FeedEntry",
    "fetch_channel_feed",
    "fetch_merged_feed",
    "fetch_raw",
    "format_published",
    "parse_channel_meta",
    "parse_entries",
    "use_system_locale",
]
