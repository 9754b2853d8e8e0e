"""Aggregator link encoding and decoding."""

from .codec import channel_feed_url, channel_thumbnail_url, decode, encode

__all__ = ["channel_feed_url", "channel_thumbnail_url", "decode", "encode"]
