"""Tests for configuration module."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from feed_editor.config import Settings, get_settings


def test_settings_defaults():
    """Test that settings point at the public bridge and YouTube by default."""
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings(_env_file=None)

        assert settings.bridge_url == "https://rss-bridge.org/bridge01/"
        assert settings.bridge_name == "FeedMergeBridge"
        assert settings.feed_name == "yt"
        assert settings.feed_format == "Atom"
        assert settings.video_feed_url == "https://www.youtube.com/feeds/videos.xml"
        assert settings.max_channels == 10
        assert settings.fetch_timeout_seconds is None
        assert settings.env == "dev"


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(
        os.environ,
        {
            "FE_BRIDGE_URL": "http://localhost:3000/",
            "FE_MAX_CHANNELS": "5",
            "FE_FETCH_TIMEOUT_SECONDS": "2.5",
            "FE_ENV": "prod",
        },
        clear=True,
    ):
        settings = Settings(_env_file=None)

        assert settings.bridge_url == "http://localhost:3000/"
        assert settings.max_channels == 5
        assert settings.fetch_timeout_seconds == 2.5
        assert settings.env == "prod"


def test_settings_validation_error():
    """Test that out-of-range values are rejected."""
    with patch.dict(os.environ, {"FE_MAX_CHANNELS": "0", "FE_ENV": "staging"}, clear=True):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        error_fields = {e["loc"][0] for e in exc_info.value.errors()}
        assert "max_channels" in error_fields
        assert "env" in error_fields


def test_get_settings_singleton():
    """Test that get_settings returns the same instance."""
    import feed_editor.config

    feed_editor.config._settings = None
    try:
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2
    finally:
        feed_editor.config._settings = None
