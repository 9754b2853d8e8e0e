"""Configuration management for the merged feed editor."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="FE_", extra="ignore")

    # RSS-Bridge endpoint used to merge channel feeds
    bridge_url: str = "https://rss-bridge.org/bridge01/"
    bridge_action: str = "display"
    bridge_name: str = "FeedMergeBridge"
    feed_name: str = "yt"
    feed_format: str = "Atom"
    feed_param_prefix: str = "feed_"

    # YouTube endpoints
    video_feed_url: str = "https://www.youtube.com/feeds/videos.xml"
    channel_url: str = "https://www.youtube.com/channel"

    # Editor limits
    max_channels: int = Field(default=10, ge=1, le=50)

    max_sessions: int = Field(default=1000, ge=1)

    # Network (None disables the timeout)
    fetch_timeout_seconds: float | None = Field(default=None, gt=0)

    # CORS
    frontend_origin: str = "http://localhost:5173"

    # Environment
    env: str = Field(default="dev", pattern="^(dev|prod)$")


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
