"""API routers for the feed editor."""

from feed_editor.api.routes_feed import router as feed_router
from feed_editor.api.routes_health import router as health_router
from feed_editor.api.routes_link import router as link_router
from feed_editor.api.routes_sessions import router as sessions_router

__all__ = [
    "feed_router",
    "health_router",
    "link_router",
    "sessions_router",
]
