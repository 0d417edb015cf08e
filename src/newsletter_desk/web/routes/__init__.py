# ABOUTME: Routes module initialization.
# ABOUTME: Exports all route modules for FastAPI app.

from newsletter_desk.web.routes import health, newsletters, subscriptions

__all__ = ["health", "newsletters", "subscriptions"]
