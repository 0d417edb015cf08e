# ABOUTME: Services module initialization.
# ABOUTME: Exports the subscription workflows and newsletter publishing service.

from newsletter_desk.services.newsletter_service import NewsletterService
from newsletter_desk.services.subscription_service import (
    SubscriptionService,
    build_confirmation_link,
)

__all__ = [
    "NewsletterService",
    "SubscriptionService",
    "build_confirmation_link",
]
