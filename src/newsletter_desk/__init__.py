# ABOUTME: Main package for newsletter-desk subscriber management.
# ABOUTME: Exports settings access and the core subscription types.

from newsletter_desk.config import get_settings
from newsletter_desk.models import NewsletterIssue, NewSubscriber, SubscriptionStatus

__all__ = [
    "get_settings",
    "NewSubscriber",
    "NewsletterIssue",
    "SubscriptionStatus",
]
