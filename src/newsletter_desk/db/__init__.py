# ABOUTME: Database module initialization.
# ABOUTME: Exports ORM models, the subscriber repository and session lifecycle helpers.

from newsletter_desk.db.models import Base, Subscriber, SubscriptionToken
from newsletter_desk.db.repository import SubscriberRepository
from newsletter_desk.db.session import close_db, get_session, init_db

__all__ = [
    "Base",
    "Subscriber",
    "SubscriberRepository",
    "SubscriptionToken",
    "close_db",
    "get_session",
    "init_db",
]
