# ABOUTME: FastAPI dependency injection for the repository, email client and services.
# ABOUTME: Tests replace any of these through app.dependency_overrides.

from typing import Annotated

from fastapi import Depends

from newsletter_desk.config import Settings, get_settings
from newsletter_desk.db.repository import SubscriberRepository
from newsletter_desk.email.rendering import ConfirmationEmailRenderer
from newsletter_desk.email.sender import EmailClient, build_email_client
from newsletter_desk.services.newsletter_service import NewsletterService
from newsletter_desk.services.subscription_service import SubscriptionService

AppSettings = Annotated[Settings, Depends(get_settings)]


def get_subscriber_repository() -> SubscriberRepository:
    """Get subscriber repository bound to the application session factory."""
    return SubscriberRepository()


SubscriberRepo = Annotated[SubscriberRepository, Depends(get_subscriber_repository)]


def get_email_client(settings: AppSettings) -> EmailClient:
    """Get the configured email delivery client."""
    return build_email_client(settings)


Email = Annotated[EmailClient, Depends(get_email_client)]


def get_subscription_service(
    repo: SubscriberRepo, email_client: Email, settings: AppSettings
) -> SubscriptionService:
    """Get subscription service instance."""
    return SubscriptionService(
        repo,
        email_client,
        base_url=settings.app_base_url,
        email_subject=settings.confirmation_email_subject,
        renderer=ConfirmationEmailRenderer(settings),
    )


SubscriptionSvc = Annotated[SubscriptionService, Depends(get_subscription_service)]


def get_newsletter_service(repo: SubscriberRepo, email_client: Email) -> NewsletterService:
    """Get newsletter service instance."""
    return NewsletterService(repo, email_client)


NewsletterSvc = Annotated[NewsletterService, Depends(get_newsletter_service)]
