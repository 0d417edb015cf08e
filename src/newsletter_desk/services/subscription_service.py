# ABOUTME: Subscription and confirmation workflows for double opt-in sign-up.
# ABOUTME: Validates input, persists subscriber and token, emails the confirmation link.

from urllib.parse import urlencode

import structlog

from newsletter_desk.db.repository import SubscriberRepository
from newsletter_desk.email.rendering import ConfirmationEmailRenderer
from newsletter_desk.email.sender import EmailClient
from newsletter_desk.exceptions import UnknownTokenError
from newsletter_desk.models import NewSubscriber, parse_new_subscriber
from newsletter_desk.tokens import generate_subscription_token, token_is_valid

log = structlog.get_logger()

CONFIRMATION_PATH = "/subscriptions/confirm"


def build_confirmation_link(base_url: str, token: str) -> str:
    """Build <base_url>/subscriptions/confirm?subscription_token=<token>."""
    query = urlencode({"subscription_token": token})
    return f"{base_url.rstrip('/')}{CONFIRMATION_PATH}?{query}"


class SubscriptionService:
    """Orchestrates sign-up and confirmation against the store and email capability."""

    def __init__(
        self,
        repo: SubscriberRepository,
        email_client: EmailClient,
        base_url: str,
        email_subject: str,
        renderer: ConfirmationEmailRenderer | None = None,
    ) -> None:
        self.repo = repo
        self.email_client = email_client
        self.base_url = base_url
        self.email_subject = email_subject
        self.renderer = renderer or ConfirmationEmailRenderer()

    async def submit_subscription(self, name: str | None, email: str | None) -> None:
        """Register a sign-up and send a fresh confirmation link.

        Re-submitting an already registered email reuses the existing subscriber
        and issues an additional token; earlier tokens remain valid. A failed
        email send leaves the subscriber and token stored.

        Raises:
            SubscriptionValidationError: If the name or email is invalid.
            StoreError: If the subscriber or token could not be persisted.
            EmailError: If the confirmation email could not be sent.
        """
        new_subscriber = parse_new_subscriber(name, email)

        subscriber_id = await self.repo.upsert_pending(new_subscriber)

        token = generate_subscription_token()
        await self.repo.store_token(subscriber_id, token)

        await self.send_confirmation_email(new_subscriber, token)
        log.info("subscription_submitted", subscriber_id=str(subscriber_id))

    async def send_confirmation_email(self, subscriber: NewSubscriber, token: str) -> None:
        confirmation_link = build_confirmation_link(self.base_url, token)
        html_body, text_body = self.renderer.render(confirmation_link)

        log.info("sending_confirmation_email", to=str(subscriber.email))
        await self.email_client.send(str(subscriber.email), self.email_subject, html_body, text_body)

    async def confirm_subscription(self, token: str) -> None:
        """Confirm the subscriber a token was issued for.

        Confirming an already confirmed subscriber succeeds without change.

        Raises:
            UnknownTokenError: If the token is malformed or was never issued.
            StoreError: If the lookup or the status update failed.
        """
        if not token_is_valid(token):
            log.warning("confirm_malformed_token")
            raise UnknownTokenError()

        subscriber_id = await self.repo.get_subscriber_id_by_token(token)
        if subscriber_id is None:
            log.warning("confirm_unknown_token", token=token[:8] + "...")
            raise UnknownTokenError()

        await self.repo.confirm(subscriber_id)
        log.info("subscriber_confirmed", subscriber_id=str(subscriber_id))
