# ABOUTME: Delivers newsletter issues to confirmed subscribers.
# ABOUTME: Pending subscribers are skipped; per-recipient failures do not stop delivery.

import structlog

from newsletter_desk.db.repository import SubscriberRepository
from newsletter_desk.email.sender import EmailClient
from newsletter_desk.exceptions import EmailError
from newsletter_desk.models import DeliveryReport, NewsletterIssue

log = structlog.get_logger()


class NewsletterService:
    """Service for publishing newsletter issues."""

    def __init__(self, repo: SubscriberRepository, email_client: EmailClient) -> None:
        self.repo = repo
        self.email_client = email_client

    async def publish(self, issue: NewsletterIssue) -> DeliveryReport:
        """Send an issue to every confirmed subscriber.

        Args:
            issue: Title and HTML/text content of the issue.

        Returns:
            Counts of delivered messages and the addresses that failed.

        Raises:
            StoreError: If confirmed subscribers could not be listed.
        """
        subscribers = await self.repo.list_confirmed()
        log.info("publishing_newsletter", title=issue.title, recipient_count=len(subscribers))

        report = DeliveryReport()
        for subscriber in subscribers:
            try:
                await self.email_client.send(
                    subscriber.email, issue.title, issue.content.html, issue.content.text
                )
            except EmailError:
                log.exception("newsletter_delivery_failed", subscriber_id=str(subscriber.id))
                report.failed.append(subscriber.email)
                continue
            report.delivered += 1

        log.info("newsletter_published", delivered=report.delivered, failed=len(report.failed))
        return report
