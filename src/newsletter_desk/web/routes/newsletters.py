# ABOUTME: Newsletter publishing route.
# ABOUTME: Delivers an issue to confirmed subscribers and reports the outcome.

from fastapi import APIRouter

from newsletter_desk.models import DeliveryReport, NewsletterIssue
from newsletter_desk.web.dependencies import NewsletterSvc

router = APIRouter()


@router.post("/newsletters")
async def publish_newsletter(issue: NewsletterIssue, service: NewsletterSvc) -> DeliveryReport:
    """Send a newsletter issue to all confirmed subscribers."""
    return await service.publish(issue)
