# ABOUTME: Subscription routes for the double opt-in sign-up flow.
# ABOUTME: Handles form sign-up and confirmation link visits.

from fastapi import APIRouter, Form, Query, Response

from newsletter_desk.web.dependencies import SubscriptionSvc

router = APIRouter(prefix="/subscriptions")


@router.post("")
async def subscribe(
    service: SubscriptionSvc,
    name: str | None = Form(None),
    email: str | None = Form(None),
) -> Response:
    """Register a subscriber and email a confirmation link."""
    await service.submit_subscription(name, email)
    return Response(status_code=200)


@router.get("/confirm")
async def confirm(
    service: SubscriptionSvc,
    subscription_token: str = Query(...),
) -> Response:
    """Confirm a pending subscriber from the emailed link."""
    await service.confirm_subscription(subscription_token)
    return Response(status_code=200)
