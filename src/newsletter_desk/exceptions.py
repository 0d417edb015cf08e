# ABOUTME: Domain-specific exceptions for the subscription workflows.
# ABOUTME: Separates client-facing rejections from store and email delivery faults.

"""Exception hierarchy for newsletter-desk.

Validation and unknown-token errors are expected outcomes of bad input and
are reported to the client as they are. Store and email errors are
infrastructure faults: the web layer logs them with their cause chain and
answers with an opaque server error.
"""


class NewsletterDeskError(Exception):
    """Base exception for all newsletter-desk errors."""


class SubscriptionValidationError(NewsletterDeskError):
    """Input failed validation (subscriber name, email or newsletter payload)."""


class UnknownTokenError(NewsletterDeskError):
    """No subscriber is associated with the provided token.

    Raised for malformed tokens as well as well-formed tokens that were never
    issued, so callers cannot tell which tokens are syntactically plausible.
    """

    def __init__(self) -> None:
        super().__init__("There is no subscriber associated with the provided token")


class StoreError(NewsletterDeskError):
    """A persistence operation failed (connectivity, constraint violation, ...)."""


class EmailError(NewsletterDeskError):
    """The email delivery capability failed to accept a message."""
