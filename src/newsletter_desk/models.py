# ABOUTME: Pydantic models for subscriber input and newsletter issues.
# ABOUTME: Parses and validates sign-up data before anything reaches the store.

from enum import Enum

import regex
from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationError, field_validator

from newsletter_desk.exceptions import SubscriptionValidationError

MAX_NAME_LENGTH = 256

# Characters rejected in subscriber names and confirmation tokens
FORBIDDEN_CHARACTERS = frozenset('/()"<>\\{}')


def grapheme_count(value: str) -> int:
    """Count user-perceived characters (extended grapheme clusters)."""
    return len(regex.findall(r"\X", value))


def contains_forbidden_characters(value: str) -> bool:
    return any(char in FORBIDDEN_CHARACTERS for char in value)


class SubscriptionStatus(str, Enum):
    """Subscriber lifecycle. Transitions only from pending to confirmed."""

    PENDING_CONFIRMATION = "pending_confirmation"
    CONFIRMED = "confirmed"


class NewSubscriber(BaseModel):
    """A validated sign-up request."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str
    email: EmailStr

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        if not value:
            raise ValueError("name must not be empty")
        if grapheme_count(value) > MAX_NAME_LENGTH:
            raise ValueError(f"name must be at most {MAX_NAME_LENGTH} characters")
        if contains_forbidden_characters(value):
            raise ValueError("name contains forbidden characters")
        return value


def parse_new_subscriber(name: str | None, email: str | None) -> NewSubscriber:
    """Validate raw form input.

    Raises:
        SubscriptionValidationError: If the name or email is missing or malformed.
    """
    try:
        return NewSubscriber(name=name or "", email=email or "")
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise SubscriptionValidationError(f"Invalid subscriber data: {', '.join(fields)}") from e


class NewsletterContent(BaseModel):
    """Body of a newsletter issue in both formats."""

    text: str
    html: str


class NewsletterIssue(BaseModel):
    """A newsletter issue to deliver to confirmed subscribers."""

    title: str = Field(min_length=1)
    content: NewsletterContent


class DeliveryReport(BaseModel):
    """Outcome of delivering one issue."""

    delivered: int = 0
    failed: list[str] = Field(default_factory=list)
