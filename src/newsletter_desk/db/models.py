# ABOUTME: SQLAlchemy ORM models for subscriber persistence.
# ABOUTME: Defines the subscriptions and subscription_tokens tables.

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from newsletter_desk.models import SubscriptionStatus


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class Subscriber(Base):
    """A newsletter subscriber awaiting or holding double opt-in confirmation."""

    __tablename__ = "subscriptions"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=SubscriptionStatus.PENDING_CONFIRMATION.value
    )
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(UTC)
    )

    tokens: Mapped[list["SubscriptionToken"]] = relationship(
        "SubscriptionToken", back_populates="subscriber"
    )

    @property
    def is_confirmed(self) -> bool:
        return self.status == SubscriptionStatus.CONFIRMED.value

    def __repr__(self) -> str:
        return f"<Subscriber {self.email} ({self.status})>"


class SubscriptionToken(Base):
    """A confirmation token issued for one sign-up attempt. Never updated or deleted."""

    __tablename__ = "subscription_tokens"

    subscription_token: Mapped[str] = mapped_column(Text, primary_key=True)
    subscriber_id: Mapped[UUID] = mapped_column(
        ForeignKey("subscriptions.id"), nullable=False, index=True
    )

    subscriber: Mapped[Subscriber] = relationship("Subscriber", back_populates="tokens")

    def __repr__(self) -> str:
        return f"<SubscriptionToken {self.subscription_token[:8]}... -> {self.subscriber_id}>"
