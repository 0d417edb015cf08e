# ABOUTME: Repository owning the subscriptions and subscription_tokens tables.
# ABOUTME: Every operation runs in its own transaction and maps driver faults to StoreError.

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from uuid import UUID, uuid4

import structlog
from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from newsletter_desk.db.models import Subscriber, SubscriptionToken
from newsletter_desk.db.session import get_session
from newsletter_desk.exceptions import StoreError
from newsletter_desk.models import NewSubscriber, SubscriptionStatus

log = structlog.get_logger()


class SubscriberRepository:
    """Repository for subscriber and confirmation token persistence.

    Operations are independent atomic units; callers sequence them and rely on
    each being idempotent from the outside rather than on cross-operation locks.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None):
        self.session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncGenerator[AsyncSession]:
        try:
            async with get_session(self.session_factory) as session:
                yield session
        except (SQLAlchemyError, OSError) as e:
            log.error("store_operation_failed", operation=operation, error=str(e))
            raise StoreError(f"Failed to {operation}") from e

    async def upsert_pending(self, new_subscriber: NewSubscriber) -> UUID:
        """Insert a pending subscriber, or return the id already registered for the email.

        Re-subscribing never fails and never creates a second row for the same email.
        """
        async with self._transaction("upsert subscriber") as session:
            result = await session.execute(
                pg_insert(Subscriber)
                .values(
                    id=uuid4(),
                    email=str(new_subscriber.email),
                    name=new_subscriber.name,
                    status=SubscriptionStatus.PENDING_CONFIRMATION.value,
                    subscribed_at=datetime.now(UTC),
                )
                .on_conflict_do_nothing(index_elements=[Subscriber.email])
                .returning(Subscriber.id)
            )
            subscriber_id = result.scalar_one_or_none()
            if subscriber_id is None:
                result = await session.execute(
                    select(Subscriber.id).where(Subscriber.email == str(new_subscriber.email))
                )
                subscriber_id = result.scalar_one()
                log.info("subscriber_already_registered", subscriber_id=str(subscriber_id))
            else:
                log.info("subscriber_created", subscriber_id=str(subscriber_id))
            return subscriber_id

    async def store_token(self, subscriber_id: UUID, token: str) -> None:
        """Persist a new confirmation token for a subscriber."""
        async with self._transaction("store subscription token") as session:
            session.add(SubscriptionToken(subscription_token=token, subscriber_id=subscriber_id))
            await session.flush()

    async def get_subscriber_id_by_token(self, token: str) -> UUID | None:
        """Exact-match token lookup. Returns None when no token row matches."""
        async with self._transaction("look up subscription token") as session:
            result = await session.execute(
                select(SubscriptionToken.subscriber_id).where(
                    SubscriptionToken.subscription_token == token
                )
            )
            return result.scalar_one_or_none()

    async def confirm(self, subscriber_id: UUID) -> None:
        """Mark a subscriber as confirmed. A no-op when already confirmed."""
        async with self._transaction("confirm subscriber") as session:
            await session.execute(
                update(Subscriber)
                .where(Subscriber.id == subscriber_id)
                .where(Subscriber.status == SubscriptionStatus.PENDING_CONFIRMATION.value)
                .values(status=SubscriptionStatus.CONFIRMED.value)
            )

    async def get_by_id(self, subscriber_id: UUID) -> Subscriber | None:
        """Get subscriber by ID."""
        async with self._transaction("get subscriber") as session:
            return await session.get(Subscriber, subscriber_id)

    async def get_by_email(self, email: str) -> Subscriber | None:
        """Get subscriber by email address."""
        async with self._transaction("get subscriber by email") as session:
            result = await session.execute(select(Subscriber).where(Subscriber.email == email))
            return result.scalar_one_or_none()

    async def list_confirmed(self) -> Sequence[Subscriber]:
        """List confirmed subscribers ordered by sign-up time."""
        async with self._transaction("list confirmed subscribers") as session:
            result = await session.execute(
                select(Subscriber)
                .where(Subscriber.status == SubscriptionStatus.CONFIRMED.value)
                .order_by(Subscriber.subscribed_at)
            )
            return result.scalars().all()

    async def count_by_status(self) -> dict[str, int]:
        """Count subscribers grouped by status. Statuses with no rows report 0."""
        async with self._transaction("count subscribers") as session:
            result = await session.execute(
                select(Subscriber.status, func.count(Subscriber.id)).group_by(Subscriber.status)
            )
            counts = {status.value: 0 for status in SubscriptionStatus}
            counts.update({status: count for status, count in result.all()})
            return counts
