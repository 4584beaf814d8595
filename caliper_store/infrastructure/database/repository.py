# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event repository over the caliper_events tables.

Every query is scoped by tenant_id and organization_id. Lookups that
match nothing return None or an empty list; deciding whether emptiness
is an error is left to the service layer.
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import uuid4

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from caliper_store.domains.events.exceptions import EventPersistenceError
from caliper_store.domains.events.models import STUDENT_ROLES, Event, StoredEvent
from caliper_store.infrastructure.database.models import StoredEventRecord, StoredEventRole

logger = logging.getLogger(__name__)


def _to_stored_event(record: StoredEventRecord) -> StoredEvent:
    return StoredEvent(
        storage_id=record.storage_id,
        tenant_id=record.tenant_id,
        organization_id=record.organization_id,
        class_id=record.class_id,
        user_id=record.user_id,
        event=Event.from_document(record.payload),
    )


class EventRepository:
    """Repository for stored events.

    Attributes:
        db: Async database session.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            db: Async database session.
        """
        self.db = db

    async def save(
        self,
        tenant_id: str,
        organization_id: str,
        stored_event: StoredEvent,
    ) -> str:
        """Persist a stored event and commit.

        Args:
            tenant_id: Tenant partition.
            organization_id: Organization partition.
            stored_event: Event with its class and user keys.

        Returns:
            The event's own id (not the storage id).

        Raises:
            EventPersistenceError: If the write is rejected or the store
                is unreachable.
        """
        event = stored_event.event
        storage_id = stored_event.storage_id or str(uuid4())
        record = StoredEventRecord(
            storage_id=storage_id,
            tenant_id=tenant_id,
            organization_id=organization_id,
            class_id=stored_event.class_id,
            user_id=stored_event.user_id,
            event_id=event.id,
            event_time=event.event_time,
            payload=event.to_document(),
            roles=[StoredEventRole(role=role) for role in dict.fromkeys(event.roles)],
        )

        try:
            self.db.add(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            try:
                await self.db.rollback()
            except SQLAlchemyError as rollback_error:
                logger.warning("Rollback after failed save failed: %s", rollback_error)
            logger.warning(
                "Failed to save event: tenant=%s, org=%s, event_id=%s, error=%s",
                tenant_id,
                organization_id,
                event.id,
                e,
            )
            raise EventPersistenceError(f"Failed to save event {event.id}", e) from e

        logger.debug(
            "Event saved: tenant=%s, org=%s, event_id=%s, storage_id=%s",
            tenant_id,
            organization_id,
            event.id,
            storage_id,
        )

        return event.id

    async def find_by_storage_id(self, storage_id: str) -> StoredEvent | None:
        """Get a stored event by its surrogate storage id."""
        record = await self.db.get(StoredEventRecord, storage_id)
        if record is None:
            return None
        return _to_stored_event(record)

    async def find_by_id(
        self,
        tenant_id: str,
        organization_id: str,
        event_id: str,
    ) -> Event | None:
        """Get an event by its id within a tenant and organization."""
        stmt = self._scoped(tenant_id, organization_id).where(
            StoredEventRecord.event_id == event_id
        )
        result = await self.db.execute(stmt)
        record = result.scalar_one_or_none()
        if record is None:
            return None
        return Event.from_document(record.payload)

    async def find_all(self, tenant_id: str, organization_id: str) -> list[Event]:
        """Get every event of an organization."""
        return await self._events(self._scoped(tenant_id, organization_id))

    async def find_by_class_and_user(
        self,
        tenant_id: str,
        organization_id: str,
        class_id: str,
        user_id: str,
    ) -> list[Event]:
        """Get a user's events in a class.

        The class id must match exactly; the user id is compared
        case-insensitively.
        """
        stmt = self._scoped(tenant_id, organization_id).where(
            StoredEventRecord.class_id == class_id,
            func.lower(StoredEventRecord.user_id) == user_id.lower(),
        )
        return await self._events(stmt)

    async def find_by_class(
        self,
        tenant_id: str,
        organization_id: str,
        class_id: str,
        students_only: bool = False,
    ) -> list[StoredEvent]:
        """Get the stored events of a class.

        Args:
            tenant_id: Tenant partition.
            organization_id: Organization partition.
            class_id: Class id, matched exactly.
            students_only: Keep only events whose membership roles include
                one of STUDENT_ROLES.

        Returns:
            Matching stored events, possibly empty.
        """
        stmt = self._scoped(tenant_id, organization_id).where(
            StoredEventRecord.class_id == class_id
        )
        if students_only:
            student_events = select(StoredEventRole.storage_id).where(
                StoredEventRole.role.in_(sorted(STUDENT_ROLES))
            )
            stmt = stmt.where(StoredEventRecord.storage_id.in_(student_events))

        result = await self.db.execute(stmt)
        return [_to_stored_event(record) for record in result.scalars().all()]

    async def find_by_user_in_range(
        self,
        tenant_id: str,
        organization_id: str,
        user_id: str,
        lower: datetime | None = None,
        upper: datetime | None = None,
    ) -> list[Event]:
        """Get a user's events strictly between two optional instants.

        Args:
            tenant_id: Tenant partition.
            organization_id: Organization partition.
            user_id: User id, matched exactly.
            lower: Exclusive lower bound, or None.
            upper: Exclusive upper bound, or None.

        Returns:
            Matching events, possibly empty.
        """
        stmt = self._scoped(tenant_id, organization_id).where(
            StoredEventRecord.user_id == user_id
        )
        if lower is not None:
            stmt = stmt.where(StoredEventRecord.event_time > lower)
        if upper is not None:
            stmt = stmt.where(StoredEventRecord.event_time < upper)
        return await self._events(stmt)

    def _scoped(self, tenant_id: str, organization_id: str) -> Select[tuple[StoredEventRecord]]:
        return select(StoredEventRecord).where(
            StoredEventRecord.tenant_id == tenant_id,
            StoredEventRecord.organization_id == organization_id,
        )

    async def _events(self, stmt: Select[tuple[StoredEventRecord]]) -> list[Event]:
        result = await self.db.execute(stmt.order_by(StoredEventRecord.event_time))
        return [Event.from_document(record.payload) for record in result.scalars().all()]
