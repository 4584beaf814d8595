# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event service for storing and querying Caliper events.

This module provides the EventService class for:
- Saving events with generated ids and normalized user/class keys
- Looking up events by id, organization, class and user
- Time-bounded lookups of a user's events
- Per-class event statistics

Lookups by id, organization, or class and user return None or an empty
list when nothing matches. Time-bounded user lookups and class statistics
raise EventNotFoundError instead; clients rely on both behaviours.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from caliper_store.domains.events.defaults import assign_defaults, is_blank
from caliper_store.domains.events.exceptions import EventNotFoundError, MissingScopeError
from caliper_store.domains.events.identity import (
    AgentUserIdConverter,
    ClassIdConverter,
    GroupClassIdConverter,
    InMemoryTenantResolver,
    TenantContextResolver,
    UserIdConverter,
)
from caliper_store.domains.events.models import ClassEventStatistics, Event, StoredEvent
from caliper_store.domains.events.range_query import build_time_range
from caliper_store.domains.events.statistics import aggregate
from caliper_store.utils.logging import bound_context

if TYPE_CHECKING:
    from caliper_store.infrastructure.database.repository import EventRepository

logger = logging.getLogger(__name__)


class EventService:
    """Service for storing and querying events.

    Attributes:
        db: Async database session.
        repository: Event repository bound to ``db``.
        tenant_resolver: Tenant lookup used while normalizing ids.
        user_id_converter: Computes the canonical user id of an event.
        class_id_converter: Computes the canonical class id of an event.
    """

    def __init__(
        self,
        db: AsyncSession,
        tenant_resolver: TenantContextResolver | None = None,
        user_id_converter: UserIdConverter | None = None,
        class_id_converter: ClassIdConverter | None = None,
        repository: EventRepository | None = None,
    ) -> None:
        """Initialize event service.

        Args:
            db: Async database session.
            tenant_resolver: Tenant lookup; defaults to one that knows no
                tenants, so converters see no tenant context.
            user_id_converter: Defaults to the agent id.
            class_id_converter: Defaults to the group id.
            repository: Event repository; defaults to one on ``db``.
        """
        if repository is None:
            from caliper_store.infrastructure.database.repository import EventRepository

            repository = EventRepository(db)

        self.db = db
        self.repository = repository
        self.tenant_resolver = tenant_resolver or InMemoryTenantResolver()
        self.user_id_converter = user_id_converter or AgentUserIdConverter()
        self.class_id_converter = class_id_converter or GroupClassIdConverter()

    async def save(self, tenant_id: str, organization_id: str, event: Event) -> str:
        """Store an event.

        Events without an id get a generated id, a default event time
        and the local timezone offset before they are stored.

        Args:
            tenant_id: Tenant partition.
            organization_id: Organization partition.
            event: Event to store.

        Returns:
            The stored event's id.

        Raises:
            EventPersistenceError: If the store rejects the write, e.g. an
                event with the same id already exists in the organization.
        """
        with bound_context(tenant_id=tenant_id, organization_id=organization_id):
            event = assign_defaults(event)

            tenant = await self.tenant_resolver.find_by_id(tenant_id)
            if tenant is None:
                logger.debug("No tenant record for %s, using raw ids", tenant_id)

            stored_event = StoredEvent(
                tenant_id=tenant_id,
                organization_id=organization_id,
                class_id=self.class_id_converter.convert(tenant, event),
                user_id=self.user_id_converter.convert(tenant, event),
                event=event,
            )

            event_id = await self.repository.save(tenant_id, organization_id, stored_event)

            logger.info(
                "Event stored: event_id=%s, class=%s, user=%s",
                event_id,
                stored_event.class_id,
                stored_event.user_id,
            )

            return event_id

    async def get_event_for_id(
        self,
        tenant_id: str,
        organization_id: str,
        event_id: str,
    ) -> Event | None:
        """Get an event by id, or None if it does not exist."""
        return await self.repository.find_by_id(tenant_id, organization_id, event_id)

    async def get_events(self, tenant_id: str, organization_id: str) -> list[Event]:
        """Get all events of an organization (empty list when none)."""
        return await self.repository.find_all(tenant_id, organization_id)

    async def get_events_for_class_and_user(
        self,
        tenant_id: str,
        organization_id: str,
        class_id: str,
        user_id: str,
    ) -> list[Event]:
        """Get a user's events in a class (empty list when none)."""
        return await self.repository.find_by_class_and_user(
            tenant_id, organization_id, class_id, user_id
        )

    async def get_event_statistics_for_class(
        self,
        tenant_id: str,
        organization_id: str,
        class_id: str,
        students_only: bool = False,
    ) -> ClassEventStatistics:
        """Compute event statistics for a class.

        Args:
            tenant_id: Tenant partition.
            organization_id: Organization partition.
            class_id: Class to report on.
            students_only: Count only events by members with a student role.

        Returns:
            Statistics computed from the class's current events.

        Raises:
            EventNotFoundError: If the class has no matching events.
        """
        stored_events = await self.repository.find_by_class(
            tenant_id, organization_id, class_id, students_only
        )
        return aggregate(class_id, stored_events)

    async def get_events_for_user(
        self,
        tenant_id: str,
        organization_id: str,
        user_id: str,
        from_: str | None = "",
        to: str | None = "",
    ) -> list[Event]:
        """Get a user's events, optionally bounded in time.

        Args:
            tenant_id: Tenant partition.
            organization_id: Organization partition.
            user_id: User whose events to return.
            from_: Exclusive lower bound as ``yyyy-MM-dd hh:mm``, blank for none.
            to: Exclusive upper bound as ``yyyy-MM-dd hh:mm``, blank for none.

        Returns:
            The matching events.

        Raises:
            MissingScopeError: If tenant, organization or user id is blank.
            InvalidDateBoundError: If a bound cannot be parsed.
            EventNotFoundError: If no events match.
        """
        if is_blank(tenant_id) or is_blank(organization_id) or is_blank(user_id):
            raise MissingScopeError("tenant_id, organization_id and user_id are required")

        time_range = build_time_range(from_, to)

        events = await self.repository.find_by_user_in_range(
            tenant_id,
            organization_id,
            user_id,
            lower=time_range.lower,
            upper=time_range.upper,
        )
        if not events:
            raise EventNotFoundError("Events not found.")

        return events
