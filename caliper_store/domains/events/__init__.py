# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event domain services.

This module provides:
- Event ingestion with id/default assignment and id normalization
- Event lookups scoped by tenant and organization
- Per-class event statistics

Usage:
    from caliper_store.domains.events import EventService

    async with get_session() as session:
        service = EventService(session, tenant_resolver=resolver)
        event_id = await service.save("t1", "org-1", event)
        stats = await service.get_event_statistics_for_class(
            "t1", "org-1", "class-1", students_only=True
        )
"""

from caliper_store.domains.events.defaults import assign_defaults, is_blank, new_event_id
from caliper_store.domains.events.exceptions import (
    EventNotFoundError,
    EventPersistenceError,
    EventServiceError,
    InvalidDateBoundError,
    MissingScopeError,
)
from caliper_store.domains.events.identity import (
    AgentUserIdConverter,
    ClassIdConverter,
    GroupClassIdConverter,
    InMemoryTenantResolver,
    TenantContextResolver,
    TenantRecord,
    UserIdConverter,
)
from caliper_store.domains.events.models import (
    STUDENT_ROLES,
    ClassEventStatistics,
    Event,
    Membership,
    StoredEvent,
)
from caliper_store.domains.events.range_query import EventTimeRange, build_time_range
from caliper_store.domains.events.service import EventService
from caliper_store.domains.events.statistics import aggregate, date_bucket

__all__ = [
    # Models
    "Event",
    "Membership",
    "StoredEvent",
    "ClassEventStatistics",
    "STUDENT_ROLES",
    # Defaults
    "assign_defaults",
    "is_blank",
    "new_event_id",
    # Identity
    "TenantRecord",
    "TenantContextResolver",
    "UserIdConverter",
    "ClassIdConverter",
    "InMemoryTenantResolver",
    "AgentUserIdConverter",
    "GroupClassIdConverter",
    # Range queries
    "EventTimeRange",
    "build_time_range",
    # Statistics
    "aggregate",
    "date_bucket",
    # Service
    "EventService",
    # Errors
    "EventServiceError",
    "MissingScopeError",
    "InvalidDateBoundError",
    "EventNotFoundError",
    "EventPersistenceError",
]
