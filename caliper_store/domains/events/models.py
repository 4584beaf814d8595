# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event domain models.

This module defines the value types handled by the event store:
- Event: a Caliper-style activity event (camelCase JSON aliases)
- Membership: the actor's membership in the event's group
- StoredEvent: an event wrapped with its tenant/organization/class/user keys
- ClassEventStatistics: per-class counts computed on request

Entity references (agent, object, group, ...) are either JSON objects
or bare IRI strings, as Caliper allows both.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from caliper_store.utils.datetime import ensure_utc

EntityRef = dict[str, Any] | str

# Membership roles counted as students in class statistics
STUDENT_ROLES: frozenset[str] = frozenset(
    {
        "http://purl.imsglobal.org/vocab/lis/v2/membership#Learner",
        "student",
        "Student",
    }
)


def entity_id(ref: EntityRef | None) -> str | None:
    """Return the identifier of an entity reference.

    Args:
        ref: A JSON object with an ``id`` key, an IRI string, or None.

    Returns:
        The identifier, or None if the reference carries none.
    """
    if ref is None:
        return None
    if isinstance(ref, str):
        return ref
    value = ref.get("id")
    return str(value) if value is not None else None


class Membership(BaseModel):
    """Membership of the acting agent in an organization or group.

    Only ``roles`` is interpreted by the store; other Caliper membership
    fields (id, member, organization, status, ...) are carried through.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    roles: list[str] = Field(default_factory=list)


class Event(BaseModel):
    """Caliper activity event.

    Events are immutable; use ``model_copy(update=...)`` to derive a
    modified event. ``event_time`` is normalized to UTC on construction.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    context: str | None = Field(default=None, alias="@context")
    id: str | None = None
    type: str | None = None
    action: str | None = None
    agent: EntityRef | None = None
    object_: EntityRef | None = Field(default=None, alias="object")
    target: EntityRef | None = None
    generated: EntityRef | None = None
    ed_app: EntityRef | None = None
    group: EntityRef | None = None
    membership: Membership | None = None
    federated_session: EntityRef | None = None
    event_time: datetime | None = None
    time_zone_offset: int | None = None

    @field_validator("event_time")
    @classmethod
    def normalize_event_time(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @property
    def roles(self) -> list[str]:
        """Membership roles, empty when the event has no membership."""
        if self.membership is None:
            return []
        return list(self.membership.roles)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON document stored with the event."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> "Event":
        """Rebuild an event from its stored JSON document."""
        return cls.model_validate(document)


@dataclass(frozen=True)
class StoredEvent:
    """An event together with its storage partition keys.

    Attributes:
        tenant_id: Tenant partition.
        organization_id: Organization partition within the tenant.
        class_id: Canonical class identifier.
        user_id: Canonical user identifier.
        event: The wrapped event.
        storage_id: Store-assigned surrogate key; None until persisted.
    """

    tenant_id: str
    organization_id: str
    class_id: str
    user_id: str
    event: Event
    storage_id: str | None = None


class ClassEventStatistics(BaseModel):
    """Event counts for one class, computed fresh for each request.

    Attributes:
        class_sourced_id: The class the statistics were requested for.
        total_events: Number of events considered.
        total_student_enrollments: Number of distinct user ids.
        event_count_grouped_by_date: Date string (YYYY-MM-DD) to count.
        event_count_grouped_by_date_and_student: User id to date string to count.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    class_sourced_id: str
    total_events: int
    total_student_enrollments: int
    event_count_grouped_by_date: dict[str, int] = Field(default_factory=dict)
    event_count_grouped_by_date_and_student: dict[str, dict[str, int]] = Field(
        default_factory=dict
    )
