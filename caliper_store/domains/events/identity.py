# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tenant context and identity normalization for stored events.

The event service computes two storage keys for every event it saves:
the canonical user id and the canonical class id. Both are produced by
converters that may consult the tenant record. Tenant lookup is allowed
to come back empty; converters must then fall back to the raw ids.

Tenant metadata keys understood by the default converters:
    user_id_prefix: stripped from the front of the agent id
    class_id_prefix: stripped from the front of the group id

Example:
    resolver = InMemoryTenantResolver(
        [TenantRecord(tenant_id="t1", metadata={"user_id_prefix": "urn:user:"})]
    )
    tenant = await resolver.find_by_id("t1")
    user_id = AgentUserIdConverter().convert(tenant, event)
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from caliper_store.domains.events.models import Event, entity_id

USER_ID_PREFIX_KEY = "user_id_prefix"
CLASS_ID_PREFIX_KEY = "class_id_prefix"


@dataclass(frozen=True)
class TenantRecord:
    """Tenant metadata used while normalizing ids.

    Attributes:
        tenant_id: Tenant identifier.
        name: Display name.
        metadata: Free-form string settings for the tenant.
    """

    tenant_id: str
    name: str | None = None
    metadata: Mapping[str, str] = field(default_factory=dict)


class TenantContextResolver(Protocol):
    """Looks up tenant records by id."""

    async def find_by_id(self, tenant_id: str) -> TenantRecord | None: ...


class UserIdConverter(Protocol):
    """Computes the canonical user id of an event."""

    def convert(self, tenant: TenantRecord | None, event: Event) -> str: ...


class ClassIdConverter(Protocol):
    """Computes the canonical class id of an event."""

    def convert(self, tenant: TenantRecord | None, event: Event) -> str: ...


class InMemoryTenantResolver:
    """Tenant resolver backed by a dictionary."""

    def __init__(self, tenants: Iterable[TenantRecord] = ()) -> None:
        self._tenants = {tenant.tenant_id: tenant for tenant in tenants}

    def add(self, tenant: TenantRecord) -> None:
        """Register or replace a tenant record."""
        self._tenants[tenant.tenant_id] = tenant

    async def find_by_id(self, tenant_id: str) -> TenantRecord | None:
        return self._tenants.get(tenant_id)


def _strip_tenant_prefix(tenant: TenantRecord | None, key: str, value: str) -> str:
    if tenant is None:
        return value
    prefix = tenant.metadata.get(key)
    if prefix and value.startswith(prefix):
        return value[len(prefix):]
    return value


class AgentUserIdConverter:
    """Uses the event agent's id as the user id.

    Returns an empty string when the event has no agent id.
    """

    def convert(self, tenant: TenantRecord | None, event: Event) -> str:
        agent_id = entity_id(event.agent)
        if agent_id is None:
            return ""
        return _strip_tenant_prefix(tenant, USER_ID_PREFIX_KEY, agent_id)


class GroupClassIdConverter:
    """Uses the event group's id as the class id.

    Returns an empty string when the event has no group id.
    """

    def convert(self, tenant: TenantRecord | None, event: Event) -> str:
        group_id = entity_id(event.group)
        if group_id is None:
            return ""
        return _strip_tenant_prefix(tenant, CLASS_ID_PREFIX_KEY, group_id)
