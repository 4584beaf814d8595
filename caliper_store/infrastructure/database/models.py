# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for stored events.

Tables:
    caliper_events: one row per event, keyed by a surrogate storage_id.
        The full event is kept as a JSON document in ``payload``; the
        columns next to it are copies used for filtering.
    caliper_event_roles: membership roles of each event, one row per role,
        so student filtering can be done with an IN subquery.
"""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from caliper_store.utils.datetime import utc_now


class Base(DeclarativeBase):
    """Declarative base for caliper-store tables."""

    pass


class StoredEventRecord(Base):
    """A persisted event with its partition keys."""

    __tablename__ = "caliper_events"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id",
            "organization_id",
            "event_id",
            name="uq_caliper_events_tenant_org_event",
        ),
        Index(
            "ix_caliper_events_class_user",
            "tenant_id",
            "organization_id",
            "class_id",
            "user_id",
        ),
    )

    storage_id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    tenant_id: Mapped[str] = mapped_column(String(255), nullable=False)
    organization_id: Mapped[str] = mapped_column(String(255), nullable=False)
    class_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    event_id: Mapped[str] = mapped_column(String(255), nullable=False)
    event_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    roles: Mapped[list["StoredEventRole"]] = relationship(
        back_populates="stored_event",
        cascade="all, delete-orphan",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return (
            f"<StoredEventRecord(storage_id={self.storage_id}, "
            f"tenant_id={self.tenant_id}, event_id={self.event_id})>"
        )


class StoredEventRole(Base):
    """A membership role attached to a stored event."""

    __tablename__ = "caliper_event_roles"
    __table_args__ = (Index("ix_caliper_event_roles_role", "role"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    storage_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("caliper_events.storage_id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[str] = mapped_column(String(512), nullable=False)

    stored_event: Mapped[StoredEventRecord] = relationship(back_populates="roles")
