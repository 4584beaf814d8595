# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for the event store.

Example:
    from caliper_store.infrastructure.database import (
        EventRepository,
        get_session,
    )

    async with get_session() as session:
        events = await EventRepository(session).find_all("t1", "org-1")
"""

from caliper_store.infrastructure.database.connection import (
    DatabaseError,
    check_database_connection,
    close_database,
    create_schema,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)
from caliper_store.infrastructure.database.models import (
    Base,
    StoredEventRecord,
    StoredEventRole,
)
from caliper_store.infrastructure.database.repository import EventRepository

__all__ = [
    # Connection
    "DatabaseError",
    "check_database_connection",
    "close_database",
    "create_schema",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
    # Models
    "Base",
    "StoredEventRecord",
    "StoredEventRole",
    # Repository
    "EventRepository",
]
