# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for EventRepository write failures."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from caliper_store.domains.events import EventPersistenceError, StoredEvent
from caliper_store.infrastructure.database import EventRepository


def connection_lost() -> OperationalError:
    return OperationalError("INSERT INTO caliper_events", {}, Exception("connection lost"))


@pytest.fixture
def mock_db():
    """Create mock database session whose commit fails."""
    db = MagicMock()
    db.add = MagicMock()
    db.commit = AsyncMock(side_effect=connection_lost())
    db.rollback = AsyncMock()
    return db


@pytest.fixture
def stored_event(make_event) -> StoredEvent:
    return StoredEvent("tenant-1", "org-1", "class-1", "student-1", make_event("e1"))


class TestEventRepositorySaveFailures:
    """Tests for errors raised by EventRepository.save."""

    @pytest.mark.asyncio
    async def test_commit_failure_rolls_back(self, mock_db, stored_event) -> None:
        repository = EventRepository(mock_db)

        with pytest.raises(EventPersistenceError) as exc_info:
            await repository.save("tenant-1", "org-1", stored_event)

        mock_db.rollback.assert_awaited_once()
        assert isinstance(exc_info.value.original_error, OperationalError)

    @pytest.mark.asyncio
    async def test_failed_rollback_still_raises_persistence_error(
        self, mock_db, stored_event
    ) -> None:
        """Test that a rollback on a dead connection keeps the save error."""
        mock_db.rollback.side_effect = connection_lost()
        repository = EventRepository(mock_db)

        with pytest.raises(EventPersistenceError) as exc_info:
            await repository.save("tenant-1", "org-1", stored_event)

        assert exc_info.value.original_error is mock_db.commit.side_effect
