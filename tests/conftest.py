# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import pytest

from caliper_store.domains.events import Event

LEARNER_ROLE = "http://purl.imsglobal.org/vocab/lis/v2/membership#Learner"
INSTRUCTOR_ROLE = "http://purl.imsglobal.org/vocab/lis/v2/membership#Instructor"


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_environment() -> dict[str, str]:
    """Provide test environment variables."""
    return {
        "ENVIRONMENT": "development",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "EVENT_DB_URL": "sqlite+aiosqlite:///:memory:",
    }


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (uses a database)"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_tenant_id() -> str:
    """Provide a sample tenant ID for testing."""
    return "tenant-1"


@pytest.fixture
def sample_org_id() -> str:
    """Provide a sample organization ID for testing."""
    return "org-1"


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Build Caliper events with sensible defaults.

    Keyword arguments override the defaults; ``user`` and ``class_id`` set
    the agent and group ids, ``roles`` sets membership roles.
    """

    def _make_event(
        event_id: str | None = "event-1",
        user: str = "student-1",
        class_id: str = "class-1",
        roles: list[str] | None = None,
        event_time: datetime | None = datetime(2020, 1, 1, 10, 0, tzinfo=timezone.utc),
        **overrides: Any,
    ) -> Event:
        data: dict[str, Any] = {
            "@context": "http://purl.imsglobal.org/ctx/caliper/v1p1",
            "id": event_id,
            "type": "MediaEvent",
            "action": "Started",
            "agent": {"id": user, "type": "Person"},
            "object": {"id": "https://example.edu/videos/1225", "type": "VideoObject"},
            "edApp": {"id": "https://example.edu", "type": "SoftwareApplication"},
            "group": {"id": class_id, "type": "CourseSection"},
            "membership": {
                "id": f"{class_id}/members/{user}",
                "type": "Membership",
                "roles": roles if roles is not None else [LEARNER_ROLE],
            },
            "eventTime": event_time.isoformat() if event_time else None,
        }
        data.update(overrides)
        return Event.model_validate(data)

    return _make_event
