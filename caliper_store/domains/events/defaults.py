# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity and default field assignment for incoming events."""

from uuid import uuid4

from caliper_store.domains.events.models import Event
from caliper_store.utils.datetime import local_standard_offset_seconds, utc_now


def is_blank(value: str | None) -> bool:
    """Check if a string is None, empty, or whitespace only."""
    return value is None or not value.strip()


def new_event_id() -> str:
    """Generate a 32 character hex event id with no separators."""
    return uuid4().hex


def assign_defaults(event: Event) -> Event:
    """Fill in id, event time and timezone offset for a new event.

    Events that already carry an id are returned unchanged; resubmitting
    such an event is the caller's concern.

    Args:
        event: Incoming event.

    Returns:
        The same event if it has an id, otherwise a copy with a fresh id,
        ``event_time`` defaulted to now, and ``time_zone_offset`` set to the
        local standard UTC offset in seconds.
    """
    if not is_blank(event.id):
        return event

    return event.model_copy(
        update={
            "id": new_event_id(),
            "event_time": event.event_time if event.event_time is not None else utc_now(),
            "time_zone_offset": local_standard_offset_seconds(),
        }
    )
