# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Per-class event statistics.

Statistics are recomputed from stored events on every request and never
persisted. Events are bucketed by calendar date, where the date is the
part of the UTC ISO 8601 event time before the ``T`` separator.
"""

import logging
from collections import Counter, defaultdict
from collections.abc import Collection
from datetime import datetime

from caliper_store.domains.events.exceptions import EventNotFoundError
from caliper_store.domains.events.models import ClassEventStatistics, StoredEvent
from caliper_store.utils.datetime import format_iso

logger = logging.getLogger(__name__)


def date_bucket(event_time: datetime | None) -> str:
    """Return the date portion (before ``T``) of the UTC ISO event time."""
    return (format_iso(event_time) or "").partition("T")[0]


def count_by_date(stored_events: Collection[StoredEvent]) -> dict[str, int]:
    """Count events per date bucket."""
    return dict(Counter(date_bucket(stored.event.event_time) for stored in stored_events))


def aggregate(
    class_id: str,
    stored_events: Collection[StoredEvent] | None,
) -> ClassEventStatistics:
    """Reduce a class's stored events into event statistics.

    Args:
        class_id: Class the events were fetched for; reported verbatim.
        stored_events: Events to aggregate. Not modified.

    Returns:
        Totals, distinct user count, and per-date counts class-wide and
        per user.

    Raises:
        EventNotFoundError: If there are no events to aggregate.
    """
    if not stored_events:
        raise EventNotFoundError(f"No events found for class {class_id}")

    events_by_user: dict[str, list[StoredEvent]] = defaultdict(list)
    for stored in stored_events:
        events_by_user[stored.user_id].append(stored)

    by_date_and_user = {
        user_id: count_by_date(user_events)
        for user_id, user_events in events_by_user.items()
    }

    statistics = ClassEventStatistics(
        class_sourced_id=class_id,
        total_events=len(stored_events),
        total_student_enrollments=len(events_by_user),
        event_count_grouped_by_date=count_by_date(stored_events),
        event_count_grouped_by_date_and_student=by_date_and_user,
    )

    logger.debug(
        "Aggregated class statistics: class=%s, events=%d, users=%d",
        class_id,
        statistics.total_events,
        statistics.total_student_enrollments,
    )

    return statistics
