# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for caliper-store.

Design Decisions:
-----------------
1. Event times are stored in UTC
2. All Python datetimes handed to the store are timezone-aware
3. Date buckets are derived from the UTC ISO 8601 string form

Usage:
------
    from caliper_store.utils.datetime import utc_now

    now = utc_now()
"""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Args:
        dt: A datetime object (naive or aware) or None.

    Returns:
        Timezone-aware UTC datetime or None.

    Note:
        - If dt is None, returns None
        - If dt is naive, assumes UTC and adds tzinfo
        - If dt is aware, converts to UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def local_to_utc(dt: datetime) -> datetime:
    """Interpret a naive datetime as local wall-clock time and convert to UTC.

    Args:
        dt: Naive datetime in the system's local timezone.

    Returns:
        Timezone-aware UTC datetime.
    """
    return dt.astimezone().astimezone(timezone.utc)


def format_iso(dt: datetime | None) -> str | None:
    """Format a datetime as ISO 8601 string in UTC.

    Args:
        dt: Datetime to format.

    Returns:
        ISO 8601 formatted string or None.
    """
    if dt is None:
        return None

    dt_utc = ensure_utc(dt)
    return dt_utc.isoformat()


def local_standard_offset_seconds() -> int:
    """Get the local timezone's standard UTC offset in seconds.

    Daylight saving time is ignored. Positive values are east of UTC.

    Returns:
        Offset in whole seconds.
    """
    return -time.timezone
