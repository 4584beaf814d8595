# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event time range parsing for user-scoped event queries.

Bounds arrive as ``yyyy-MM-dd hh:mm`` strings and are parsed leniently,
the way clients have always been served:

- the hour is 0-23, except that 12 means 00 (``12:30`` is 00:30);
- only the leading ``yyyy-MM-dd hh:mm`` is read, so ``2020-01-01 10:00:00``
  is accepted and the seconds are ignored.

Bounds are read as local wall-clock time and compared in UTC.

Both bounds are exclusive:

    from   to     filter
    ----   ----   ------------------------------
    ""     ""     none
    ""     T      event_time < T
    F      ""     event_time > F
    F      T      event_time > F and event_time < T
"""

import re
from dataclasses import dataclass
from datetime import datetime

from caliper_store.domains.events.defaults import is_blank
from caliper_store.domains.events.exceptions import InvalidDateBoundError
from caliper_store.utils.datetime import local_to_utc

# Leading "yyyy-MM-dd hh:mm"; anything after the minutes is ignored
DATE_BOUND_PATTERN = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2}) (\d{1,2}):(\d{1,2})")


@dataclass(frozen=True)
class EventTimeRange:
    """Exclusive event time bounds; None means unbounded on that side."""

    lower: datetime | None = None
    upper: datetime | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.lower is None and self.upper is None


def parse_date_bound(value: str) -> datetime:
    """Parse a single ``yyyy-MM-dd hh:mm`` bound into a UTC datetime.

    Raises:
        InvalidDateBoundError: If the value does not start with a valid
            ``yyyy-MM-dd hh:mm`` date and time.
    """
    match = DATE_BOUND_PATTERN.match(value.strip())
    if match is None:
        raise InvalidDateBoundError(value)

    year, month, day, hour, minute = (int(part) for part in match.groups())
    if hour == 12:
        hour = 0

    try:
        parsed = datetime(year, month, day, hour, minute)
    except ValueError as e:
        raise InvalidDateBoundError(value) from e
    return local_to_utc(parsed)


def build_time_range(from_: str | None, to: str | None) -> EventTimeRange:
    """Build exclusive time bounds from optional from/to strings.

    Both non-blank bounds are parsed before anything is returned, so a
    malformed bound never yields a partial range.

    Args:
        from_: Lower bound, blank for none.
        to: Upper bound, blank for none.

    Returns:
        The parsed range.

    Raises:
        InvalidDateBoundError: If a non-blank bound cannot be parsed.
    """
    lower = None if is_blank(from_) else parse_date_bound(from_)
    upper = None if is_blank(to) else parse_date_bound(to)
    return EventTimeRange(lower=lower, upper=upper)
