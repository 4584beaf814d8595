# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for caliper-store.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
"""

from caliper_store.utils.datetime import (
    ensure_utc,
    format_iso,
    local_standard_offset_seconds,
    local_to_utc,
    utc_now,
)
from caliper_store.utils.logging import (
    bind_context,
    bound_context,
    clear_context,
    get_logger,
    setup_logging,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "bound_context",
    "clear_context",
    # Datetime
    "utc_now",
    "ensure_utc",
    "local_to_utc",
    "format_iso",
    "local_standard_offset_seconds",
]
