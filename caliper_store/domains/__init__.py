# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for caliper-store.

Domains:
    events: Event ingestion, lookups, and per-class event statistics.
"""
