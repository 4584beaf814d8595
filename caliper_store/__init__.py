"""caliper-store.

Multi-tenant store for Caliper-style learning activity events, with
per-class event statistics computed on read.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
