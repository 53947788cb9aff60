# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database seed package.

Seeds run at application startup after migrations.
"""

from src.infrastructure.database.seeds.admin import seed_bootstrap_admin

__all__ = ["seed_bootstrap_admin"]
