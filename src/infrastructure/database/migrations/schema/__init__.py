# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Directory database migrations.

Contains migrations for:
- users: Admin, teacher and student accounts
- courses: Course records
- activity_logs: Admin audit trail
"""
