# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the School Admin API.

This package contains domain services that encapsulate business logic.
Each service works on one async database session and commits its own
unit of work.

Domains:
    activity_log: Admin audit trail and activity feed.
    analytics: Dashboard overview and aggregate reports.
    assignment: Teacher/course ownership and teacher removal.
    auth: Password hashing and JWT access tokens.
    course: Course records and status changes.
    enrollment: Student/course enrollment links.
    user: Teacher, student and admin accounts.
"""
