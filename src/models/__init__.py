# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response models for the admin API.

Modules:
- common: Shared summaries and message envelopes
- account: Teacher, student and admin schemas
- course: Course schemas
- activity: Activity feed schemas
- report: Overview and report schemas
"""
