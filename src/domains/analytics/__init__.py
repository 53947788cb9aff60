# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics domain services.

Provides the dashboard overview counts and the aggregate admin report.

Usage:
    from src.domains.analytics import ReportAggregator

    aggregator = ReportAggregator(db)
    report = await aggregator.get_reports()
"""

from src.domains.analytics.aggregator import (
    CourseRow,
    ReportAggregator,
    TeacherRow,
    build_reports,
)

__all__ = [
    "ReportAggregator",
    "build_reports",
    "CourseRow",
    "TeacherRow",
]
