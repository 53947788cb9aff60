"""School Admin API.

Administrative back office for a school platform: teacher, student and
course records, enrollments, reports and the admin activity log.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
