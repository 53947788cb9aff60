# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database migrations package.

Migration modules live in ``schema/`` and are applied in order by
``runner.apply_migrations``.
"""
