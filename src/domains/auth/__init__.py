# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication primitives.

Exports:
    PasswordHasher: Secure password hashing using bcrypt.
    JWTManager: JWT access token creation and validation.
"""

from src.domains.auth.jwt import (
    InvalidTokenError,
    JWTError,
    JWTManager,
    TokenExpiredError,
    TokenPayload,
)
from src.domains.auth.password import PasswordHasher

__all__ = [
    "PasswordHasher",
    "JWTManager",
    "JWTError",
    "TokenExpiredError",
    "InvalidTokenError",
    "TokenPayload",
]
