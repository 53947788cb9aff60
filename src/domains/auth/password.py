# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""bcrypt hashing for account passwords.

Teacher and student accounts are created with an initial password chosen
by the admin. Only the bcrypt digest is persisted; it never leaves the
service layer.

Example:
    >>> hasher = PasswordHasher(rounds=4)
    >>> digest = hasher.hash("initial-password")
    >>> hasher.verify("initial-password", digest)
    True
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """bcrypt hasher with a fixed cost factor.

    Attributes:
        rounds: bcrypt cost factor (log2 of the key expansion rounds).
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Return the bcrypt digest of password, salt included.

        Raises:
            ValueError: If password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("utf-8")

    def verify(self, password: str, password_hash: str | None) -> bool:
        """Check password against a stored digest.

        A missing digest or a value that is not a bcrypt digest never
        matches.
        """
        if not password or not password_hash:
            return False

        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a bcrypt digest")
            return False
