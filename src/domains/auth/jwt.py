# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bearer access tokens for the admin API.

Tokens are normally minted by the platform's login service; this module
shares its secret so it can validate them, and mint them for operators and
tests. The ``name`` claim is what the activity feed shows as the actor.

Example:
    >>> from src.core.config import get_settings
    >>> tokens = JWTManager(get_settings().jwt)
    >>> token = tokens.create_access_token("a-1", name="Ada", role="admin")
    >>> tokens.decode_token(token).role
    'admin'
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

from jose import ExpiredSignatureError, JWTError as JoseJWTError, jwt
from pydantic import BaseModel, ValidationError

from src.core.config.settings import JWTSettings

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


class TokenPayload(BaseModel):
    """Claims carried by an access token.

    Attributes:
        sub: Account id.
        type: Always ``access``.
        name: Display name of the account.
        role: Account role (student, teacher, admin).
        exp: Expiry as a unix timestamp.
        iat: Issue time as a unix timestamp.
        jti: Random token id.
    """

    sub: str
    type: Literal["access"] = ACCESS_TOKEN_TYPE
    name: str | None = None
    role: str | None = None
    exp: int
    iat: int
    jti: str


class JWTError(Exception):
    """A bearer token could not be accepted."""


class TokenExpiredError(JWTError):
    """The token's ``exp`` is in the past."""


class InvalidTokenError(JWTError):
    """Bad signature, unreadable token, wrong type or malformed claims."""


class JWTManager:
    """Mints and validates access tokens with the configured secret."""

    def __init__(self, settings: JWTSettings) -> None:
        self._settings = settings

    @property
    def _secret(self) -> str:
        return self._settings.secret_key.get_secret_value()

    def create_access_token(
        self,
        user_id: str,
        name: str | None = None,
        role: str | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Mint an access token for an account.

        Args:
            user_id: Account id, stored as ``sub``.
            name: Display name.
            role: Account role.
            expires_delta: Lifetime; defaults to the configured one.
        """
        issued_at = datetime.now(timezone.utc)
        lifetime = expires_delta or timedelta(minutes=self._settings.access_token_expire_minutes)

        claims: dict[str, Any] = {
            "sub": str(user_id),
            "type": ACCESS_TOKEN_TYPE,
            "name": name,
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + lifetime).timestamp()),
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(claims, self._secret, algorithm=self._settings.algorithm)

    def decode_token(self, token: str) -> TokenPayload:
        """Validate a token and return its claims.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: For any other reason the token is unusable.
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._settings.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except JoseJWTError as e:
            logger.warning("Rejected bearer token: %s", e)
            raise InvalidTokenError(f"Invalid token: {e}")

        token_type = claims.get("type", ACCESS_TOKEN_TYPE)
        if token_type != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError(f"Expected access token, got {token_type}")

        try:
            return TokenPayload.model_validate(claims)
        except ValidationError:
            logger.warning("Rejected bearer token with malformed claims")
            raise InvalidTokenError("Invalid token: malformed claims")
