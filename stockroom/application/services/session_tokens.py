# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Stateless signed session credentials.

Tokens are HS256 JWTs carrying the user id (``sub``) and an absolute expiry
(``exp``). Nothing is stored server-side, so a token stays valid until it
expires; logout only clears the client cookie.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

import jwt

from stockroom.domain.users.entities import SessionCredential
from stockroom.domain.users.exceptions import InvalidSessionError
from stockroom.domain.users.repositories import SessionTokenService
from stockroom.utils.clock import Clock, utc_now

_ALGORITHM = "HS256"


class JwtSessionTokenService(SessionTokenService):
    def __init__(self, secret: str, ttl_seconds: int, *, clock: Clock = utc_now) -> None:
        if not secret:
            raise ValueError("session signing secret must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("session ttl must be positive")
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    def __repr__(self) -> str:
        return f"JwtSessionTokenService(ttl={self._ttl})"

    def issue(self, user_id: int) -> SessionCredential:
        now = self._clock()
        # exp has whole-second precision; round up so the token never ends early
        exp = math.ceil((now + self._ttl).timestamp())
        expires_at = datetime.fromtimestamp(exp, UTC)
        payload = {"sub": str(user_id), "iat": int(now.timestamp()), "exp": exp}
        token = jwt.encode(payload, self._secret, algorithm=_ALGORITHM)
        return SessionCredential(user_id=user_id, token=token, expires_at=expires_at)

    def verify(self, token: str) -> int:
        try:
            # expiry is checked against the injected clock below
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[_ALGORITHM],
                options={"require": ["sub", "exp"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidSignatureError as exc:
            raise InvalidSessionError("bad_signature") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidSessionError("malformed") from exc

        try:
            expires_at = int(payload["exp"])
            user_id = int(payload["sub"])
        except (TypeError, ValueError) as exc:
            raise InvalidSessionError("malformed") from exc

        if self._clock().timestamp() >= expires_at:
            raise InvalidSessionError("expired")
        return user_id


__all__ = ["JwtSessionTokenService"]
