# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Single-use password reset tokens.

The raw token goes to the user by e-mail and is never persisted; only its
SHA-256 digest is stored next to the owning user id and an expiry.
"""

from __future__ import annotations

import hashlib
import secrets
from datetime import timedelta

from stockroom.domain.users.entities import ResetToken
from stockroom.domain.users.repositories import ResetTokenRepository
from stockroom.shared.errors import InvalidOrExpiredTokenError
from stockroom.shared.logging import logger
from stockroom.utils.clock import Clock, utc_now

_RANDOM_BYTES = 32


def hash_reset_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


class ResetTokenService:
    def __init__(
        self,
        *,
        tokens: ResetTokenRepository,
        ttl_seconds: int,
        clock: Clock = utc_now,
    ) -> None:
        self._tokens = tokens
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue_for(self, user_id: int) -> str:
        raw_token = secrets.token_hex(_RANDOM_BYTES) + str(user_id)
        now = self._clock()
        record = ResetToken(
            user_id=user_id,
            token_hash=hash_reset_token(raw_token),
            created_at=now,
            expires_at=now + self._ttl,
        )
        self._tokens.replace_for_user(record)
        logger.info(
            f"reset_token.issue: ok (user_id={user_id}, exp={record.expires_at.isoformat()})"
        )
        return raw_token

    def consume(self, raw_token: str) -> int:
        """Return the owning user id and invalidate the token.

        Unknown and expired tokens raise the same error.
        """

        if not raw_token:
            raise InvalidOrExpiredTokenError()
        record = self._tokens.pop_live(hash_reset_token(raw_token), self._clock())
        if record is None:
            logger.info("reset_token.consume: miss")
            raise InvalidOrExpiredTokenError()
        logger.info(f"reset_token.consume: ok (user_id={record.user_id})")
        return record.user_id


__all__ = ["ResetTokenService", "hash_reset_token"]
