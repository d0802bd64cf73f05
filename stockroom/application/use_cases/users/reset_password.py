# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stockroom.application.services.reset_tokens import ResetTokenService
from stockroom.domain.users.repositories import PasswordHasher, UserRepository
from stockroom.shared.errors import InvalidOrExpiredTokenError
from stockroom.shared.logging import logger

from ._policy import DEFAULT_PASSWORD_MIN_LENGTH, check_password_length, require_fields


class ResetPasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        reset_tokens: ResetTokenService,
        password_hasher: PasswordHasher,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ) -> None:
        self._users = users
        self._reset_tokens = reset_tokens
        self._password_hasher = password_hasher
        self._password_min_length = password_min_length

    def execute(self, raw_token: str | None, password: str | None) -> None:
        # Validate before consuming so a rejected password does not burn the token
        (password,) = require_fields("Please add a new password", password)
        check_password_length(password, self._password_min_length)

        user_id = self._reset_tokens.consume(raw_token or "")
        user = self._users.find_by_id(user_id)
        if user is None:
            raise InvalidOrExpiredTokenError()

        self._users.save(user.with_password_hash(self._password_hasher.hash(password)))
        logger.info(f"users.reset_password: ok (user_id={user_id})")
