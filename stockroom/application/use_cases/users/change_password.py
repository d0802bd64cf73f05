# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stockroom.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from stockroom.domain.users.repositories import PasswordHasher, UserRepository
from stockroom.shared.logging import logger

from ._policy import DEFAULT_PASSWORD_MIN_LENGTH, check_password_length, require_fields


class ChangePasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._password_min_length = password_min_length

    def execute(self, user_id: int, old_password: str | None, new_password: str | None) -> None:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError("User not found, please sign up")

        old_password, new_password = require_fields(
            "Please add old and new password", old_password, new_password
        )
        check_password_length(new_password, self._password_min_length)

        if not self._password_hasher.verify(old_password, user.password_hash):
            logger.info(f"users.change_password: old password mismatch (user_id={user_id})")
            raise InvalidCredentialsError("Old password is incorrect")

        self._users.save(user.with_password_hash(self._password_hasher.hash(new_password)))
        logger.info(f"users.change_password: ok (user_id={user_id})")
