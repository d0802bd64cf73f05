# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from stockroom.domain.users.entities import SessionCredential, User, normalize_email
from stockroom.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from stockroom.domain.users.repositories import (
    PasswordHasher,
    SessionTokenService,
    UserRepository,
)
from stockroom.shared.logging import logger

from ._policy import require_fields


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionTokenService,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher

    def execute(self, email: str | None, password: str | None) -> tuple[User, SessionCredential]:
        email, password = require_fields("Please add email and password", email, password)

        user = self._users.find_by_email(normalize_email(email))
        if user is None:
            logger.info("users.login: unknown email")
            raise UserNotFoundError("User not found, please sign up", status=HTTPStatus.BAD_REQUEST)

        if not self._password_hasher.verify(password, user.password_hash):
            logger.info(f"users.login: bad password (user_id={user.id})")
            raise InvalidCredentialsError()

        credential = self._sessions.issue(user.id)
        logger.info(f"users.login: ok (user_id={user.id})")
        return user, credential
