# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from stockroom.domain.users.entities import SessionCredential, User, normalize_email
from stockroom.domain.users.exceptions import EmailAlreadyRegisteredError
from stockroom.domain.users.repositories import (
    PasswordHasher,
    SessionTokenService,
    UserRepository,
)
from stockroom.shared.errors import ValidationError
from stockroom.shared.logging import logger

from ._policy import (
    DEFAULT_PASSWORD_MIN_LENGTH,
    check_password_length,
    is_well_formed_email,
    require_fields,
)


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionTokenService,
        password_hasher: PasswordHasher,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._password_min_length = password_min_length

    def execute(
        self, name: str | None, email: str | None, password: str | None
    ) -> tuple[User, SessionCredential]:
        name, email, password = require_fields(
            "Please fill in all required fields", name, email, password
        )
        check_password_length(password, self._password_min_length)

        email = normalize_email(email)
        if not is_well_formed_email(email):
            raise ValidationError("Please enter a valid email")

        if self._users.find_by_email(email):
            raise EmailAlreadyRegisteredError()

        user = User(
            id=0,
            name=name.strip(),
            email=email,
            password_hash=self._password_hasher.hash(password),
            created_at=datetime.now(UTC),
        )
        persisted = self._users.add(user)
        credential = self._sessions.issue(persisted.id)
        logger.info(f"users.register: ok (user_id={persisted.id})")
        return persisted, credential
