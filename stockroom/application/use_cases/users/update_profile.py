# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stockroom.domain.users.entities import User
from stockroom.domain.users.exceptions import UserNotFoundError
from stockroom.domain.users.repositories import UserRepository
from stockroom.shared.logging import logger


class UpdateProfileUseCase:
    """Partial update of profile fields; e-mail is not editable here."""

    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(
        self,
        user_id: int,
        *,
        name: str | None = None,
        phone: str | None = None,
        bio: str | None = None,
        photo: str | None = None,
    ) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        if name is not None and not name.strip():
            name = None
        updated = self._users.save(user.with_profile(name=name, phone=phone, bio=bio, photo=photo))
        logger.info(f"users.update_profile: ok (user_id={user_id})")
        return updated
