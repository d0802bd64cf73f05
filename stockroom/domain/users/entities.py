# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(slots=True, frozen=True)
class User:

    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime
    photo: str | None = None
    phone: str | None = None
    bio: str | None = None

    def with_password_hash(self, password_hash: str) -> User:
        return replace(self, password_hash=password_hash)

    def with_profile(
        self,
        *,
        name: str | None = None,
        phone: str | None = None,
        bio: str | None = None,
        photo: str | None = None,
    ) -> User:
        """Apply a partial update; ``None`` keeps the current value."""

        return replace(
            self,
            name=self.name if name is None else name,
            phone=self.phone if phone is None else phone,
            bio=self.bio if bio is None else bio,
            photo=self.photo if photo is None else photo,
        )


@dataclass(slots=True, frozen=True)
class SessionCredential:

    user_id: int
    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class ResetToken:
    """Outstanding password reset request; only the hash of the secret is kept."""

    user_id: int
    token_hash: str
    created_at: datetime
    expires_at: datetime

    def is_live(self, now: datetime) -> bool:
        return now < self.expires_at
