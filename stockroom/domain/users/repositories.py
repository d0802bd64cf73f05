# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import ResetToken, SessionCredential, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def add(self, user: User) -> User: ...
    def save(self, user: User) -> User: ...


class ResetTokenRepository(Protocol):
    def replace_for_user(self, token: ResetToken) -> None:
        """Delete any token of ``token.user_id`` and store ``token`` atomically."""
        ...

    def pop_live(self, token_hash: str, now: datetime) -> ResetToken | None:
        """Find a token by hash expiring after ``now`` and delete it atomically."""
        ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class SessionTokenService(Protocol):
    def issue(self, user_id: int) -> SessionCredential: ...
    def verify(self, token: str) -> int: ...


class EmailSender(Protocol):
    def send(
        self,
        sent_from: str,
        send_to: str,
        reply_to: str,
        subject: str,
        html_body: str,
    ) -> None: ...
