# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stockroom.domain.users.exceptions import InvalidSessionError
from stockroom.domain.users.repositories import SessionTokenService


class LoginStatusUseCase:
    def __init__(self, *, sessions: SessionTokenService) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> bool:
        if not token:
            return False
        try:
            self._sessions.verify(token)
        except InvalidSessionError:
            return False
        return True
