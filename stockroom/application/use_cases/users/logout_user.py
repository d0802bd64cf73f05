"""Use-case for ending a session."""

from __future__ import annotations

from stockroom.domain.users.exceptions import InvalidSessionError
from stockroom.domain.users.repositories import SessionTokenService
from stockroom.shared.logging import logger


class LogoutUserUseCase:
    """Session tokens are stateless, so logout only concerns the client.

    The token is inspected solely to attribute the logout in the logs.
    """

    def __init__(self, *, sessions: SessionTokenService) -> None:
        self._sessions = sessions

    def execute(self, token: str | None) -> int | None:
        user_id: int | None = None
        if token:
            try:
                user_id = self._sessions.verify(token)
            except InvalidSessionError:
                user_id = None
        logger.info(f"users.logout: ok (user_id={user_id})")
        return user_id
