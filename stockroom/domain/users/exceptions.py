# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from stockroom.shared.errors.base import ConflictError, NotFoundError, UnauthorizedError


class EmailAlreadyRegisteredError(ConflictError):
    default_code = "email_already_registered"
    default_message = "Email has already been registered"


class UserNotFoundError(NotFoundError):
    default_code = "user_not_found"
    default_message = "User not found"


class InvalidCredentialsError(UnauthorizedError):
    # Wrong password is reported as a bad request, not as a missing session
    default_code = "invalid_credentials"
    default_status = HTTPStatus.BAD_REQUEST
    default_message = "Invalid email or password"


class InvalidSessionError(UnauthorizedError):
    default_code = "invalid_session"

    def __init__(self, reason: str) -> None:
        super().__init__()
        self.reason = reason
