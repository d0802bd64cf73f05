# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import wraps
from typing import cast

from flask import Request, g, request

from stockroom.domain.users.exceptions import InvalidSessionError
from stockroom.shared.errors import UnauthorizedError
from stockroom.shared.logging import logger

SESSION_COOKIE = "token"


class AuthedRequest(Request):
    user_id: int


def authed_request() -> AuthedRequest:
    """Return the current request cast to include authentication attributes."""
    return cast(AuthedRequest, request)


def request_token() -> str:
    """Session token from the cookie, or from a bearer header."""

    token = request.cookies.get(SESSION_COOKIE, "")
    if not token:
        auth = request.headers.get("Authorization", "")
        if auth.startswith("Bearer "):
            token = auth[7:].strip()
    return token


def auth_required(f):
    """Guard a controller method; the controller must expose ``session_tokens``."""

    @wraps(f)
    def inner(self, *a, **kw):
        token = request_token()
        if not token:
            logger.warning(f"No session token on {request.method} {request.path}")
            raise UnauthorizedError()

        try:
            user_id = self.session_tokens.verify(token)
        except InvalidSessionError as exc:
            logger.warning(
                f"Auth failed ({exc.reason}) on {request.method} {request.path}"
            )
            raise

        request.user_id = user_id
        g.user_id = user_id
        logger.debug(f"Auth OK: user={user_id} {request.method} {request.path}")
        return f(self, *a, **kw)

    return inner


__all__ = ["SESSION_COOKIE", "AuthedRequest", "auth_required", "authed_request", "request_token"]
