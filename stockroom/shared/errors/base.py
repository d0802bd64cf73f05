# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    message: str = ""
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message or self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.message or self.code, "error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class DomainError(AppError):
    default_code: ClassVar[str] = "domain_error"
    default_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST
    default_message: ClassVar[str] = "Request could not be processed"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code or self.default_code,
            status=status or self.default_status,
            message=message or self.default_message,
            context=context,
        )


class ValidationError(DomainError):
    default_code = "validation_error"
    default_message = "Invalid request data"


class ConflictError(DomainError):
    default_code = "conflict"
    default_message = "Resource already exists"


class NotFoundError(DomainError):
    default_code = "not_found"
    default_status = HTTPStatus.NOT_FOUND
    default_message = "Not found"


class UnauthorizedError(DomainError):
    default_code = "unauthorized"
    default_status = HTTPStatus.UNAUTHORIZED
    default_message = "Not authorized, please login"


class InvalidOrExpiredTokenError(DomainError):
    """Unknown and expired reset tokens are reported identically."""

    default_code = "invalid_or_expired_token"
    default_status = HTTPStatus.NOT_FOUND
    default_message = "Invalid or expired token"


class DeliveryError(DomainError):
    default_code = "delivery_failed"
    default_status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Email not sent, please try again"


class StoreError(DomainError):
    default_code = "store_error"
    default_status = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message = "Storage operation failed"


__all__ = [
    "AppError",
    "ConflictError",
    "DeliveryError",
    "DomainError",
    "InvalidOrExpiredTokenError",
    "NotFoundError",
    "StoreError",
    "UnauthorizedError",
    "ValidationError",
]
