from .base import (
    AppError,
    ConflictError,
    DeliveryError,
    DomainError,
    InvalidOrExpiredTokenError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

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
    "handle_app_error",
    "register_error_handler",
]
