# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from stockroom.shared.errors import ValidationError

DEFAULT_PASSWORD_MIN_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_well_formed_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


def require_fields(message: str, *values: str | None) -> list[str]:
    """Return ``values`` as given, or raise if any is missing or blank."""

    present = [value for value in values if value is not None and value.strip()]
    if len(present) != len(values):
        raise ValidationError(message)
    return present


def check_password_length(password: str, min_length: int) -> None:
    if len(password) < min_length:
        raise ValidationError(
            f"Password must be at least {min_length} characters",
            context={"min_length": min_length},
        )
