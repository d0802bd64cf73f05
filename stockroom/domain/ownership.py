# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol, TypeVar

from stockroom.shared.errors import NotFoundError, UnauthorizedError


class Owned(Protocol):
    @property
    def owner_id(self) -> int: ...


T = TypeVar("T", bound=Owned)


def verify_ownership(resource: T | None, requester_id: int, *, kind: str = "Resource") -> T:
    """Return ``resource`` if ``requester_id`` owns it.

    Must run before any read, mutation or deletion of an owned resource.
    """

    if resource is None:
        raise NotFoundError(f"{kind} not found")
    if resource.owner_id != requester_id:
        raise UnauthorizedError("User not authorized", code="not_owner")
    return resource


__all__ = ["Owned", "verify_ownership"]
