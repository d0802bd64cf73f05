# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .entities import Product


@dataclass(slots=True, frozen=True)
class StoredImage:
    public_id: str
    url: str


class ProductRepository(Protocol):
    def add(self, product: Product) -> Product: ...
    def find_by_id(self, product_id: int) -> Product | None: ...
    def list_for_owner(self, owner_id: int) -> Sequence[Product]: ...
    def save(self, product: Product) -> Product: ...
    def delete(self, product_id: int) -> None: ...


class ImageStore(Protocol):
    def upload(self, filename: str, data: bytes, content_type: str) -> StoredImage: ...
    def delete(self, public_id: str) -> None: ...
