# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence

from stockroom.domain.products.entities import Product
from stockroom.domain.products.repositories import ProductRepository


class ListProductsUseCase:
    def __init__(self, *, products: ProductRepository) -> None:
        self._products = products

    def execute(self, owner_id: int) -> Sequence[Product]:
        return self._products.list_for_owner(owner_id)
