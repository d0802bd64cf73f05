# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stockroom.domain.ownership import verify_ownership
from stockroom.domain.products.entities import Product
from stockroom.domain.products.repositories import ProductRepository


class GetProductUseCase:
    def __init__(self, *, products: ProductRepository) -> None:
        self._products = products

    def execute(self, product_id: int, requester_id: int) -> Product:
        return verify_ownership(
            self._products.find_by_id(product_id), requester_id, kind="Product"
        )
