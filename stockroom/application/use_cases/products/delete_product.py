# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stockroom.domain.ownership import verify_ownership
from stockroom.domain.products.repositories import ImageStore, ProductRepository
from stockroom.shared.logging import logger

from .images import discard_image


class DeleteProductUseCase:
    def __init__(self, *, products: ProductRepository, images: ImageStore) -> None:
        self._products = products
        self._images = images

    def execute(self, product_id: int, requester_id: int) -> None:
        product = verify_ownership(
            self._products.find_by_id(product_id), requester_id, kind="Product"
        )
        discard_image(self._images, product.image)
        self._products.delete(product_id)
        logger.info(f"products.delete: ok (user_id={requester_id}, product_id={product_id})")
