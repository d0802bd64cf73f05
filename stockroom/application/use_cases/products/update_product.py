# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from decimal import Decimal

from stockroom.domain.ownership import verify_ownership
from stockroom.domain.products.entities import Product
from stockroom.domain.products.repositories import ImageStore, ProductRepository
from stockroom.shared.logging import logger

from .images import ImageUpload, discard_image, store_image


class UpdateProductUseCase:
    """Partial update: fields passed as ``None`` keep their stored value."""

    def __init__(self, *, products: ProductRepository, images: ImageStore) -> None:
        self._products = products
        self._images = images

    def execute(
        self,
        product_id: int,
        requester_id: int,
        *,
        name: str | None = None,
        category: str | None = None,
        quantity: int | None = None,
        price: Decimal | None = None,
        description: str | None = None,
        image: ImageUpload | None = None,
    ) -> Product:
        current = verify_ownership(
            self._products.find_by_id(product_id), requester_id, kind="Product"
        )

        new_image = store_image(self._images, image) if image is not None else None
        try:
            updated = self._products.save(
                current.with_changes(
                    name=name or None,
                    category=category or None,
                    quantity=quantity,
                    price=price,
                    description=description,
                    image=new_image,
                )
            )
        except Exception:
            discard_image(self._images, new_image)
            raise
        if new_image is not None:
            discard_image(self._images, current.image)

        logger.info(f"products.update: ok (user_id={requester_id}, product_id={product_id})")
        return updated
