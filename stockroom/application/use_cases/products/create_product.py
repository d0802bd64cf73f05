# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from decimal import Decimal

from stockroom.domain.products.entities import Product
from stockroom.domain.products.repositories import ImageStore, ProductRepository
from stockroom.shared.errors import ValidationError
from stockroom.shared.logging import logger

from .images import ImageUpload, store_image


class CreateProductUseCase:
    def __init__(self, *, products: ProductRepository, images: ImageStore) -> None:
        self._products = products
        self._images = images

    def execute(
        self,
        owner_id: int,
        *,
        name: str | None,
        category: str | None,
        quantity: int | None,
        price: Decimal | None,
        sku: str | None = None,
        description: str | None = None,
        image: ImageUpload | None = None,
    ) -> Product:
        if not name or not category or quantity is None or price is None:
            raise ValidationError("Please fill in all fields")

        product = Product(
            id=0,
            owner_id=owner_id,
            name=name,
            category=category,
            quantity=quantity,
            price=price,
            sku=sku,
            description=description or "",
        )
        if image is not None:
            product = product.with_changes(image=store_image(self._images, image))

        persisted = self._products.add(product)
        logger.info(f"products.create: ok (user_id={owner_id}, product_id={persisted.id})")
        return persisted
