# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

from stockroom.shared.errors import ValidationError


@dataclass(slots=True, frozen=True)
class ProductImage:

    file_name: str
    file_path: str
    file_type: str
    file_size: str
    public_id: str


@dataclass(slots=True, frozen=True)
class Product:
    """Inventory item owned by a single user."""

    id: int
    owner_id: int
    name: str
    category: str
    quantity: int
    price: Decimal
    sku: str | None = None
    description: str = ""
    image: ProductImage | None = None
    created_at: datetime | None = field(default=None, compare=False)
    updated_at: datetime | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValidationError("Quantity cannot be negative", context={"field": "quantity"})
        if self.price < 0:
            raise ValidationError("Price cannot be negative", context={"field": "price"})

    def with_changes(
        self,
        *,
        name: str | None = None,
        category: str | None = None,
        quantity: int | None = None,
        price: Decimal | None = None,
        description: str | None = None,
        image: ProductImage | None = None,
    ) -> Product:
        """Apply a partial update; ``None`` keeps the current value."""

        return replace(
            self,
            name=self.name if name is None else name,
            category=self.category if category is None else category,
            quantity=self.quantity if quantity is None else quantity,
            price=self.price if price is None else price,
            description=self.description if description is None else description,
            image=self.image if image is None else image,
        )
