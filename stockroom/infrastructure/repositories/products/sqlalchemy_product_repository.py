# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from stockroom.domain.products.entities import Product as DomainProduct
from stockroom.domain.products.entities import ProductImage
from stockroom.domain.products.repositories import ProductRepository
from stockroom.infrastructure.db.models import Product
from stockroom.infrastructure.db.session import session_scope
from stockroom.shared.errors import NotFoundError
from stockroom.utils.clock import as_utc


def _to_domain(row: Product) -> DomainProduct:
    image = None
    if row.image_public_id and row.image_file_path:
        image = ProductImage(
            file_name=row.image_file_name or "",
            file_path=row.image_file_path,
            file_type=row.image_file_type or "",
            file_size=row.image_file_size or "",
            public_id=row.image_public_id,
        )
    return DomainProduct(
        id=row.id,
        owner_id=row.user_id,
        name=row.name,
        category=row.category,
        quantity=row.quantity,
        price=Decimal(row.price),
        sku=row.sku,
        description=row.description or "",
        image=image,
        created_at=as_utc(row.created_at) if row.created_at else None,
        updated_at=as_utc(row.updated_at) if row.updated_at else None,
    )


def _apply(row: Product, product: DomainProduct) -> None:
    row.name = product.name
    row.sku = product.sku
    row.category = product.category
    row.quantity = product.quantity
    row.price = product.price
    row.description = product.description
    image = product.image
    row.image_file_name = image.file_name if image else None
    row.image_file_path = image.file_path if image else None
    row.image_file_type = image.file_type if image else None
    row.image_file_size = image.file_size if image else None
    row.image_public_id = image.public_id if image else None


class SqlAlchemyProductRepository(ProductRepository):
    def add(self, product: DomainProduct) -> DomainProduct:
        with session_scope() as session:
            row = Product(user_id=product.owner_id)
            _apply(row, product)
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def find_by_id(self, product_id: int) -> DomainProduct | None:
        with session_scope() as session:
            row = session.get(Product, product_id)
            return _to_domain(row) if row else None

    def list_for_owner(self, owner_id: int) -> Sequence[DomainProduct]:
        with session_scope() as session:
            rows = (
                session.query(Product)
                .filter(Product.user_id == owner_id)
                .order_by(Product.created_at.desc(), Product.id.desc())
                .all()
            )
            return [_to_domain(row) for row in rows]

    def save(self, product: DomainProduct) -> DomainProduct:
        with session_scope() as session:
            row = session.get(Product, product.id)
            if row is None:
                raise NotFoundError("Product not found")
            _apply(row, product)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def delete(self, product_id: int) -> None:
        with session_scope() as session:
            session.query(Product).filter(Product.id == product_id).delete()
