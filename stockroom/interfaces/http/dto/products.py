from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from stockroom.domain.products.entities import Product, ProductImage


class ProductRequestDTO(BaseModel):
    """Accepts JSON bodies and multipart form fields alike."""

    name: str | None = Field(None, max_length=256)
    sku: str | None = Field(None, max_length=64)
    category: str | None = Field(None, max_length=128)
    quantity: int | None = Field(None, ge=0)
    price: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2)
    description: str | None = None

    model_config = ConfigDict(extra="ignore")


class ProductImageDTO(BaseModel):
    file_name: str = Field(serialization_alias="fileName")
    file_path: str = Field(serialization_alias="filePath")
    file_type: str = Field(serialization_alias="fileType")
    file_size: str = Field(serialization_alias="fileSize")

    @classmethod
    def from_image(cls, image: ProductImage) -> ProductImageDTO:
        return cls(
            file_name=image.file_name,
            file_path=image.file_path,
            file_type=image.file_type,
            file_size=image.file_size,
        )


class ProductDTO(BaseModel):
    id: int = Field(serialization_alias="_id")
    user: int
    name: str
    sku: str | None = None
    category: str
    quantity: int
    price: float
    description: str = ""
    image: ProductImageDTO | None = None
    created_at: datetime | None = Field(None, serialization_alias="createdAt")
    updated_at: datetime | None = Field(None, serialization_alias="updatedAt")

    @classmethod
    def from_product(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            user=product.owner_id,
            name=product.name,
            sku=product.sku,
            category=product.category,
            quantity=product.quantity,
            price=float(product.price),
            description=product.description,
            image=ProductImageDTO.from_image(product.image) if product.image else None,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
