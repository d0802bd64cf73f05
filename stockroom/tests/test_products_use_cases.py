from __future__ import annotations

from decimal import Decimal

import pytest

from stockroom.application.use_cases.products.create_product import CreateProductUseCase
from stockroom.application.use_cases.products.delete_product import DeleteProductUseCase
from stockroom.application.use_cases.products.get_product import GetProductUseCase
from stockroom.application.use_cases.products.images import ImageUpload
from stockroom.application.use_cases.products.list_products import ListProductsUseCase
from stockroom.application.use_cases.products.update_product import UpdateProductUseCase
from stockroom.domain import Product, verify_ownership
from stockroom.domain.products.exceptions import ImageUploadError
from stockroom.shared.errors import (
    NotFoundError,
    StoreError,
    UnauthorizedError,
    ValidationError,
)
from stockroom.utils.files import format_file_size

PNG = ImageUpload(filename="widget.png", content_type="image/png", data=b"\x89PNG" + b"0" * 1496)


def test_verify_ownership_returns_owned_resource(make_product) -> None:
    product = make_product(owner_id=1)

    assert verify_ownership(product, 1, kind="Product") is product


def test_verify_ownership_rejects_other_users(make_product) -> None:
    product = make_product(owner_id=1)

    with pytest.raises(UnauthorizedError) as exc_info:
        verify_ownership(product, 2, kind="Product")
    assert exc_info.value.status == 401
    assert exc_info.value.message == "User not authorized"


def test_verify_ownership_missing_resource() -> None:
    with pytest.raises(NotFoundError, match="Product not found"):
        verify_ownership(None, 1, kind="Product")


def test_product_rejects_negative_quantity() -> None:
    with pytest.raises(ValidationError):
        Product(id=1, owner_id=1, name="x", category="y", quantity=-1, price=Decimal("1"))


def test_create_product_with_image(products, images) -> None:
    use_case = CreateProductUseCase(products=products, images=images)

    product = use_case.execute(
        7, name="Widget", category="Tools", quantity=0, price=Decimal("2.50"), image=PNG
    )

    assert product.id in products.products
    assert product.owner_id == 7
    assert product.quantity == 0
    assert product.image is not None
    assert product.image.file_size == "1.50 KB"
    assert product.image.public_id in images.files


@pytest.mark.parametrize(
    "fields",
    [
        {"name": None, "category": "Tools", "quantity": 1, "price": Decimal("1")},
        {"name": "Widget", "category": "", "quantity": 1, "price": Decimal("1")},
        {"name": "Widget", "category": "Tools", "quantity": None, "price": Decimal("1")},
        {"name": "Widget", "category": "Tools", "quantity": 1, "price": None},
    ],
)
def test_create_product_requires_fields(products, images, fields) -> None:
    use_case = CreateProductUseCase(products=products, images=images)

    with pytest.raises(ValidationError, match="Please fill in all fields"):
        use_case.execute(1, **fields)
    assert not products.products


def test_create_product_upload_failure(products, images) -> None:
    images.fail_upload = True
    use_case = CreateProductUseCase(products=products, images=images)

    with pytest.raises(ImageUploadError) as exc_info:
        use_case.execute(1, name="W", category="T", quantity=1, price=Decimal("1"), image=PNG)
    assert exc_info.value.status == 500
    assert not products.products


def test_list_products_is_owner_scoped(products, make_product) -> None:
    mine = [make_product(owner_id=1), make_product(owner_id=1, name="Gadget")]
    make_product(owner_id=2)

    listed = ListProductsUseCase(products=products).execute(1)

    assert [p.id for p in listed] == [mine[1].id, mine[0].id]


def test_get_product_checks_ownership(products, make_product) -> None:
    product = make_product(owner_id=1)
    use_case = GetProductUseCase(products=products)

    assert use_case.execute(product.id, 1) == product
    with pytest.raises(UnauthorizedError):
        use_case.execute(product.id, 2)
    with pytest.raises(NotFoundError):
        use_case.execute(999, 1)


def test_update_product_is_partial(products, images, make_product) -> None:
    product = make_product(owner_id=1, description="old")
    use_case = UpdateProductUseCase(products=products, images=images)

    updated = use_case.execute(product.id, 1, quantity=10, name="")

    assert updated.quantity == 10
    assert updated.name == "Widget"
    assert updated.price == Decimal("9.99")
    assert updated.description == "old"


def test_update_product_replaces_image(products, images) -> None:
    created = CreateProductUseCase(products=products, images=images).execute(
        1, name="W", category="T", quantity=1, price=Decimal("1"), image=PNG
    )
    old_id = created.image.public_id

    updated = UpdateProductUseCase(products=products, images=images).execute(
        created.id, 1, image=PNG
    )

    assert updated.image.public_id != old_id
    assert images.deleted == [old_id]


def test_update_product_by_non_owner_changes_nothing(products, images, make_product) -> None:
    product = make_product(owner_id=1)

    with pytest.raises(UnauthorizedError):
        UpdateProductUseCase(products=products, images=images).execute(
            product.id, 2, quantity=99, image=PNG
        )
    assert products.products[product.id].quantity == 3
    assert images.files == {}


def test_delete_product_survives_image_delete_failure(products, images) -> None:
    created = CreateProductUseCase(products=products, images=images).execute(
        1, name="W", category="T", quantity=1, price=Decimal("1"), image=PNG
    )
    images.fail_delete = True

    DeleteProductUseCase(products=products, images=images).execute(created.id, 1)

    assert created.id not in products.products


def test_delete_product_by_non_owner(products, images, make_product) -> None:
    product = make_product(owner_id=1)

    with pytest.raises(UnauthorizedError):
        DeleteProductUseCase(products=products, images=images).execute(product.id, 2)
    assert product.id in products.products


@pytest.mark.parametrize(
    ("size", "expected"),
    [(0, "0 Bytes"), (512, "512.00 Bytes"), (1500, "1.50 KB"), (2_500_000, "2.50 MB")],
)
def test_format_file_size(size: int, expected: str) -> None:
    assert format_file_size(size) == expected


def test_update_product_discards_new_image_when_save_fails(
    products, images, make_product, monkeypatch
) -> None:
    product = make_product(owner_id=1)

    def failing_save(_product):
        raise StoreError()

    monkeypatch.setattr(products, "save", failing_save)

    with pytest.raises(StoreError):
        UpdateProductUseCase(products=products, images=images).execute(
            product.id, 1, image=PNG
        )
    assert images.files == {}
    assert images.deleted == ["img-1"]
