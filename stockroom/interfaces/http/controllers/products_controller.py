# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter
from typing import Any

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from stockroom.application.use_cases.products.create_product import CreateProductUseCase
from stockroom.application.use_cases.products.delete_product import DeleteProductUseCase
from stockroom.application.use_cases.products.get_product import GetProductUseCase
from stockroom.application.use_cases.products.images import ImageUpload
from stockroom.application.use_cases.products.list_products import ListProductsUseCase
from stockroom.application.use_cases.products.update_product import UpdateProductUseCase
from stockroom.domain.users.repositories import SessionTokenService
from stockroom.infrastructure.auth import auth_required, authed_request
from stockroom.interfaces.http.dto.products import ProductDTO, ProductRequestDTO
from stockroom.shared.errors.validation import raise_validation_error
from stockroom.shared.logging import logger


def _payload() -> dict[str, Any]:
    if request.form:
        # multipart forms send empty strings for untouched inputs
        return {key: value for key, value in request.form.items() if value != ""}
    return request.get_json(silent=True) or {}


def _parse_product() -> ProductRequestDTO:
    try:
        return ProductRequestDTO.model_validate(_payload())
    except ValidationError as exc:
        raise_validation_error(exc)


def _image_upload() -> ImageUpload | None:
    file = request.files.get("image")
    if file is None or not file.filename:
        return None
    return ImageUpload(
        filename=file.filename,
        content_type=file.mimetype or "application/octet-stream",
        data=file.read(),
    )


def _dump(dto: ProductDTO) -> dict[str, Any]:
    return dto.model_dump(mode="json", by_alias=True)


class ProductsController:
    def __init__(
        self,
        *,
        session_tokens: SessionTokenService,
        create_use_case: CreateProductUseCase,
        list_use_case: ListProductsUseCase,
        get_use_case: GetProductUseCase,
        update_use_case: UpdateProductUseCase,
        delete_use_case: DeleteProductUseCase,
    ) -> None:
        self.session_tokens = session_tokens
        self._create_use_case = create_use_case
        self._list_use_case = list_use_case
        self._get_use_case = get_use_case
        self._update_use_case = update_use_case
        self._delete_use_case = delete_use_case

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("products", __name__, url_prefix="/api/products")
        bp.add_url_rule("", view_func=self.create, methods=["POST"])
        bp.add_url_rule("", view_func=self.list_products, methods=["GET"])
        bp.add_url_rule("/<int:product_id>", view_func=self.get, methods=["GET"])
        bp.add_url_rule("/<int:product_id>", view_func=self.update, methods=["PATCH"])
        bp.add_url_rule("/<int:product_id>", view_func=self.delete, methods=["DELETE"])
        return bp

    @auth_required
    def create(self) -> tuple[Response, int]:
        user_id = authed_request().user_id
        dto = _parse_product()
        product = self._create_use_case.execute(
            user_id,
            name=dto.name,
            category=dto.category,
            quantity=dto.quantity,
            price=dto.price,
            sku=dto.sku,
            description=dto.description,
            image=_image_upload(),
        )
        return jsonify(_dump(ProductDTO.from_product(product))), 201

    @auth_required
    def list_products(self) -> tuple[Response, int]:
        t0 = perf_counter()
        user_id = authed_request().user_id
        items = self._list_use_case.execute(user_id)
        dt = (perf_counter() - t0) * 1000
        logger.info(f"products.list: ok (user_id={user_id}, n={len(items)}, dt_ms={dt:.0f})")
        return jsonify([_dump(ProductDTO.from_product(item)) for item in items]), 200

    @auth_required
    def get(self, product_id: int) -> tuple[Response, int]:
        product = self._get_use_case.execute(product_id, authed_request().user_id)
        return jsonify(_dump(ProductDTO.from_product(product))), 200

    @auth_required
    def update(self, product_id: int) -> tuple[Response, int]:
        dto = _parse_product()
        product = self._update_use_case.execute(
            product_id,
            authed_request().user_id,
            name=dto.name,
            category=dto.category,
            quantity=dto.quantity,
            price=dto.price,
            description=dto.description,
            image=_image_upload(),
        )
        return jsonify(_dump(ProductDTO.from_product(product))), 200

    @auth_required
    def delete(self, product_id: int) -> tuple[Response, int]:
        self._delete_use_case.execute(product_id, authed_request().user_id)
        return jsonify({"id": product_id, "message": "Product removed"}), 200
