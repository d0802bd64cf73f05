# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.products.entities import ProductImage
from stockroom.domain.products.exceptions import ImageUploadError
from stockroom.domain.products.repositories import ImageStore
from stockroom.shared.logging import logger
from stockroom.utils.files import format_file_size


@dataclass(slots=True, frozen=True)
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


def store_image(images: ImageStore, upload: ImageUpload) -> ProductImage:
    try:
        stored = images.upload(upload.filename, upload.data, upload.content_type)
    except Exception as exc:
        logger.exception(f"products.image: upload failed (name={upload.filename!r})")
        raise ImageUploadError() from exc
    return ProductImage(
        file_name=upload.filename,
        file_path=stored.url,
        file_type=upload.content_type,
        file_size=format_file_size(len(upload.data), 2),
        public_id=stored.public_id,
    )


def discard_image(images: ImageStore, image: ProductImage | None) -> None:
    """Best-effort removal; a failure is logged and never propagated."""

    if image is None:
        return
    try:
        images.delete(image.public_id)
    except Exception:
        logger.opt(exception=True).warning(
            f"products.image: delete failed (public_id={image.public_id})"
        )
