# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Image storage adapter."""

from __future__ import annotations

import secrets
from pathlib import Path

from werkzeug.utils import secure_filename

from stockroom.domain.products.repositories import ImageStore, StoredImage
from stockroom.shared.logging import logger


class LocalImageStorage(ImageStore):
    """Stores uploaded images on the local filesystem within configured root."""

    def __init__(self, root: Path, base_url: str) -> None:
        self._root = root
        self._base_url = base_url.rstrip("/")
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, public_id: str) -> Path:
        path = (self._root / public_id).resolve()
        if not path.is_relative_to(self._root.resolve()):
            msg = "Attempted directory traversal outside storage root"
            raise ValueError(msg)
        return path

    def upload(self, filename: str, data: bytes, content_type: str) -> StoredImage:
        suffix = Path(secure_filename(filename)).suffix.lower()
        public_id = f"{secrets.token_hex(12)}{suffix}"
        file_path = self._resolve(public_id)
        file_path.write_bytes(data)
        logger.debug(f"storage: write path={file_path} size={len(data)} type={content_type}")
        return StoredImage(public_id=public_id, url=f"{self._base_url}/{public_id}")

    def delete(self, public_id: str) -> None:
        file_path = self._resolve(public_id)
        file_path.unlink(missing_ok=True)
        logger.debug(f"storage: delete path={file_path}")


__all__ = ["LocalImageStorage"]
