# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from stockroom.shared.errors.base import StoreError


class ImageUploadError(StoreError):
    default_code = "image_upload_failed"
    default_message = "Image could not be uploaded"
