# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Domain entities and ports of the inventory backend."""

from .ownership import Owned, verify_ownership
from .products.entities import Product, ProductImage
from .users.entities import ResetToken, SessionCredential, User

__all__ = [
    "Owned",
    "Product",
    "ProductImage",
    "ResetToken",
    "SessionCredential",
    "User",
    "verify_ownership",
]
