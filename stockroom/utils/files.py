# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

_UNITS = ("Bytes", "KB", "MB", "GB", "TB", "PB")


def format_file_size(size: int, decimals: int = 2) -> str:
    if size <= 0:
        return "0 Bytes"
    index = 0
    value = float(size)
    while value >= 1000 and index < len(_UNITS) - 1:
        value /= 1000
        index += 1
    return f"{value:.{decimals}f} {_UNITS[index]}"


__all__ = ["format_file_size"]
