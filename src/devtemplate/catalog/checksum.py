# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Checksum utilities for catalog contents."""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from pathlib import Path


def compute_catalog_checksum(catalog_root: Path, paths: Sequence[Path]) -> str:
    """Return a SHA-256 digest covering the relative name and bytes of ``paths``.

    Args:
        catalog_root: Directory the document paths are made relative to.
        paths: Catalog documents contributing to the digest, in a stable order.

    Returns:
        str: Hex-encoded checksum identifying the embedded catalog build.
    """
    hasher = hashlib.sha256()
    for path in paths:
        hasher.update(path.relative_to(catalog_root).as_posix().encode("utf-8"))
        hasher.update(b"\0")
        hasher.update(path.read_bytes())
    return hasher.hexdigest()


__all__ = ["compute_catalog_checksum"]
