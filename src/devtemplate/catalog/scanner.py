# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Filesystem scanning utilities for the fragment catalog."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True)
class CatalogScanner:
    """Locate fragment documents beneath the catalog data directory."""

    catalog_root: Path

    def fragment_documents(self) -> tuple[Path, ...]:
        """Return sorted fragment document paths.

        Files whose name starts with ``_`` are reserved for drafts and skipped.

        Returns:
            tuple[Path, ...]: Fragment JSON documents in lexicographic order.
        """
        if not self.catalog_root.is_dir():
            return ()
        paths = [
            path
            for path in self.catalog_root.glob("*.json")
            if path.is_file() and not path.name.startswith("_")
        ]
        return tuple(sorted(paths))


__all__ = ["CatalogScanner"]
