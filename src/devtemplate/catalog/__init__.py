# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Public export surface for the embedded fragment catalog."""

from __future__ import annotations

from typing import Final

from .loader import FragmentCatalogLoader
from .models import RawFragment
from .registry import (
    DEFAULT_CATALOG_ROOT,
    DEFAULT_SCHEMA_ROOT,
    FragmentCatalog,
    default_catalog,
    load_catalog,
)
from .types import FRAGMENT_SCHEMA_VERSION, JSONValue

__all__: Final[tuple[str, ...]] = (
    "DEFAULT_CATALOG_ROOT",
    "DEFAULT_SCHEMA_ROOT",
    "FRAGMENT_SCHEMA_VERSION",
    "FragmentCatalog",
    "FragmentCatalogLoader",
    "JSONValue",
    "RawFragment",
    "default_catalog",
    "load_catalog",
)
