# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared type aliases and constants for the fragment catalog."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final, TypeAlias

JSONPrimitive: TypeAlias = str | int | float | bool | None
JSONValue: TypeAlias = JSONPrimitive | Sequence["JSONValue"] | Mapping[str, "JSONValue"]

FRAGMENT_SCHEMA_VERSION: Final[str] = "1.0.0"
FRAGMENT_SCHEMA_FILENAME: Final[str] = "fragment.schema.json"

__all__ = [
    "FRAGMENT_SCHEMA_FILENAME",
    "FRAGMENT_SCHEMA_VERSION",
    "JSONPrimitive",
    "JSONValue",
]
