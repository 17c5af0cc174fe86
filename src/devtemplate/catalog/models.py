# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Raw catalog entry model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .types import JSONValue


@dataclass(frozen=True, slots=True)
class RawFragment:
    """Schema-validated, frozen catalog document for one language.

    Attributes:
        language: Catalog identifier, identical to the document stem.
        description: Native single-language description of the environment.
        data: Frozen JSON payload holding the fragment's sections.
        source: Catalog document the fragment was read from.
    """

    language: str
    description: str
    data: Mapping[str, JSONValue]
    source: Path

    def section(self, key: str) -> JSONValue | None:
        """Return the raw section stored under ``key`` when present."""

        return self.data.get(key)


__all__ = ["RawFragment"]
