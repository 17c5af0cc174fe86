# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Loader that validates and materialises fragment catalog documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..errors import MalformedFragmentError
from .checksum import compute_catalog_checksum
from .io import load_document
from .models import RawFragment
from .scanner import CatalogScanner
from .schema import FragmentSchema
from .utils import expect_mapping, expect_string, freeze_json

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class FragmentCatalogLoader:
    """Read every fragment document beneath ``catalog_root``."""

    catalog_root: Path
    schema_root: Path | None = None
    _schema: FragmentSchema = field(init=False, repr=False)
    _scanner: CatalogScanner = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Compile the fragment schema and prepare the scanner."""

        self.schema_root = self.schema_root or (self.catalog_root.parent / "schema")
        self._schema = FragmentSchema.load(self.schema_root)
        self._scanner = CatalogScanner(self.catalog_root)

    def load_fragments(self) -> tuple[RawFragment, ...]:
        """Validate and freeze every fragment document.

        Returns:
            tuple[RawFragment, ...]: Fragments sorted by document name.

        Raises:
            MalformedFragmentError: If a document is invalid, its ``id`` differs from
                its filename, or two documents declare the same ``id``.
        """

        fragments: list[RawFragment] = []
        seen: dict[str, Path] = {}
        for path in self._scanner.fragment_documents():
            document = expect_mapping(load_document(path), key="<root>", context=str(path))
            self._schema.validate(document, source=path)
            language = expect_string(document.get("id"), key="id", context=str(path))
            if language != path.stem:
                raise MalformedFragmentError(f"{path}: id '{language}' does not match the filename")
            if language in seen:
                raise MalformedFragmentError(f"{path}: duplicate fragment id '{language}' (see {seen[language]})")
            seen[language] = path
            frozen = expect_mapping(freeze_json(document, context=str(path)), key="<root>", context=str(path))
            fragments.append(
                RawFragment(
                    language=language,
                    description=expect_string(document.get("description"), key="description", context=str(path)),
                    data=frozen,
                    source=path,
                ),
            )
        LOGGER.debug("loaded %d catalog fragments from %s", len(fragments), self.catalog_root)
        return tuple(fragments)

    def compute_checksum(self) -> str:
        """Return a checksum identifying the catalog documents on disk."""

        return compute_catalog_checksum(self.catalog_root, self._scanner.fragment_documents())


__all__ = ["FragmentCatalogLoader"]
