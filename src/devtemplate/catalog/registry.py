# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Immutable language -> fragment lookup table."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Final

from ..errors import MalformedFragmentError, UnknownLanguageError
from .loader import FragmentCatalogLoader
from .models import RawFragment

PACKAGE_ROOT: Final[Path] = Path(__file__).resolve().parent
DEFAULT_CATALOG_ROOT: Final[Path] = PACKAGE_ROOT / "data"
DEFAULT_SCHEMA_ROOT: Final[Path] = PACKAGE_ROOT / "schema"


class FragmentCatalog:
    """Read-only mapping from language identifier to its raw fragment.

    The table is frozen at construction, so one instance may be shared between
    concurrent callers.
    """

    __slots__ = ("_checksum", "_fragments")

    def __init__(self, fragments: Iterable[RawFragment], *, checksum: str = "") -> None:
        """Index ``fragments`` by language.

        Args:
            fragments: Catalog entries to expose.
            checksum: Digest identifying the catalog build.

        Raises:
            MalformedFragmentError: If two fragments share a language identifier.
        """

        table: dict[str, RawFragment] = {}
        for fragment in fragments:
            if fragment.language in table:
                raise MalformedFragmentError(f"duplicate fragment id '{fragment.language}'")
            table[fragment.language] = fragment
        self._fragments: Mapping[str, RawFragment] = MappingProxyType(dict(sorted(table.items())))
        self._checksum = checksum

    @property
    def checksum(self) -> str:
        """Return the digest identifying the catalog build."""

        return self._checksum

    def lookup(self, language: str) -> RawFragment | None:
        """Return the fragment registered for ``language`` or ``None``."""

        return self._fragments.get(language)

    def get(self, language: str) -> RawFragment:
        """Return the fragment registered for ``language``.

        Raises:
            UnknownLanguageError: If ``language`` is not part of the catalog.
        """

        fragment = self._fragments.get(language)
        if fragment is None:
            raise UnknownLanguageError(language)
        return fragment

    def list(self) -> tuple[str, ...]:
        """Return every supported language identifier in sorted order."""

        return tuple(self._fragments)

    def fragments(self) -> tuple[RawFragment, ...]:
        """Return every fragment ordered by language identifier."""

        return tuple(self._fragments.values())

    def __contains__(self, language: object) -> bool:
        return language in self._fragments

    def __iter__(self) -> Iterator[str]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)


def load_catalog(catalog_root: Path, *, schema_root: Path | None = None) -> FragmentCatalog:
    """Load and validate the fragment catalog stored under ``catalog_root``."""

    loader = FragmentCatalogLoader(catalog_root=catalog_root, schema_root=schema_root)
    return FragmentCatalog(loader.load_fragments(), checksum=loader.compute_checksum())


@lru_cache(maxsize=1)
def default_catalog() -> FragmentCatalog:
    """Return the catalog embedded in the package, loading it on first use."""

    return load_catalog(DEFAULT_CATALOG_ROOT, schema_root=DEFAULT_SCHEMA_ROOT)


__all__ = [
    "DEFAULT_CATALOG_ROOT",
    "DEFAULT_SCHEMA_ROOT",
    "FragmentCatalog",
    "default_catalog",
    "load_catalog",
]
