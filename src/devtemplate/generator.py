# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Pipeline facade: catalog lookup, parse, merge, and render."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .catalog import FragmentCatalog, default_catalog
from .errors import UnknownLanguageError
from .fragments import CompanionFile, parse
from .merge import MergedDocument, merge
from .render import RenderOptions, render

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LanguageSelection:
    """Normalised language identifiers together with the duplicates dropped from them."""

    languages: tuple[str, ...]
    duplicates: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class GeneratedEnvironment:
    """Result of a successful generation run.

    Attributes:
        languages: Selected languages in selection order.
        document: Merged document that was rendered.
        text: Rendered descriptor text.
        files: Companion files to write next to the descriptor.
    """

    languages: tuple[str, ...]
    document: MergedDocument
    text: str
    files: tuple[CompanionFile, ...] = ()

    @property
    def is_multi_language(self) -> bool:
        """Return ``True`` when more than one language was merged."""

        return self.document.is_multi_language


def split_languages(raw_ids: Iterable[str]) -> LanguageSelection:
    """Split comma-separated arguments into an ordered, duplicate-free selection.

    Whitespace around each item is trimmed and empty items are dropped, so
    ``["rust, go", "go"]`` selects ``("rust", "go")`` and reports ``go`` as a
    duplicate.
    """

    languages: list[str] = []
    duplicates: list[str] = []
    for argument in raw_ids:
        for item in argument.split(","):
            language = item.strip()
            if not language:
                continue
            if language in languages:
                duplicates.append(language)
                continue
            languages.append(language)
    return LanguageSelection(languages=tuple(languages), duplicates=tuple(duplicates))


def resolve_languages(raw_ids: Iterable[str], catalog: FragmentCatalog | None = None) -> tuple[str, ...]:
    """Return the normalised selection after checking every id against the catalog.

    Args:
        raw_ids: Language identifiers, optionally comma-separated.
        catalog: Catalog to validate against; the embedded catalog by default.

    Returns:
        tuple[str, ...]: Known language identifiers in selection order.

    Raises:
        UnknownLanguageError: If an identifier is not part of the catalog.
        ValueError: If no identifier remains after normalisation.
    """

    active = catalog if catalog is not None else default_catalog()
    selection = split_languages(raw_ids)
    if not selection.languages:
        raise ValueError("no templates selected")
    for language in selection.languages:
        if language not in active:
            raise UnknownLanguageError(language)
    return selection.languages


def generate(
    ids: Iterable[str],
    *,
    catalog: FragmentCatalog | None = None,
    options: RenderOptions | None = None,
) -> GeneratedEnvironment:
    """Merge and render the fragments selected by ``ids``.

    Every identifier is validated before any parsing or merging happens, so an
    unknown language never yields partial work.

    Args:
        ids: Language identifiers in selection order, optionally comma-separated.
        catalog: Catalog providing the fragments; the embedded catalog by default.
        options: Rendering options forwarded to :func:`devtemplate.render.render`.

    Returns:
        GeneratedEnvironment: Merged document, descriptor text, and companion files.

    Raises:
        UnknownLanguageError: If an identifier is not part of the catalog.
        MalformedFragmentError: If a selected fragment cannot be parsed.
        MergeConflictError: If two selected fragments disagree.
    """

    active = catalog if catalog is not None else default_catalog()
    languages = resolve_languages(ids, active)
    fragments = [parse(active.get(language)) for language in languages]
    document = merge(fragments, languages)
    text = render(document, options)
    LOGGER.debug("generated languages=%s bytes=%d", ",".join(languages), len(text))
    return GeneratedEnvironment(languages=languages, document=document, text=text, files=document.files)


__all__ = [
    "GeneratedEnvironment",
    "LanguageSelection",
    "generate",
    "resolve_languages",
    "split_languages",
]
