# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fold parsed fragments into a single :class:`MergedDocument`.

Fragments are folded strictly in selection order. Identical declarations are
collapsed; differing values for the same named entity abort the merge with a
:class:`~devtemplate.errors.MergeConflictError` subclass. No partial document is
ever returned.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from ..errors import (
    ConflictingEnvVarError,
    ConflictingFileError,
    ConflictingOverlayBindingError,
    ConflictingSourceError,
)
from ..fragments.models import (
    CompanionFile,
    ExternalSource,
    OverlayBinding,
    OverlayRef,
    ParsedFragment,
    Platform,
    SetupSnippet,
)
from .document import EnvAssignment, MergedDocument, PackageGrant, describe_languages

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _PackageState:
    language: str
    platforms: set[Platform] | None


@dataclass(slots=True)
class _MergeState:
    """Mutable accumulator owned by a single :func:`merge` call."""

    sources: dict[str, ExternalSource] = field(default_factory=dict)
    overlays: list[OverlayRef] = field(default_factory=list)
    bindings: dict[str, OverlayBinding] = field(default_factory=dict)
    packages: dict[str, _PackageState] = field(default_factory=dict)
    env: dict[str, EnvAssignment] = field(default_factory=dict)
    setup: list[SetupSnippet] = field(default_factory=list)
    files: dict[str, CompanionFile] = field(default_factory=dict)
    allow_unfree: bool = False

    def fold(self, fragment: ParsedFragment) -> None:
        """Merge every section of ``fragment`` into the accumulator."""

        for source in fragment.sources:
            self._add_source(source)
        for overlay in fragment.overlays:
            if overlay not in self.overlays:
                self.overlays.append(overlay)
        for binding in fragment.overlay_bindings:
            self._add_binding(binding)
        for entry in fragment.packages:
            self._add_package(entry.identifier, entry.platform, fragment.language)
        for variable in fragment.env:
            self._add_env(EnvAssignment(variable.name, variable.expression, fragment.language))
        if fragment.setup is not None:
            self.setup.append(fragment.setup)
        for companion in fragment.files:
            self._add_file(companion)
        self.allow_unfree = self.allow_unfree or fragment.allow_unfree

    def _add_source(self, source: ExternalSource) -> None:
        existing = self.sources.get(source.name)
        if existing is None:
            self.sources[source.name] = source
            return
        if existing.locator != source.locator:
            raise ConflictingSourceError(source.name, existing.locator, source.locator)
        follows = dict(existing.sub_overrides)
        for dependency, target in source.sub_overrides.items():
            current = follows.setdefault(dependency, target)
            if current != target:
                raise ConflictingSourceError(f"{source.name}.inputs.{dependency}", current, target)
        if len(follows) != len(existing.sub_overrides):
            self.sources[source.name] = ExternalSource(
                name=existing.name,
                locator=existing.locator,
                sub_overrides=MappingProxyType(follows),
            )

    def _add_binding(self, binding: OverlayBinding) -> None:
        existing = self.bindings.setdefault(binding.name, binding)
        if existing.expression != binding.expression:
            raise ConflictingOverlayBindingError(binding.name, existing.expression, binding.expression)

    def _add_package(self, identifier: str, platform: Platform | None, language: str) -> None:
        state = self.packages.get(identifier)
        if state is None:
            self.packages[identifier] = _PackageState(
                language=language,
                platforms=None if platform is None else {platform},
            )
        elif state.platforms is None:
            return
        elif platform is None:
            # The broader grant wins: conditional entries never narrow a universal one.
            state.platforms = None
        else:
            state.platforms.add(platform)

    def _add_env(self, assignment: EnvAssignment) -> None:
        existing = self.env.setdefault(assignment.name, assignment)
        if existing.expression != assignment.expression:
            raise ConflictingEnvVarError(assignment.name, existing.expression, assignment.expression)

    def _add_file(self, companion: CompanionFile) -> None:
        existing = self.files.setdefault(companion.name, companion)
        if existing.content != companion.content:
            raise ConflictingFileError(companion.name, existing.content, companion.content)

    def finish(self, languages: tuple[str, ...], description: str) -> MergedDocument:
        """Freeze the accumulator into a :class:`MergedDocument`."""

        return MergedDocument(
            languages=languages,
            description=description,
            sources=tuple(self.sources.values()),
            overlays=tuple(self.overlays),
            overlay_bindings=tuple(self.bindings.values()),
            packages=tuple(
                PackageGrant(
                    identifier=identifier,
                    language=state.language,
                    platforms=None if state.platforms is None else frozenset(state.platforms),
                )
                for identifier, state in self.packages.items()
            ),
            env=tuple(self.env.values()),
            setup=tuple(self.setup),
            allow_unfree=self.allow_unfree,
            files=tuple(self.files.values()),
        )


def merge(fragments: Sequence[ParsedFragment], ids: Sequence[str]) -> MergedDocument:
    """Merge ``fragments`` in the order given by ``ids``.

    Args:
        fragments: Parsed fragments, one per entry of ``ids``.
        ids: Selected language identifiers in selection order. Repeated
            identifiers are ignored after their first occurrence.

    Returns:
        MergedDocument: Union of every selected fragment.

    Raises:
        ValueError: If nothing was selected or ``fragments`` does not line up with ``ids``.
        ConflictingSourceError: If two fragments declare one input with different locators
            or different ``follows`` targets.
        ConflictingOverlayBindingError: If two fragments define one overlay attribute differently.
        ConflictingEnvVarError: If two fragments assign one variable different expressions.
        ConflictingFileError: If two fragments ship different companion files of the same name.
    """

    if not ids:
        raise ValueError("no languages selected for merging")
    if len(fragments) != len(ids):
        raise ValueError(f"expected {len(ids)} fragments, received {len(fragments)}")
    for language, fragment in zip(ids, fragments, strict=True):
        if fragment.language != language:
            raise ValueError(f"fragment '{fragment.language}' supplied for language '{language}'")

    selected: dict[str, ParsedFragment] = {}
    for fragment in fragments:
        if fragment.language in selected:
            LOGGER.debug("ignoring repeated language=%s", fragment.language)
            continue
        selected[fragment.language] = fragment

    state = _MergeState()
    for fragment in selected.values():
        LOGGER.debug("folding language=%s", fragment.language)
        state.fold(fragment)

    languages = tuple(selected)
    if len(languages) == 1:
        description = selected[languages[0]].description
    else:
        description = describe_languages(languages)
    return state.finish(languages, description)


__all__ = ["merge"]
