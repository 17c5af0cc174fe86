# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Merged environment document handed from the merge engine to the renderer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from ..fragments.models import (
    CompanionFile,
    ExternalSource,
    OverlayBinding,
    OverlayRef,
    Platform,
    SetupSnippet,
)

MULTI_LANGUAGE_DESCRIPTION: Final[str] = "Multi-language development environment ({languages})"


@dataclass(frozen=True, slots=True)
class PackageGrant:
    """Package present in the merged shell.

    Attributes:
        identifier: Package attribute path relative to ``pkgs``.
        language: First selected language that requested the package.
        platforms: Platforms the package is restricted to, or ``None`` when it is
            available on every system.
    """

    identifier: str
    language: str
    platforms: frozenset[Platform] | None = None

    @property
    def universal(self) -> bool:
        """Return ``True`` when the package is not platform-conditional."""

        return self.platforms is None


@dataclass(frozen=True, slots=True)
class EnvAssignment:
    """Environment variable in the merged shell with its contributing language."""

    name: str
    expression: str
    language: str


@dataclass(frozen=True, slots=True)
class MergedDocument:
    """Union of the selected fragments, in selection order."""

    languages: tuple[str, ...]
    description: str
    sources: tuple[ExternalSource, ...] = ()
    overlays: tuple[OverlayRef, ...] = ()
    overlay_bindings: tuple[OverlayBinding, ...] = ()
    packages: tuple[PackageGrant, ...] = ()
    env: tuple[EnvAssignment, ...] = ()
    setup: tuple[SetupSnippet, ...] = ()
    allow_unfree: bool = False
    files: tuple[CompanionFile, ...] = ()

    @property
    def is_multi_language(self) -> bool:
        """Return ``True`` when more than one language was merged."""

        return len(self.languages) > 1

    @property
    def env_map(self) -> Mapping[str, str]:
        """Return environment expressions keyed by variable name."""

        return MappingProxyType({assignment.name: assignment.expression for assignment in self.env})

    def package_identifiers(self) -> frozenset[str]:
        """Return every package identifier regardless of platform."""

        return frozenset(grant.identifier for grant in self.packages)

    def universal_packages(self) -> tuple[PackageGrant, ...]:
        """Return packages available on every system, in fold order."""

        return tuple(grant for grant in self.packages if grant.universal)

    def platform_packages(self, platform: Platform) -> tuple[PackageGrant, ...]:
        """Return packages restricted to a set of platforms that includes ``platform``."""

        return tuple(
            grant for grant in self.packages if grant.platforms is not None and platform in grant.platforms
        )


def describe_languages(languages: tuple[str, ...]) -> str:
    """Return the synthesized description for a multi-language selection."""

    return MULTI_LANGUAGE_DESCRIPTION.format(languages=", ".join(languages))


__all__ = [
    "MULTI_LANGUAGE_DESCRIPTION",
    "EnvAssignment",
    "MergedDocument",
    "PackageGrant",
    "describe_languages",
]
