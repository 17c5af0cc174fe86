# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Structured representation of a parsed language fragment."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final


class Platform(str, Enum):
    """Platform conditions a package entry may be restricted to."""

    LINUX = "linux"
    DARWIN = "darwin"

    @property
    def predicate(self) -> str:
        """Return the Nix expression testing for the platform."""

        return _PLATFORM_PREDICATES[self]


_PLATFORM_PREDICATES: Final[dict[Platform, str]] = {
    Platform.LINUX: "pkgs.stdenv.isLinux",
    Platform.DARWIN: "pkgs.stdenv.isDarwin",
}

DEFAULT_TRANSFORM: Final[str] = "default"
PRIMARY_INPUT: Final[str] = "nixpkgs"


@dataclass(frozen=True, slots=True)
class ExternalSource:
    """Flake input declared by a fragment.

    Attributes:
        name: Input attribute name, e.g. ``rust-overlay``.
        locator: Flake reference URL.
        sub_overrides: ``follows`` relations mapping an input of this source to the
            top-level input it should reuse.
    """

    name: str
    locator: str
    sub_overrides: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class OverlayRef:
    """Reference to an overlay exposed by an external source."""

    source: str
    transform: str = DEFAULT_TRANSFORM

    @property
    def expression(self) -> str:
        """Return the Nix attribute path selecting the overlay."""

        return f"{self.source}.overlays.{self.transform}"


@dataclass(frozen=True, slots=True)
class OverlayBinding:
    """Attribute defined in the flake's own ``overlays.default``."""

    name: str
    expression: str


@dataclass(frozen=True, slots=True)
class PackageEntry:
    """Package attribute requested by a fragment.

    ``platform`` is ``None`` when the package is wanted on every system.
    """

    identifier: str
    platform: Platform | None = None


@dataclass(frozen=True, slots=True)
class EnvVar:
    """Environment variable exported by the development shell."""

    name: str
    expression: str


@dataclass(frozen=True, slots=True)
class SetupSnippet:
    """Shell hook text contributed by one language."""

    language: str
    text: str


@dataclass(frozen=True, slots=True)
class CompanionFile:
    """Auxiliary file written next to the descriptor, e.g. ``rust-toolchain.toml``."""

    name: str
    content: str


@dataclass(frozen=True, slots=True)
class ParsedFragment:
    """Immutable structured view of one catalog fragment."""

    language: str
    description: str
    sources: tuple[ExternalSource, ...] = ()
    overlays: tuple[OverlayRef, ...] = ()
    overlay_bindings: tuple[OverlayBinding, ...] = ()
    packages: tuple[PackageEntry, ...] = ()
    env: tuple[EnvVar, ...] = ()
    setup: SetupSnippet | None = None
    allow_unfree: bool = False
    files: tuple[CompanionFile, ...] = ()

    @property
    def env_map(self) -> Mapping[str, str]:
        """Return environment expressions keyed by variable name."""

        return MappingProxyType({var.name: var.expression for var in self.env})


__all__ = [
    "DEFAULT_TRANSFORM",
    "PRIMARY_INPUT",
    "CompanionFile",
    "EnvVar",
    "ExternalSource",
    "OverlayBinding",
    "OverlayRef",
    "PackageEntry",
    "ParsedFragment",
    "Platform",
    "SetupSnippet",
]
