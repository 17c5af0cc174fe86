# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Convert raw catalog fragments into :class:`ParsedFragment` instances."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Final

from ..catalog.models import RawFragment
from ..catalog.types import JSONValue
from ..catalog.utils import (
    expect_mapping,
    expect_string,
    optional_bool,
    optional_string,
    string_array,
    string_mapping,
)
from ..errors import MalformedFragmentError
from .models import (
    DEFAULT_TRANSFORM,
    PRIMARY_INPUT,
    CompanionFile,
    EnvVar,
    ExternalSource,
    OverlayBinding,
    OverlayRef,
    PackageEntry,
    ParsedFragment,
    Platform,
    SetupSnippet,
)

LOGGER = logging.getLogger(__name__)

PACKAGE_IDENTIFIER: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_][A-Za-z0-9_'+.-]*$")
NIX_IDENTIFIER: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z_][A-Za-z0-9_'-]*$")

INPUTS_KEY: Final[str] = "inputs"
OVERLAYS_KEY: Final[str] = "overlays"
OVERLAY_BINDINGS_KEY: Final[str] = "overlayBindings"
PACKAGES_KEY: Final[str] = "packages"
PLATFORM_PACKAGES_KEY: Final[str] = "platformPackages"
ENV_KEY: Final[str] = "env"
SHELL_HOOK_KEY: Final[str] = "shellHook"
ALLOW_UNFREE_KEY: Final[str] = "allowUnfree"
FILES_KEY: Final[str] = "files"


def parse(raw: RawFragment) -> ParsedFragment:
    """Split ``raw`` into its structural sections.

    Args:
        raw: Catalog entry to parse.

    Returns:
        ParsedFragment: Structured, immutable fragment.

    Raises:
        MalformedFragmentError: If a section violates the fragment invariants.
    """

    context = f"{raw.language} ({raw.source})"
    sources = _parse_sources(raw.section(INPUTS_KEY), context=context)
    declared = {source.name for source in sources}
    if PRIMARY_INPUT not in declared:
        raise MalformedFragmentError(f"{context}: the '{PRIMARY_INPUT}' input must be declared")
    fragment = ParsedFragment(
        language=raw.language,
        description=raw.description,
        sources=sources,
        overlays=_parse_overlays(raw.section(OVERLAYS_KEY), declared=declared, context=context),
        overlay_bindings=_parse_overlay_bindings(raw.section(OVERLAY_BINDINGS_KEY), context=context),
        packages=_parse_packages(
            raw.section(PACKAGES_KEY),
            raw.section(PLATFORM_PACKAGES_KEY),
            context=context,
        ),
        env=_parse_env(raw.section(ENV_KEY), context=context),
        setup=_parse_setup(raw.language, raw.section(SHELL_HOOK_KEY), context=context),
        allow_unfree=optional_bool(raw.section(ALLOW_UNFREE_KEY), key=ALLOW_UNFREE_KEY, context=context),
        files=_parse_files(raw.section(FILES_KEY), context=context),
    )
    LOGGER.debug(
        "parsed fragment language=%s sources=%d packages=%d env=%d",
        fragment.language,
        len(fragment.sources),
        len(fragment.packages),
        len(fragment.env),
    )
    return fragment


def _entries(value: JSONValue | None, *, key: str, context: str) -> tuple[Mapping[str, JSONValue], ...]:
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)):
        raise MalformedFragmentError(f"{context}: expected '{key}' to be an array")
    return tuple(expect_mapping(item, key=f"{key}[{index}]", context=context) for index, item in enumerate(value))


def _parse_sources(value: JSONValue | None, *, context: str) -> tuple[ExternalSource, ...]:
    sources: list[ExternalSource] = []
    seen: set[str] = set()
    for entry in _entries(value, key=INPUTS_KEY, context=context):
        name = expect_string(entry.get("name"), key="inputs.name", context=context).strip()
        if not NIX_IDENTIFIER.match(name):
            raise MalformedFragmentError(f"{context}: invalid input name '{name}'")
        if name in seen:
            raise MalformedFragmentError(f"{context}: input '{name}' declared twice")
        seen.add(name)
        locator = expect_string(entry.get("url"), key=f"inputs.{name}.url", context=context).strip()
        if not locator:
            raise MalformedFragmentError(f"{context}: input '{name}' has an empty url")
        follows = string_mapping(entry.get("follows"), key=f"inputs.{name}.follows", context=context)
        sources.append(ExternalSource(name=name, locator=locator, sub_overrides=MappingProxyType(follows)))
    for source in sources:
        for dependency, target in source.sub_overrides.items():
            if target not in seen:
                raise MalformedFragmentError(
                    f"{context}: input '{source.name}' follows undeclared input '{target}' for '{dependency}'",
                )
    return tuple(sources)


def _parse_overlays(value: JSONValue | None, *, declared: set[str], context: str) -> tuple[OverlayRef, ...]:
    overlays: list[OverlayRef] = []
    for entry in _entries(value, key=OVERLAYS_KEY, context=context):
        source = expect_string(entry.get("source"), key="overlays.source", context=context).strip()
        transform = optional_string(entry.get("transform"), key="overlays.transform", context=context)
        if source not in declared:
            raise MalformedFragmentError(f"{context}: overlay references undeclared input '{source}'")
        overlay = OverlayRef(source=source, transform=(transform or DEFAULT_TRANSFORM).strip())
        if overlay not in overlays:
            overlays.append(overlay)
    return tuple(overlays)


def _parse_overlay_bindings(value: JSONValue | None, *, context: str) -> tuple[OverlayBinding, ...]:
    bindings: dict[str, OverlayBinding] = {}
    for entry in _entries(value, key=OVERLAY_BINDINGS_KEY, context=context):
        name = expect_string(entry.get("name"), key="overlayBindings.name", context=context).strip()
        expression = expect_string(entry.get("expression"), key=f"overlayBindings.{name}", context=context).strip()
        if not name or not expression:
            raise MalformedFragmentError(f"{context}: overlay bindings need a name and an expression")
        if name in bindings:
            raise MalformedFragmentError(f"{context}: overlay attribute '{name}' defined twice")
        bindings[name] = OverlayBinding(name=name, expression=expression)
    return tuple(bindings.values())


def _normalize_package(raw: str, *, context: str) -> str:
    identifier = raw.strip()
    if not PACKAGE_IDENTIFIER.match(identifier):
        raise MalformedFragmentError(f"{context}: invalid package identifier {raw!r}")
    return identifier


def _parse_packages(
    universal: JSONValue | None,
    conditional: JSONValue | None,
    *,
    context: str,
) -> tuple[PackageEntry, ...]:
    entries: dict[tuple[str, Platform | None], PackageEntry] = {}
    unconditioned: set[str] = set()
    for raw in string_array(universal, key=PACKAGES_KEY, context=context):
        identifier = _normalize_package(raw, context=context)
        unconditioned.add(identifier)
        entries.setdefault((identifier, None), PackageEntry(identifier=identifier))
    if conditional is not None:
        by_platform = expect_mapping(conditional, key=PLATFORM_PACKAGES_KEY, context=context)
        for marker, items in by_platform.items():
            try:
                platform = Platform(marker)
            except ValueError as exc:
                raise MalformedFragmentError(f"{context}: unknown platform condition '{marker}'") from exc
            for raw in string_array(items, key=f"{PLATFORM_PACKAGES_KEY}.{marker}", context=context):
                identifier = _normalize_package(raw, context=context)
                # An unconditioned entry already grants the package everywhere.
                if identifier in unconditioned:
                    continue
                entries.setdefault((identifier, platform), PackageEntry(identifier=identifier, platform=platform))
    return tuple(entries.values())


def _parse_env(value: JSONValue | None, *, context: str) -> tuple[EnvVar, ...]:
    variables: list[EnvVar] = []
    for name, expression in string_mapping(value, key=ENV_KEY, context=context).items():
        if not NIX_IDENTIFIER.match(name):
            raise MalformedFragmentError(f"{context}: invalid environment variable name '{name}'")
        if not expression.strip():
            raise MalformedFragmentError(f"{context}: environment variable '{name}' has no expression")
        variables.append(EnvVar(name=name, expression=expression.strip()))
    return tuple(variables)


def _parse_setup(language: str, value: JSONValue | None, *, context: str) -> SetupSnippet | None:
    text = optional_string(value, key=SHELL_HOOK_KEY, context=context)
    if text is None or not text.strip():
        return None
    return SetupSnippet(language=language, text=text.strip("\n").rstrip())


def _parse_files(value: JSONValue | None, *, context: str) -> tuple[CompanionFile, ...]:
    files: list[CompanionFile] = []
    for name, content in string_mapping(value, key=FILES_KEY, context=context).items():
        path = PurePosixPath(name)
        if not name or path.is_absolute() or ".." in path.parts:
            raise MalformedFragmentError(f"{context}: companion file '{name}' must be a relative path")
        files.append(CompanionFile(name=path.as_posix(), content=content))
    return tuple(files)


__all__ = ["PACKAGE_IDENTIFIER", "parse"]
