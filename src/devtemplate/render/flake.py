# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Render a :class:`MergedDocument` as a ``flake.nix`` document.

Rendering is a pure function of its inputs: every collection is emitted in the
order the merge engine folded it, so the same selection always yields
byte-identical output. Single-language documents keep the fragment's own
layout; multi-language documents annotate packages, environment variables, and
shell hooks with the language that contributed them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from ..fragments.models import PRIMARY_INPUT, Platform
from ..merge.document import EnvAssignment, MergedDocument, PackageGrant
from .nix import NixWriter, indented, quote

DEFAULT_SYSTEMS: Final[tuple[str, ...]] = (
    "x86_64-linux",
    "aarch64-linux",
    "x86_64-darwin",
    "aarch64-darwin",
)
LOCAL_OVERLAY: Final[str] = "self.overlays.default"


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Presentation settings for the rendered descriptor.

    Attributes:
        supported_systems: Systems exposed through ``forEachSupportedSystem``.
        provenance_comments: Whether multi-language documents group packages and
            environment variables under ``# <language>`` comments.
    """

    supported_systems: tuple[str, ...] = DEFAULT_SYSTEMS
    provenance_comments: bool = True


def render(doc: MergedDocument, options: RenderOptions | None = None) -> str:
    """Return the ``flake.nix`` text for ``doc``.

    Args:
        doc: Merged document produced by :func:`devtemplate.merge.merge`.
        options: Presentation settings; defaults are used when omitted.

    Returns:
        str: Complete descriptor text terminated by a newline.

    Raises:
        ValueError: If ``options`` lists no supported systems.
    """

    settings = options or RenderOptions()
    if not settings.supported_systems:
        raise ValueError("at least one supported system is required")
    annotate = doc.is_multi_language and settings.provenance_comments
    writer = NixWriter()
    writer.emit(0, "{")
    writer.emit(1, f"description = {quote(doc.description)};")
    writer.emit()
    _render_inputs(writer, doc)
    writer.emit()
    _render_outputs_header(writer, doc, settings)
    writer.emit(2, "{")
    if doc.overlay_bindings:
        writer.emit(3, "overlays.default = final: prev: {")
        for binding in doc.overlay_bindings:
            writer.binding(4, binding.name, binding.expression)
        writer.emit(3, "};")
        writer.emit()
    writer.emit(3, "devShells = forEachSupportedSystem (")
    writer.emit(4, "{ pkgs }:")
    writer.emit(4, "{")
    writer.emit(5, "default = pkgs.mkShell {")
    _render_packages(writer, doc, annotate=annotate)
    if doc.env:
        writer.emit()
        _render_env(writer, doc, annotate=annotate)
    if doc.setup:
        writer.emit()
        _render_shell_hook(writer, doc)
    writer.emit(5, "};")
    writer.emit(4, "}")
    writer.emit(3, ");")
    writer.emit(2, "};")
    writer.emit(0, "}")
    return writer.text()


def _render_inputs(writer: NixWriter, doc: MergedDocument) -> None:
    writer.emit(1, "inputs = {")
    for source in doc.sources:
        if not source.sub_overrides:
            writer.emit(2, f"{source.name}.url = {quote(source.locator)};")
            continue
        writer.emit(2, f"{source.name} = {{")
        writer.emit(3, f"url = {quote(source.locator)};")
        for dependency, target in source.sub_overrides.items():
            writer.emit(3, f"inputs.{dependency}.follows = {quote(target)};")
        writer.emit(2, "};")
    writer.emit(1, "};")


def _render_outputs_header(writer: NixWriter, doc: MergedDocument, settings: RenderOptions) -> None:
    writer.emit(1, "outputs =")
    writer.emit(2, "{")
    writer.emit(3, "self,")
    writer.emit(3, f"{PRIMARY_INPUT},")
    for source in doc.sources:
        if source.name != PRIMARY_INPUT:
            writer.emit(3, f"{source.name},")
    writer.emit(2, "}:")
    writer.emit(2, "let")
    writer.emit(3, "supportedSystems = [")
    for system in settings.supported_systems:
        writer.emit(4, quote(system))
    writer.emit(3, "];")
    writer.emit(3, "forEachSupportedSystem =")
    writer.emit(4, "f:")
    writer.emit(4, f"{PRIMARY_INPUT}.lib.genAttrs supportedSystems (")
    writer.emit(5, "system:")
    writer.emit(5, "f {")
    overlays = [overlay.expression for overlay in doc.overlays]
    if doc.overlay_bindings:
        overlays.append(LOCAL_OVERLAY)
    if not overlays and not doc.allow_unfree:
        writer.emit(6, f"pkgs = import {PRIMARY_INPUT} {{ inherit system; }};")
    else:
        writer.emit(6, f"pkgs = import {PRIMARY_INPUT} {{")
        writer.emit(7, "inherit system;")
        if doc.allow_unfree:
            writer.emit(7, "config.allowUnfree = true;")
        if overlays:
            writer.emit(7, "overlays = [")
            for overlay in overlays:
                writer.emit(8, overlay)
            writer.emit(7, "];")
        writer.emit(6, "};")
    writer.emit(5, "}")
    writer.emit(4, ");")
    writer.emit(2, "in")


def _grouped(doc: MergedDocument, items: Sequence[PackageGrant] | Sequence[EnvAssignment]) -> list[tuple[str, list]]:
    groups: list[tuple[str, list]] = []
    for language in doc.languages:
        members = [item for item in items if item.language == language]
        if members:
            groups.append((language, members))
    return groups


def _emit_package_items(
    writer: NixWriter,
    depth: int,
    doc: MergedDocument,
    grants: Sequence[PackageGrant],
    *,
    annotate: bool,
) -> None:
    if not annotate:
        for grant in grants:
            writer.emit(depth, grant.identifier)
        return
    for language, members in _grouped(doc, grants):
        writer.emit(depth, f"# {language}")
        for grant in members:
            writer.emit(depth, grant.identifier)


def _render_packages(writer: NixWriter, doc: MergedDocument, *, annotate: bool) -> None:
    universal = doc.universal_packages()
    conditional = [(platform, doc.platform_packages(platform)) for platform in Platform]
    conditional = [(platform, grants) for platform, grants in conditional if grants]
    if not conditional:
        writer.emit(6, "packages = with pkgs; [")
        _emit_package_items(writer, 7, doc, universal, annotate=annotate)
        writer.emit(6, "];")
        return
    writer.emit(6, "packages =")
    writer.emit(7, "with pkgs;")
    writer.emit(7, "[")
    _emit_package_items(writer, 8, doc, universal, annotate=annotate)
    writer.emit(7, "]")
    for index, (platform, grants) in enumerate(conditional):
        writer.emit(7, f"++ pkgs.lib.optionals {platform.predicate} (")
        writer.emit(8, "with pkgs;")
        writer.emit(8, "[")
        _emit_package_items(writer, 9, doc, grants, annotate=annotate)
        writer.emit(8, "]")
        writer.emit(7, ");" if index == len(conditional) - 1 else ")")


def _render_env(writer: NixWriter, doc: MergedDocument, *, annotate: bool) -> None:
    writer.emit(6, "env = {")
    if annotate:
        for language, members in _grouped(doc, doc.env):
            writer.emit(7, f"# {language}")
            for assignment in members:
                writer.binding(7, assignment.name, assignment.expression)
    else:
        for assignment in doc.env:
            writer.binding(7, assignment.name, assignment.expression)
    writer.emit(6, "};")


def _render_shell_hook(writer: NixWriter, doc: MergedDocument) -> None:
    writer.emit(6, "shellHook = ''")
    for index, snippet in enumerate(doc.setup):
        if index:
            writer.emit()
        if doc.is_multi_language:
            writer.emit(7, f"# {snippet.language}")
        writer.block(7, indented(snippet.text))
    writer.emit(6, "'';")


__all__ = ["DEFAULT_SYSTEMS", "RenderOptions", "render"]
