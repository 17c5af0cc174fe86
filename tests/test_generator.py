# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the catalog -> parse -> merge -> render pipeline."""

from __future__ import annotations

import pytest

from devtemplate import (
    ConflictingOverlayBindingError,
    UnknownLanguageError,
    generate,
    resolve_languages,
)
from devtemplate.catalog import FragmentCatalog
from devtemplate.generator import split_languages
from devtemplate.render import RenderOptions


def test_split_languages_trims_and_reports_duplicates() -> None:
    selection = split_languages(["rust, go", "go", " , ", "python"])
    assert selection.languages == ("rust", "go", "python")
    assert selection.duplicates == ("go",)


def test_resolve_languages_validates_against_catalog(catalog: FragmentCatalog) -> None:
    assert resolve_languages(["go,zig"], catalog) == ("go", "zig")
    with pytest.raises(UnknownLanguageError, match="Template 'cobol' not found"):
        resolve_languages(["go", "cobol"], catalog)


def test_resolve_languages_rejects_empty_selection(catalog: FragmentCatalog) -> None:
    with pytest.raises(ValueError, match="no templates selected"):
        resolve_languages([" , "], catalog)


def test_unknown_language_is_reported_before_merging(conflicting_catalog: FragmentCatalog) -> None:
    with pytest.raises(UnknownLanguageError):
        generate(["alpha", "beta", "cobol"], catalog=conflicting_catalog)


def test_generate_single_language() -> None:
    result = generate(["go"])
    assert result.languages == ("go",)
    assert not result.is_multi_language
    assert 'description = "A Nix-flake-based Go 1.24 development environment";' in result.text
    assert result.files == ()


def test_generate_accepts_comma_separated_and_split_arguments() -> None:
    assert generate(["go,rust"]).text == generate(["go", "rust"]).text


def test_generate_collapses_repeated_languages() -> None:
    assert generate(["python", "python"]).text == generate(["python"]).text


def test_generate_returns_companion_files() -> None:
    result = generate(["rust-toolchain"])
    assert [companion.name for companion in result.files] == ["rust-toolchain.toml"]
    assert result.files[0].content.startswith("[toolchain]")


def test_generate_propagates_merge_conflicts(conflicting_catalog: FragmentCatalog) -> None:
    with pytest.raises(ConflictingOverlayBindingError, match="conflicting overlay attribute 'jdk'"):
        generate(["alpha", "beta"], catalog=conflicting_catalog)


@pytest.mark.parametrize(
    "selection",
    [
        "rust-toolchain,rust",
        "bun,node",
        "clojure,java",
        "csharp,java",
        "cue,dhall",
        "haxe,nim",
        "nickel,nix",
        "opa,protobuf",
        "php,ruby",
        "pulumi,go",
        "pulumi,hashi",
        "swift,kotlin",
        "vlang,zig",
        "c-cpp,rust,zig,go,swift",
        "java,kotlin,scala",
        "rust,python,node",
    ],
)
def test_catalog_combinations_generate(selection: str) -> None:
    result = generate([selection])
    assert result.is_multi_language
    assert result.text.count("nixpkgs.url = ") == 1
    for language in selection.split(","):
        assert language in result.document.description


def test_python_venv_hook_is_a_shell_package() -> None:
    result = generate(["python"])
    assert "python311Packages.venvShellHook" in result.document.package_identifiers()
    assert not result.document.env


def test_generate_forwards_render_options() -> None:
    result = generate(["zig"], options=RenderOptions(supported_systems=("aarch64-darwin",)))
    assert '"x86_64-linux"' not in result.text
    assert '"aarch64-darwin"' in result.text
