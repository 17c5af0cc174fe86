# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the flake.nix renderer."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from devtemplate.catalog import FragmentCatalog
from devtemplate.fragments import ParsedFragment, parse
from devtemplate.merge import MergedDocument, merge
from devtemplate.render import RenderOptions, indented, quote, render

FragmentFactory = Callable[..., ParsedFragment]

MINIMAL_FLAKE = """\
{
  description = "demo environment";

  inputs = {
    nixpkgs.url = "github:NixOS/nixpkgs/nixos-unstable";
  };

  outputs =
    {
      self,
      nixpkgs,
    }:
    let
      supportedSystems = [
        "x86_64-linux"
        "aarch64-linux"
        "x86_64-darwin"
        "aarch64-darwin"
      ];
      forEachSupportedSystem =
        f:
        nixpkgs.lib.genAttrs supportedSystems (
          system:
          f {
            pkgs = import nixpkgs { inherit system; };
          }
        );
    in
    {
      devShells = forEachSupportedSystem (
        { pkgs }:
        {
          default = pkgs.mkShell {
            packages = with pkgs; [
              hello
            ];
          };
        }
      );
    };
}
"""


def _doc(catalog: FragmentCatalog, *languages: str) -> MergedDocument:
    return merge([parse(catalog.get(language)) for language in languages], list(languages))


def _stripped(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


def test_minimal_document_layout(make_fragment: FragmentFactory) -> None:
    doc = merge([make_fragment("demo", packages=["hello"])], ["demo"])
    assert render(doc) == MINIMAL_FLAKE


def test_render_is_deterministic(catalog: FragmentCatalog) -> None:
    assert render(_doc(catalog, "rust", "python", "c-cpp")) == render(_doc(catalog, "rust", "python", "c-cpp"))


def test_rust_overlays_and_bindings(catalog: FragmentCatalog) -> None:
    lines = _stripped(render(_doc(catalog, "rust")))
    assert "rust-overlay = {" in lines
    assert 'url = "github:oxalica/rust-overlay";' in lines
    assert 'inputs.nixpkgs.follows = "nixpkgs";' in lines
    assert "rust-overlay," in lines
    assert "overlays.default = final: prev: {" in lines
    assert "rustToolchain =" in lines
    assert lines.index("rust-overlay.overlays.default") < lines.index("self.overlays.default")
    assert 'RUST_SRC_PATH = "${pkgs.rustToolchain}/lib/rustlib/src/rust/library";' in lines


def test_multi_line_binding_keeps_relative_indentation(catalog: FragmentCatalog) -> None:
    text = render(_doc(catalog, "rust"))
    assert "        rustToolchain =\n          let\n            rust = prev.rust-bin;\n          in\n" in text
    assert '                "rustfmt"\n              ];\n            };\n' in text


def test_single_layout_has_no_provenance_comments(catalog: FragmentCatalog) -> None:
    text = render(_doc(catalog, "python"))
    assert "# python" not in text
    assert "shellHook = ''" in text
    assert "source .venv/bin/activate" in text


def test_multi_layout_groups_by_language(catalog: FragmentCatalog) -> None:
    text = render(_doc(catalog, "python", "c-cpp"))
    lines = _stripped(text)
    assert 'description = "Multi-language development environment (python, c-cpp)";' in lines
    assert lines.index("# python") < lines.index("python311") < lines.index("# c-cpp") < lines.index("cmake")
    assert "++ pkgs.lib.optionals pkgs.stdenv.isLinux (" in lines
    assert lines.index("gdb") > lines.index("++ pkgs.lib.optionals pkgs.stdenv.isLinux (")


def test_multi_layout_annotates_shell_hooks(make_fragment: FragmentFactory) -> None:
    first = make_fragment("a", shellHook="echo first")
    second = make_fragment("b", shellHook="echo second")
    lines = _stripped(render(merge([first, second], ["a", "b"])))
    start = lines.index("shellHook = ''")
    assert lines[start + 1 : start + 6] == ["# a", "echo first", "", "# b", "echo second"]


def test_provenance_comments_can_be_disabled(catalog: FragmentCatalog) -> None:
    text = render(_doc(catalog, "go", "zig"), RenderOptions(provenance_comments=False))
    assert "# go" not in text
    assert "# zig" not in text


def test_platform_packages_render_for_both_conditions(make_fragment: FragmentFactory) -> None:
    first = make_fragment("a", packages=["hello"], platformPackages={"linux": ["lldb"]})
    second = make_fragment("b", platformPackages={"darwin": ["lldb"]})
    text = render(merge([first, second], ["a", "b"]), RenderOptions(provenance_comments=False))
    assert "pkgs.lib.optionals pkgs.stdenv.isLinux" in text
    assert "pkgs.lib.optionals pkgs.stdenv.isDarwin" in text
    assert _stripped(text).count("lldb") == 2
    assert _stripped(text)[-7:-5] == ["]", ");"]


def test_allow_unfree_renders_config(catalog: FragmentCatalog) -> None:
    lines = _stripped(render(_doc(catalog, "hashi")))
    assert "config.allowUnfree = true;" in lines
    assert "inherit system;" in lines


def test_supported_systems_option(make_fragment: FragmentFactory) -> None:
    doc = merge([make_fragment("demo", packages=["hello"])], ["demo"])
    text = render(doc, RenderOptions(supported_systems=("x86_64-linux",)))
    assert '"x86_64-linux"' in text
    assert '"aarch64-darwin"' not in text
    with pytest.raises(ValueError, match="supported system"):
        render(doc, RenderOptions(supported_systems=()))


def test_description_is_escaped(make_fragment: FragmentFactory) -> None:
    doc = merge([make_fragment("demo", description='Say "hi" to ${USER}')], ["demo"])
    assert 'description = "Say \\"hi\\" to \\${USER}";' in render(doc)


def test_shell_hook_escapes_indented_string_terminator(make_fragment: FragmentFactory) -> None:
    doc = merge([make_fragment("demo", shellHook="echo ''quoted'' ${pkgs.hello}")], ["demo"])
    assert "echo '''quoted''' ${pkgs.hello}" in render(doc)


def test_quote_escapes_special_characters() -> None:
    assert quote('a "b" ${c} \\') == '"a \\"b\\" \\${c} \\\\"'
    assert quote("line\nbreak") == '"line\\nbreak"'


def test_indented_only_escapes_terminator() -> None:
    assert indented("''x'' ${y}") == "'''x''' ${y}"
