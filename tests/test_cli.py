# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the dev-template-generator command line interface."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from devtemplate import __version__
from devtemplate.catalog import FragmentCatalog
from devtemplate.cli.app import app


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    """Return a runner executing from an empty working directory."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


def test_list_shows_every_template(runner: CliRunner) -> None:
    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0] == "Available templates:"
    assert "  rust - A Nix-flake-based Rust development environment" in lines
    assert "  go - A Nix-flake-based Go 1.24 development environment" in lines


def test_list_verbose_includes_checksum(runner: CliRunner) -> None:
    result = runner.invoke(app, ["list", "--verbose"])
    assert result.exit_code == 0
    assert "Catalog checksum: " in result.stdout
    assert "  hashi - A Nix-flake-based development environment for HashiCorp tools [7 packages" in result.stdout


def test_init_single_template(runner: CliRunner, tmp_path: Path) -> None:
    target = tmp_path / "project"
    result = runner.invoke(app, ["init", "go", "--path", str(target), "--no-format", "--no-emoji"])
    assert result.exit_code == 0, result.output
    assert f"Initialized go template in {target}" in result.stdout
    assert "A Nix-flake-based Go 1.24 development environment" in (target / "flake.nix").read_text(encoding="utf-8")


def test_init_multi_template(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["init", "rust, go", "python", "-p", "multi", "--no-format"])
    assert result.exit_code == 0, result.output
    assert "Initialized multi-language template (rust,go,python) in multi" in result.stdout
    text = (tmp_path / "multi" / "flake.nix").read_text(encoding="utf-8")
    assert 'description = "Multi-language development environment (rust, go, python)";' in text


def test_init_warns_about_duplicates(runner: CliRunner) -> None:
    result = runner.invoke(app, ["init", "go,go", "--no-format", "--no-emoji"])
    assert result.exit_code == 0, result.output
    assert "Ignoring duplicate template 'go'" in result.stdout
    assert "Initialized go template in ." in result.stdout


def test_init_unknown_template_fails(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["init", "rust,cobol", "--no-format", "--no-emoji"])
    assert result.exit_code == 1
    assert "Template 'cobol' not found" in result.output
    assert not (tmp_path / "flake.nix").exists()


def test_init_conflict_writes_nothing(
    runner: CliRunner,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    conflicting_catalog: FragmentCatalog,
) -> None:
    monkeypatch.setattr("devtemplate.generator.default_catalog", lambda: conflicting_catalog)
    result = runner.invoke(app, ["init", "alpha", "beta", "--no-format", "--no-emoji"])
    assert result.exit_code == 1
    assert "conflicting overlay attribute 'jdk'" in result.output
    assert not (tmp_path / "flake.nix").exists()


def test_init_rust_variants(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["init", "rust-toolchain,rust", "--no-format", "--no-emoji"])
    assert result.exit_code == 0, result.output
    assert "Initialized multi-language template (rust-toolchain,rust) in ." in result.stdout
    assert (tmp_path / "rust-toolchain.toml").exists()
    assert (tmp_path / "flake.nix").read_text(encoding="utf-8").count("rustToolchain =") == 1


def test_init_refuses_to_overwrite_without_force(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / "flake.nix").write_text("{ }\n", encoding="utf-8")
    refused = runner.invoke(app, ["init", "zig", "--no-format", "--no-emoji"])
    assert refused.exit_code == 1
    assert "already exists" in refused.output
    assert (tmp_path / "flake.nix").read_text(encoding="utf-8") == "{ }\n"

    forced = runner.invoke(app, ["init", "zig", "--force", "--no-format", "--no-emoji"])
    assert forced.exit_code == 0, forced.output
    assert "zig" in (tmp_path / "flake.nix").read_text(encoding="utf-8")


def test_init_writes_companion_files(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["init", "rust-toolchain", "--no-format", "--no-emoji"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "rust-toolchain.toml").read_text(encoding="utf-8").startswith("[toolchain]")
    assert "Wrote rust-toolchain.toml" in result.stdout


def test_init_honours_project_config(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / ".devtemplate.toml").write_text(
        '[output]\nfilename = "dev.nix"\nformat = false\n[render]\nsupported_systems = ["x86_64-linux"]\n',
        encoding="utf-8",
    )
    result = runner.invoke(app, ["init", "shell", "--no-emoji"])
    assert result.exit_code == 0, result.output
    text = (tmp_path / "dev.nix").read_text(encoding="utf-8")
    assert '"aarch64-darwin"' not in text


def test_init_reports_invalid_config(runner: CliRunner, tmp_path: Path) -> None:
    (tmp_path / ".devtemplate.toml").write_text("[render]\nsupported_systems = []\n", encoding="utf-8")
    result = runner.invoke(app, ["init", "shell", "--no-emoji"])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_init_debug_logging(runner: CliRunner) -> None:
    result = runner.invoke(app, ["init", "nix", "--no-format", "--no-emoji", "--debug"])
    assert result.exit_code == 0, result.output
    assert "[debug] init languages=nix" in result.stdout


def test_preview_prints_without_writing(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(app, ["preview", "node"])
    assert result.exit_code == 0, result.output
    assert result.stdout.startswith('{\n  description = "A Nix-flake-based Node.js development environment";')
    assert not (tmp_path / "flake.nix").exists()


def test_preview_unknown_template(runner: CliRunner) -> None:
    result = runner.invoke(app, ["preview", "cobol"])
    assert result.exit_code == 1
    assert "Template 'cobol' not found" in result.output


def test_show_describes_fragment(runner: CliRunner) -> None:
    result = runner.invoke(app, ["show", "rust"])
    assert result.exit_code == 0, result.output
    for expected in ("Inputs", "rust-overlay", "rustToolchain", "RUST_SRC_PATH"):
        assert expected in result.stdout


def test_show_unknown_template(runner: CliRunner) -> None:
    result = runner.invoke(app, ["show", "cobol"])
    assert result.exit_code == 1
    assert "Template 'cobol' not found" in result.output


def test_version_flag(runner: CliRunner) -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"dev-template-generator {__version__}"
