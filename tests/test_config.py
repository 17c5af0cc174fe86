# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for layered configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from devtemplate.config import (
    ConfigError,
    ConfigLoader,
    GeneratorConfig,
    TomlConfigSource,
    load_config,
    user_config_path,
)
from devtemplate.render import DEFAULT_SYSTEMS


def test_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    assert config == GeneratorConfig()
    assert config.output.filename == "flake.nix"
    assert config.output.overwrite is False
    assert tuple(config.render.supported_systems) == DEFAULT_SYSTEMS
    assert config.render_options().provenance_comments is True
    assert config.write_options().formatter == "nixfmt"


def test_user_config_path_honours_xdg(tmp_path: Path) -> None:
    assert user_config_path({"XDG_CONFIG_HOME": str(tmp_path)}) == tmp_path / "devtemplate" / "config.toml"


def test_source_precedence(tmp_path: Path, isolated_user_config: Path) -> None:
    user_file = isolated_user_config / "devtemplate" / "config.toml"
    user_file.parent.mkdir(parents=True)
    user_file.write_text(
        '[output]\nformat = false\nfilename = "user.nix"\n[console]\nemoji = false\n',
        encoding="utf-8",
    )
    (tmp_path / ".devtemplate.toml").write_text('[output]\nfilename = "project.nix"\n', encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n[tool.devtemplate.render]\nprovenance_comments = false\n',
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.output.format is False
    assert config.output.filename == "project.nix"
    assert config.console.emoji is False
    assert config.render.provenance_comments is False


def test_pyproject_overrides_project_file(tmp_path: Path) -> None:
    (tmp_path / ".devtemplate.toml").write_text('[output]\nfilename = "project.nix"\n', encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text('[tool.devtemplate.output]\nfilename = "py.nix"\n', encoding="utf-8")
    assert load_config(tmp_path).output.filename == "py.nix"


def test_includes_and_env_expansion(tmp_path: Path) -> None:
    (tmp_path / "base.toml").write_text('[render]\nsupported_systems = ["$DEV_SYSTEM"]\n', encoding="utf-8")
    main = tmp_path / "main.toml"
    main.write_text('include = "base.toml"\n[output]\nformatter = "${DEV_FORMATTER}"\n', encoding="utf-8")
    source = TomlConfigSource(main, env={"DEV_SYSTEM": "x86_64-linux", "DEV_FORMATTER": "alejandra"})
    config = ConfigLoader(sources=[source]).load()
    assert config.render.supported_systems == ["x86_64-linux"]
    assert config.output.formatter == "alejandra"


def test_circular_include_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "a.toml").write_text('include = "b.toml"\n', encoding="utf-8")
    (tmp_path / "b.toml").write_text('include = "a.toml"\n', encoding="utf-8")
    with pytest.raises(ConfigError, match="Circular include"):
        TomlConfigSource(tmp_path / "a.toml").load()


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".devtemplate.toml").write_text("[output\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "payload",
    [
        '[output]\nfilename = "../flake.nix"\n',
        "[render]\nsupported_systems = []\n",
        '[console]\nemoji = "sometimes"\n',
    ],
)
def test_invalid_values_raise_config_error(tmp_path: Path, payload: str) -> None:
    (tmp_path / ".devtemplate.toml").write_text(payload, encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(tmp_path)


def test_loader_requires_sources() -> None:
    with pytest.raises(ValueError):
        ConfigLoader(sources=[])


def test_validate_assignment() -> None:
    config = GeneratorConfig()
    config.output.overwrite = True
    assert config.write_options().overwrite is True
    with pytest.raises(ValueError):
        config.output.filename = ""
