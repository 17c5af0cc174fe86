# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from devtemplate.catalog import DEFAULT_SCHEMA_ROOT, FragmentCatalog, RawFragment, default_catalog, load_catalog
from devtemplate.catalog.utils import freeze_json
from devtemplate.fragments import ParsedFragment, parse

NIXPKGS = {"name": "nixpkgs", "url": "github:NixOS/nixpkgs/nixos-unstable"}

FragmentFactory = Callable[..., RawFragment]


@pytest.fixture(autouse=True)
def isolated_user_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ``XDG_CONFIG_HOME`` at an empty directory so user files never leak into tests."""
    config_home = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def schema_root() -> Path:
    """Return the bundled fragment schema directory."""
    return DEFAULT_SCHEMA_ROOT


@pytest.fixture
def catalog() -> FragmentCatalog:
    """Return the catalog shipped with the package."""
    return default_catalog()


@pytest.fixture
def make_raw() -> FragmentFactory:
    """Return a factory building in-memory fragments without touching the filesystem."""

    def _factory(language: str, **sections: Any) -> RawFragment:
        data: dict[str, Any] = {
            "schemaVersion": "1.0.0",
            "id": language,
            "description": sections.pop("description", f"{language} environment"),
            "inputs": sections.pop("inputs", [NIXPKGS]),
            "packages": sections.pop("packages", []),
        }
        data.update(sections)
        frozen = freeze_json(data, context=language)
        return RawFragment(
            language=language,
            description=data["description"],
            data=frozen,
            source=Path(f"{language}.json"),
        )

    return _factory


@pytest.fixture
def make_fragment(make_raw: FragmentFactory) -> Callable[..., ParsedFragment]:
    """Return a factory producing parsed fragments from keyword sections."""

    def _factory(language: str, **sections: Any) -> ParsedFragment:
        return parse(make_raw(language, **sections))

    return _factory



@pytest.fixture
def conflicting_catalog(tmp_path: Path, schema_root: Path) -> FragmentCatalog:
    """Return a two-entry catalog whose fragments bind ``jdk`` to different expressions."""
    data = tmp_path / "conflicting-catalog"
    data.mkdir()
    for language, expression in (("alpha", "prev.jdk21"), ("beta", "prev.jdk17")):
        payload = {
            "schemaVersion": "1.0.0",
            "id": language,
            "description": f"{language} environment",
            "inputs": [NIXPKGS],
            "overlayBindings": [{"name": "jdk", "expression": expression}],
            "packages": ["jdk"],
        }
        (data / f"{language}.json").write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return load_catalog(data, schema_root=schema_root)
