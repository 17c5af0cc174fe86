# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Config loading with layered precedence."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import ValidationError

from ..errors import ConfigError
from .models import GeneratorConfig
from .sources import ConfigSource, DefaultConfigSource, PyProjectConfigSource, TomlConfigSource, deep_merge

LOGGER = logging.getLogger(__name__)

PROJECT_CONFIG_NAME: Final[str] = ".devtemplate.toml"
USER_CONFIG_DIR: Final[str] = "devtemplate"
USER_CONFIG_NAME: Final[str] = "config.toml"


def user_config_path(env: Mapping[str, str] | None = None) -> Path:
    """Return ``$XDG_CONFIG_HOME/devtemplate/config.toml`` (``~/.config`` when unset)."""

    environ = env if env is not None else os.environ
    base = environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / USER_CONFIG_DIR / USER_CONFIG_NAME


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader that merges ``sources`` from lowest to highest precedence.

        Raises:
            ValueError: If no sources are supplied.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @property
    def sources(self) -> tuple[ConfigSource, ...]:
        """Return the configured sources in precedence order."""

        return tuple(self._sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        user_config: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ConfigLoader:
        """Build a loader for ``project_root`` with the default source ordering.

        Sources, lowest to highest precedence: built-in defaults, the user file,
        ``.devtemplate.toml`` in the project, then ``[tool.devtemplate]`` in
        ``pyproject.toml``.

        Args:
            project_root: Directory whose project files are consulted.
            user_config: Optional explicit path to the user-level file.
            env: Environment used for ``$VAR`` expansion and ``XDG_CONFIG_HOME``.

        Returns:
            ConfigLoader: Loader configured with default precedence ordering.
        """

        root = project_root.resolve()
        home_config = user_config if user_config is not None else user_config_path(env)
        sources: list[ConfigSource] = [
            DefaultConfigSource(),
            TomlConfigSource(home_config, name=str(home_config), env=env),
            TomlConfigSource(root / PROJECT_CONFIG_NAME, name=str(root / PROJECT_CONFIG_NAME), env=env),
        ]
        pyproject = root / "pyproject.toml"
        if pyproject.exists():
            sources.append(PyProjectConfigSource(pyproject, env=env))
        return cls(sources=sources)

    def load(self) -> GeneratorConfig:
        """Return the merged configuration.

        Raises:
            ConfigError: If a source is unreadable or the merged values are invalid.
        """

        merged: dict[str, Any] = {}
        for source in self._sources:
            fragment = source.load()
            if not fragment:
                continue
            LOGGER.debug("applying config source=%s", source.describe())
            merged = deep_merge(merged, fragment)
        try:
            return GeneratorConfig.model_validate(merged)
        except ValidationError as exc:
            details = "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
            )
            raise ConfigError(f"Invalid configuration: {details}") from exc


def load_config(project_root: Path) -> GeneratorConfig:
    """Load configuration for ``project_root`` using the default tiered sources."""
    return ConfigLoader.for_root(project_root).load()


__all__ = ["PROJECT_CONFIG_NAME", "ConfigLoader", "load_config", "user_config_path"]
