# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and layered loading."""

from __future__ import annotations

from ..errors import ConfigError
from .loader import PROJECT_CONFIG_NAME, ConfigLoader, load_config, user_config_path
from .models import ConsoleConfig, GeneratorConfig, OutputConfig, RenderConfig
from .sources import DefaultConfigSource, PyProjectConfigSource, TomlConfigSource

__all__ = [
    "PROJECT_CONFIG_NAME",
    "ConfigError",
    "ConfigLoader",
    "ConsoleConfig",
    "DefaultConfigSource",
    "GeneratorConfig",
    "OutputConfig",
    "PyProjectConfigSource",
    "RenderConfig",
    "TomlConfigSource",
    "load_config",
    "user_config_path",
]
