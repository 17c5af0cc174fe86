# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models for the template generator."""

from __future__ import annotations

from pathlib import PurePath

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..render import DEFAULT_SYSTEMS, RenderOptions
from ..workspace import DEFAULT_DESCRIPTOR, WriteOptions


class OutputConfig(BaseModel):
    """Settings controlling where and how the descriptor is written."""

    model_config = ConfigDict(validate_assignment=True)

    filename: str = DEFAULT_DESCRIPTOR
    overwrite: bool = False
    format: bool = True
    formatter: str = "nixfmt"

    @field_validator("filename")
    @classmethod
    def _plain_filename(cls, value: str) -> str:
        name = value.strip()
        if not name or PurePath(name).name != name or name in {".", ".."}:
            raise ValueError("filename must be a plain file name without directories")
        return name

    @field_validator("formatter")
    @classmethod
    def _non_empty_formatter(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("formatter must not be empty")
        return value.strip()


class RenderConfig(BaseModel):
    """Presentation settings forwarded to the renderer."""

    model_config = ConfigDict(validate_assignment=True)

    supported_systems: list[str] = Field(default_factory=lambda: list(DEFAULT_SYSTEMS))
    provenance_comments: bool = True

    @field_validator("supported_systems")
    @classmethod
    def _unique_systems(cls, value: list[str]) -> list[str]:
        systems: list[str] = []
        for entry in value:
            system = entry.strip()
            if system and system not in systems:
                systems.append(system)
        if not systems:
            raise ValueError("at least one supported system is required")
        return systems


class ConsoleConfig(BaseModel):
    """Console presentation preferences."""

    model_config = ConfigDict(validate_assignment=True)

    emoji: bool = True
    color: bool = True


class GeneratorConfig(BaseModel):
    """Top-level configuration resolved from every configuration source."""

    model_config = ConfigDict(validate_assignment=True)

    output: OutputConfig = Field(default_factory=OutputConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    console: ConsoleConfig = Field(default_factory=ConsoleConfig)

    def to_dict(self) -> dict[str, object]:
        """Return a plain mapping suitable for merging with other sources."""

        return self.model_dump(mode="python")

    def render_options(self) -> RenderOptions:
        """Return the renderer options described by ``render``."""

        return RenderOptions(
            supported_systems=tuple(self.render.supported_systems),
            provenance_comments=self.render.provenance_comments,
        )

    def write_options(self) -> WriteOptions:
        """Return the workspace writer options described by ``output``."""

        return WriteOptions(
            filename=self.output.filename,
            overwrite=self.output.overwrite,
            format=self.output.format,
            formatter=self.output.formatter,
        )


__all__ = ["ConsoleConfig", "GeneratorConfig", "OutputConfig", "RenderConfig"]
