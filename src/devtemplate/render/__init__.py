# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Descriptor rendering for merged environment documents."""

from __future__ import annotations

from .flake import DEFAULT_SYSTEMS, RenderOptions, render
from .nix import indented, quote

__all__ = ["DEFAULT_SYSTEMS", "RenderOptions", "indented", "quote", "render"]
