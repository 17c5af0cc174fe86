# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fragment models and the parser that produces them."""

from __future__ import annotations

from .models import (
    CompanionFile,
    EnvVar,
    ExternalSource,
    OverlayBinding,
    OverlayRef,
    PackageEntry,
    ParsedFragment,
    Platform,
    SetupSnippet,
)
from .parser import parse

__all__ = [
    "CompanionFile",
    "EnvVar",
    "ExternalSource",
    "OverlayBinding",
    "OverlayRef",
    "PackageEntry",
    "ParsedFragment",
    "Platform",
    "SetupSnippet",
    "parse",
]
