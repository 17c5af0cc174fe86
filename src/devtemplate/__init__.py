# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Generate multi-language Nix flake development environments."""

from __future__ import annotations

from typing import Final

from .errors import (
    ConflictingEnvVarError,
    ConflictingFileError,
    ConflictingOverlayBindingError,
    ConflictingSourceError,
    DevTemplateError,
    MalformedFragmentError,
    MergeConflictError,
    UnknownLanguageError,
)
from .generator import GeneratedEnvironment, generate, resolve_languages

__version__: Final[str] = "0.2.0"

__all__ = [
    "ConflictingEnvVarError",
    "ConflictingFileError",
    "ConflictingOverlayBindingError",
    "ConflictingSourceError",
    "DevTemplateError",
    "GeneratedEnvironment",
    "MalformedFragmentError",
    "MergeConflictError",
    "UnknownLanguageError",
    "__version__",
    "generate",
    "resolve_languages",
]
