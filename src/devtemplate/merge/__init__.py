# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Merge engine combining parsed fragments."""

from __future__ import annotations

from .document import (
    MULTI_LANGUAGE_DESCRIPTION,
    EnvAssignment,
    MergedDocument,
    PackageGrant,
    describe_languages,
)
from .engine import merge

__all__ = [
    "MULTI_LANGUAGE_DESCRIPTION",
    "EnvAssignment",
    "MergedDocument",
    "PackageGrant",
    "describe_languages",
    "merge",
]
