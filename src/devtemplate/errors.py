# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Exception hierarchy shared by the catalog, merge engine, and CLI."""

from __future__ import annotations


class DevTemplateError(RuntimeError):
    """Base class for every failure surfaced by the template generator."""


class ConfigError(DevTemplateError):
    """Raised when configuration input is invalid."""


class WorkspaceError(DevTemplateError):
    """Raised when the generated environment cannot be written to disk."""


class UnknownLanguageError(DevTemplateError):
    """Raised when a requested language is absent from the fragment catalog."""

    def __init__(self, language: str) -> None:
        """Create the error for the missing ``language`` identifier.

        Args:
            language: Identifier requested by the caller.
        """

        super().__init__(f"Template '{language}' not found")
        self.language = language


class MalformedFragmentError(DevTemplateError):
    """Raised when a catalog fragment violates its schema or invariants."""


class MergeConflictError(DevTemplateError):
    """Base class for irreconcilable differences between two fragments."""

    kind: str = "value"

    def __init__(self, name: str, existing: str, new: str) -> None:
        """Record the conflicting entity and both competing values.

        Args:
            name: Name of the entity declared twice.
            existing: Value already present in the merged document.
            new: Value supplied by the fragment being folded.
        """

        super().__init__(f"conflicting {self.kind} '{name}': {existing!r} vs {new!r}")
        self.name = name
        self.existing = existing
        self.new = new


class ConflictingSourceError(MergeConflictError):
    """Two fragments declare the same external source with different locators."""

    kind = "input"


class ConflictingEnvVarError(MergeConflictError):
    """Two fragments assign different expressions to one environment variable."""

    kind = "environment variable"


class ConflictingOverlayBindingError(MergeConflictError):
    """Two fragments define the same overlay attribute differently."""

    kind = "overlay attribute"


class ConflictingFileError(MergeConflictError):
    """Two fragments ship a companion file with the same name but other content."""

    kind = "companion file"

    def __init__(self, name: str, existing: str, new: str) -> None:
        """Record the clashing companion file without echoing its full content.

        Args:
            name: Relative filename shared by both fragments.
            existing: Content already scheduled for writing.
            new: Content supplied by the fragment being folded.
        """

        DevTemplateError.__init__(self, f"conflicting {self.kind} '{name}': contents differ")
        self.name = name
        self.existing = existing
        self.new = new


__all__ = [
    "ConfigError",
    "ConflictingEnvVarError",
    "ConflictingFileError",
    "ConflictingOverlayBindingError",
    "ConflictingSourceError",
    "DevTemplateError",
    "MalformedFragmentError",
    "MergeConflictError",
    "UnknownLanguageError",
    "WorkspaceError",
]
