# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""JSON schema validation for fragment documents."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from jsonschema import Draft202012Validator
from packaging.version import InvalidVersion, Version

from ..errors import MalformedFragmentError
from .io import load_schema
from .types import FRAGMENT_SCHEMA_FILENAME, FRAGMENT_SCHEMA_VERSION, JSONValue


@dataclass(slots=True)
class FragmentSchema:
    """Validate fragment documents against the bundled Draft 2020-12 schema."""

    path: Path
    validator: Draft202012Validator

    @classmethod
    def load(cls, schema_root: Path) -> FragmentSchema:
        """Load the fragment schema stored beneath ``schema_root``.

        Args:
            schema_root: Directory containing ``fragment.schema.json``.

        Returns:
            FragmentSchema: Repository bound to a compiled validator.
        """
        path = schema_root / FRAGMENT_SCHEMA_FILENAME
        schema = load_schema(path)
        Draft202012Validator.check_schema(schema)
        return cls(path=path, validator=Draft202012Validator(schema))

    def validate(self, document: Mapping[str, JSONValue], *, source: Path) -> None:
        """Validate ``document`` and its schema version.

        Every structural violation is reported at once, ordered by its location
        in the document, so catalog authors can fix a fragment in one pass.

        Args:
            document: Parsed fragment payload.
            source: Path used in error messages.

        Raises:
            MalformedFragmentError: If ``document`` violates the schema or declares an
                incompatible ``schemaVersion``.
        """
        errors = sorted(
            self.validator.iter_errors(document),
            key=lambda error: [str(part) for part in error.absolute_path],
        )
        if errors:
            details = "; ".join(_describe(error.absolute_path, error.message) for error in errors)
            raise MalformedFragmentError(f"{source}: {details}")
        ensure_compatible_version(document.get("schemaVersion"), source=source)


def ensure_compatible_version(raw: JSONValue | None, *, source: Path) -> None:
    """Ensure ``raw`` shares the supported schema major version.

    Raises:
        MalformedFragmentError: If ``raw`` is not a version or has another major.
    """
    try:
        declared = Version(str(raw))
    except InvalidVersion as exc:
        raise MalformedFragmentError(f"{source}: invalid schemaVersion {raw!r}") from exc
    supported = Version(FRAGMENT_SCHEMA_VERSION)
    if declared.major != supported.major:
        raise MalformedFragmentError(
            f"{source}: schemaVersion {declared} is not compatible with {supported}",
        )


def _describe(location: Iterable[str | int], message: str) -> str:
    path = "/".join(str(part) for part in location)
    return f"{path or '<root>'}: {message}"


__all__ = ["FragmentSchema", "ensure_compatible_version"]
