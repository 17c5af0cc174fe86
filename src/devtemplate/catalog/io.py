# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""I/O helpers for reading fragment documents and the fragment schema."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import cast

from ..errors import MalformedFragmentError
from .types import JSONValue


def load_document(path: Path) -> JSONValue:
    """Load a JSON document from disk.

    Args:
        path: Filesystem path to the JSON document.

    Returns:
        JSONValue: Parsed JSON payload.

    Raises:
        FileNotFoundError: If the document is missing.
        MalformedFragmentError: If the document is not valid JSON.
    """
    if not path.exists():
        raise FileNotFoundError(path)
    with path.open("r", encoding="utf-8") as stream:
        try:
            return cast(JSONValue, json.load(stream))
        except json.JSONDecodeError as exc:
            raise MalformedFragmentError(f"{path}: failed to parse JSON ({exc.msg} at line {exc.lineno})") from exc


def load_schema(path: Path) -> Mapping[str, JSONValue]:
    """Load a JSON schema from disk and ensure it is a JSON object.

    Raises:
        FileNotFoundError: If the schema file does not exist.
        MalformedFragmentError: If the schema cannot be parsed or is not an object.
    """
    payload = load_document(path)
    if not isinstance(payload, Mapping):
        raise MalformedFragmentError(f"{path}: expected a JSON object")
    return payload


__all__ = ["load_document", "load_schema"]
