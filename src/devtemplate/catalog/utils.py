# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Helpers for validating and freezing fragment JSON structures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType

from ..errors import MalformedFragmentError
from .types import JSONValue


def expect_string(value: JSONValue | None, *, key: str, context: str) -> str:
    """Return ``value`` when it is a string, otherwise raise.

    Args:
        value: Raw JSON value extracted from the fragment document.
        key: Attribute name used in error messages.
        context: Prefix describing where ``value`` was read from.

    Returns:
        str: The validated string.

    Raises:
        MalformedFragmentError: If ``value`` is not a string.
    """
    if not isinstance(value, str):
        raise MalformedFragmentError(f"{context}: expected '{key}' to be a string")
    return value


def optional_string(value: JSONValue | None, *, key: str, context: str) -> str | None:
    """Return ``value`` as an optional string."""
    if value is None:
        return None
    return expect_string(value, key=key, context=context)


def optional_bool(value: JSONValue | None, *, key: str, context: str, default: bool = False) -> bool:
    """Return ``value`` as a boolean, falling back to ``default`` when absent.

    Raises:
        MalformedFragmentError: If ``value`` is present but not a boolean.
    """
    if value is None:
        return default
    if not isinstance(value, bool):
        raise MalformedFragmentError(f"{context}: expected '{key}' to be a boolean")
    return value


def string_array(value: JSONValue | None, *, key: str, context: str) -> tuple[str, ...]:
    """Return ``value`` as a tuple of strings.

    Args:
        value: Raw JSON value extracted from the fragment document.
        key: Attribute name used in error messages.
        context: Prefix describing where ``value`` was read from.

    Returns:
        tuple[str, ...]: Entries in declaration order; empty when ``value`` is absent.

    Raises:
        MalformedFragmentError: If ``value`` is not an array of strings.
    """
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)):
        raise MalformedFragmentError(f"{context}: expected '{key}' to be an array of strings")
    items: list[str] = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise MalformedFragmentError(f"{context}: expected '{key}[{index}]' to be a string")
        items.append(item)
    return tuple(items)


def expect_mapping(value: JSONValue | None, *, key: str, context: str) -> Mapping[str, JSONValue]:
    """Return ``value`` when it is a JSON object, otherwise raise."""
    if not isinstance(value, Mapping):
        raise MalformedFragmentError(f"{context}: expected '{key}' to be an object")
    return value


def string_mapping(value: JSONValue | None, *, key: str, context: str) -> dict[str, str]:
    """Return ``value`` as an insertion-ordered mapping of strings.

    Raises:
        MalformedFragmentError: If ``value`` is present but not an object of strings.
    """
    if value is None:
        return {}
    mapping = expect_mapping(value, key=key, context=context)
    result: dict[str, str] = {}
    for item_key, item_value in mapping.items():
        if not isinstance(item_value, str):
            raise MalformedFragmentError(f"{context}: expected '{key}.{item_key}' to be a string")
        result[str(item_key)] = item_value
    return result


def freeze_json(value: JSONValue, *, context: str) -> JSONValue:
    """Return a recursively immutable copy of ``value``.

    Objects become :class:`types.MappingProxyType` views and arrays become tuples so a
    loaded catalog can be shared safely between callers.

    Raises:
        MalformedFragmentError: If ``value`` contains non-JSON data.
    """
    if isinstance(value, Mapping):
        frozen = {str(key): freeze_json(item, context=f"{context}.{key}") for key, item in value.items()}
        return MappingProxyType(frozen)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return tuple(freeze_json(item, context=f"{context}[]") for item in value)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    raise MalformedFragmentError(f"{context}: unsupported JSON value type {type(value).__name__}")


def thaw_json(value: JSONValue) -> JSONValue:
    """Return a plain ``dict``/``list`` copy of a frozen JSON value."""
    if isinstance(value, Mapping):
        return {str(key): thaw_json(item) for key, item in value.items()}
    if isinstance(value, (tuple, list)):
        return [thaw_json(item) for item in value]
    return value


__all__ = [
    "expect_mapping",
    "expect_string",
    "freeze_json",
    "optional_bool",
    "optional_string",
    "string_array",
    "string_mapping",
    "thaw_json",
]
