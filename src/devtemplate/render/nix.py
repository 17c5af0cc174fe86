# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Low-level helpers for emitting Nix source text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

INDENT: Final[str] = "  "


def quote(value: str) -> str:
    """Return ``value`` as a double-quoted Nix string literal.

    Args:
        value: Raw text to embed.

    Returns:
        str: Literal with backslashes, quotes, and interpolation openers escaped.
    """

    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("${", "\\${")
    escaped = escaped.replace("\n", "\\n").replace("\t", "\\t")
    return f'"{escaped}"'


def indented(value: str) -> str:
    """Escape ``value`` for the body of a Nix indented string.

    Only the closing delimiter is escaped; ``${...}`` interpolation is kept so shell
    hooks can reference store paths.
    """

    return value.replace("''", "'''")


@dataclass(slots=True)
class NixWriter:
    """Accumulate indented lines of Nix source."""

    lines: list[str] = field(default_factory=list)

    def emit(self, depth: int = 0, text: str = "") -> None:
        """Append ``text`` indented by ``depth`` levels; blank text yields an empty line."""

        self.lines.append(f"{INDENT * depth}{text}" if text else "")

    def block(self, depth: int, text: str) -> None:
        """Append a multi-line ``text`` block, re-indenting every line to ``depth``."""

        for line in text.splitlines():
            self.emit(depth, line.rstrip() if line.strip() else "")

    def binding(self, depth: int, name: str, expression: str) -> None:
        """Append ``name = expression;`` using the multi-line layout when needed."""

        lines = expression.splitlines()
        if len(lines) <= 1:
            self.emit(depth, f"{name} = {expression};")
            return
        self.emit(depth, f"{name} =")
        self.block(depth + 1, "\n".join(lines[:-1]))
        self.emit(depth + 1, f"{lines[-1].rstrip()};")

    def text(self) -> str:
        """Return the accumulated source terminated by a newline."""

        return "\n".join(self.lines) + "\n"


__all__ = ["INDENT", "NixWriter", "indented", "quote"]
