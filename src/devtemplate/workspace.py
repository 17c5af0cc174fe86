# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Write generated environments to a target directory."""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import WorkspaceError
from .fragments import CompanionFile
from .runtime.process import CommandOptions, SubprocessExecutionError, find_executable, run_command

LOGGER = logging.getLogger(__name__)

DEFAULT_DESCRIPTOR: Final[str] = "flake.nix"
DEFAULT_FORMATTER: Final[str] = "nixfmt"
FORMATTER_TIMEOUT: Final[float] = 30.0


@dataclass(frozen=True, slots=True)
class WriteOptions:
    """Settings controlling how an environment is written.

    Attributes:
        filename: Name of the descriptor inside the target directory.
        overwrite: Replace an existing descriptor instead of refusing.
        format: Run ``formatter`` on the descriptor after writing it.
        formatter: Executable invoked as ``<formatter> <descriptor>``.
    """

    filename: str = DEFAULT_DESCRIPTOR
    overwrite: bool = False
    format: bool = True
    formatter: str = DEFAULT_FORMATTER


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of :func:`write_environment`.

    Attributes:
        descriptor: Path of the written descriptor.
        written: Every file created or replaced, descriptor first.
        skipped: Companion files left untouched because they already existed.
        formatted: ``True`` when the formatter ran successfully.
        warnings: Non-fatal problems, e.g. a missing formatter.
    """

    descriptor: Path
    written: tuple[Path, ...] = ()
    skipped: tuple[Path, ...] = ()
    formatted: bool = False
    warnings: tuple[str, ...] = ()


def write_environment(
    target: Path,
    rendered: str,
    files: Iterable[CompanionFile] = (),
    options: WriteOptions | None = None,
) -> WriteResult:
    """Write ``rendered`` and its companion files below ``target``.

    Args:
        target: Directory receiving the environment; created when missing.
        rendered: Descriptor text produced by the renderer.
        files: Companion files shipped by the selected fragments.
        options: Write settings; defaults refuse to overwrite and format when possible.

    Returns:
        WriteResult: Paths written and skipped plus formatter status.

    Raises:
        WorkspaceError: If the descriptor exists and ``overwrite`` is false, or
            a filesystem operation fails.
    """

    settings = options or WriteOptions()
    if target.exists() and not target.is_dir():
        raise WorkspaceError(f"{target} exists and is not a directory")
    descriptor = target / settings.filename
    if descriptor.exists() and not settings.overwrite:
        raise WorkspaceError(f"{descriptor} already exists; use --force to overwrite it")

    companions = list(files)
    for companion in companions:
        if companion.name == settings.filename:
            raise WorkspaceError(f"companion file '{companion.name}' would replace the descriptor")

    try:
        target.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WorkspaceError(f"unable to create {target}: {exc}") from exc

    _atomic_write(descriptor, rendered)
    written: list[Path] = [descriptor]
    skipped: list[Path] = []
    for companion in companions:
        path = target / companion.name
        if path.exists():
            LOGGER.debug("keeping existing companion file path=%s", path)
            skipped.append(path)
            continue
        _atomic_write(path, companion.content)
        written.append(path)

    formatted = False
    warnings: list[str] = []
    if settings.format:
        formatted, warning = _format_descriptor(descriptor, settings.formatter)
        if warning:
            warnings.append(warning)
    return WriteResult(
        descriptor=descriptor,
        written=tuple(written),
        skipped=tuple(skipped),
        formatted=formatted,
        warnings=tuple(warnings),
    )


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` through a temporary file in the same directory."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise WorkspaceError(f"unable to write {path}: {exc}") from exc
    temp_path = Path(temp_name)
    try:
        with os.fdopen(handle, "w", encoding="utf-8", newline="\n") as stream:
            stream.write(content)
        os.replace(temp_path, path)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise WorkspaceError(f"unable to write {path}: {exc}") from exc
    LOGGER.debug("wrote path=%s bytes=%d", path, len(content))


def _format_descriptor(descriptor: Path, formatter: str) -> tuple[bool, str | None]:
    """Run ``formatter`` on ``descriptor``; failures become warnings."""

    if find_executable(formatter) is None:
        return False, f"{formatter} not found; leaving {descriptor.name} unformatted"
    try:
        run_command(
            [formatter, str(descriptor)],
            options=CommandOptions(cwd=descriptor.parent, timeout=FORMATTER_TIMEOUT),
        )
    except (SubprocessExecutionError, OSError) as exc:
        return False, f"{formatter} failed on {descriptor.name}: {exc}"
    return True, None


__all__ = ["DEFAULT_DESCRIPTOR", "WriteOptions", "WriteResult", "write_environment"]
