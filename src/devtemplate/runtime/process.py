# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shell-free wrapper around ``subprocess`` used for external formatters."""

from __future__ import annotations

import shutil
import subprocess  # nosec B404 suppression_valid: Shell-free subprocess wrapper with resolved executables.
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final

TIMEOUT_RETURNCODE: Final[int] = 124


@dataclass(frozen=True, slots=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    check: bool = True
    capture_output: bool = True
    timeout: float | None = None


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str | None) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr


def find_executable(name: str) -> Path | None:
    """Return the absolute path of ``name`` on ``PATH`` or ``None``."""

    candidate = Path(name)
    if candidate.is_absolute():
        return candidate if candidate.exists() else None
    resolved = shutil.which(name)
    return Path(resolved) if resolved is not None else None


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Return ``args`` with the executable resolved to an absolute path.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be found.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)
    head, *rest = args
    resolved = find_executable(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [str(resolved), *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` without a shell.

    Args:
        args: Command and argument sequence to execute.
        options: Execution settings; defaults capture output and check the exit status.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - resolved executable, no shell
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=True,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL,
        )
    except subprocess.TimeoutExpired:
        timeout_value = resolved_options.timeout
        completed = subprocess.CompletedProcess(
            args=normalized,
            returncode=TIMEOUT_RETURNCODE,
            stdout="",
            stderr=f"Command timed out after {timeout_value:.1f}s" if timeout_value else "Command timed out",
        )

    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )
    return completed


__all__ = [
    "CommandOptions",
    "SubprocessExecutionError",
    "find_executable",
    "run_command",
]
