# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared utilities for CLI commands (logging, errors, selection handling)."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from ..config import GeneratorConfig, load_config
from ..errors import ConfigError
from ..generator import LanguageSelection, split_languages
from ..logging import fail as core_fail
from ..logging import info as core_info
from ..logging import ok as core_ok
from ..logging import warn as core_warn

PACKAGE_LOGGER: Final[str] = "devtemplate"
_DEBUG_MARKER: Final[str] = "_devtemplate_debug_configured"


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        """Initialise the error with a message and exit code.

        Args:
            message: Human-readable error message shown to the user.
            exit_code: Exit status associated with the failure.
        """

        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLILogger:
    """Adapter around project logging helpers respecting CLI emoji settings."""

    console: Console
    use_emoji: bool
    use_color: bool = True
    debug_enabled: bool = False
    _key_value_re: re.Pattern[str] = field(default=re.compile(r"([\w-]+)=(\".*?\"|\S+)"), repr=False)

    def fail(self, message: str) -> None:
        """Log a failure message honouring emoji preferences."""

        core_fail(message, use_emoji=self.use_emoji, use_color=self._color())

    def warn(self, message: str) -> None:
        """Log a warning message honouring emoji preferences."""

        core_warn(message, use_emoji=self.use_emoji, use_color=self._color())

    def ok(self, message: str) -> None:
        """Log a success message honouring emoji preferences."""

        core_ok(message, use_emoji=self.use_emoji, use_color=self._color())

    def info(self, message: str) -> None:
        """Log an informational message honouring emoji preferences."""

        core_info(message, use_emoji=self.use_emoji, use_color=self._color())

    def echo(self, message: str) -> None:
        """Write ``message`` to stdout using Typer's echo helper."""

        typer.echo(message)

    def debug(self, message: str) -> None:
        """Emit a debug message when debug logging is enabled.

        Args:
            message: Debug payload; ``key=value`` pairs are highlighted.
        """

        if not self.debug_enabled:
            return
        text = Text("[debug] ", style="bold cyan")
        cursor = 0
        for match in self._key_value_re.finditer(message):
            start, end = match.span()
            if start > cursor:
                text.append(message[cursor:start], style="dim")
            text.append(match.group(1), style="bold magenta")
            text.append("=", style="dim")
            text.append(match.group(2), style="bold green")
            cursor = end
        if cursor < len(message):
            text.append(message[cursor:], style="dim")
        self.console.print(text)

    def _color(self) -> bool | None:
        return None if self.use_color else False


def build_cli_logger(*, emoji: bool, debug: bool = False, no_color: bool = False) -> CLILogger:
    """Return a ``CLILogger`` configured for the provided presentation preferences.

    Args:
        emoji: Whether log output may include emoji glyphs.
        debug: Whether debug logging should be enabled.
        no_color: Whether terminal colour output should be disabled.

    Returns:
        CLILogger: Logger instance bound to a dedicated Rich console.
    """

    console = Console(no_color=no_color, highlight=False, soft_wrap=True)
    return CLILogger(console=console, use_emoji=emoji, use_color=not no_color, debug_enabled=debug)


def configure_debug_logging(enabled: bool) -> None:
    """Stream ``devtemplate`` library diagnostics to stderr when ``enabled``."""

    if not enabled:
        return
    logger = logging.getLogger(PACKAGE_LOGGER)
    if getattr(logger, _DEBUG_MARKER, False):
        return
    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    setattr(logger, _DEBUG_MARKER, True)


@dataclass(slots=True)
class CommandContext:
    """Resolved configuration and logger shared by one command invocation."""

    config: GeneratorConfig
    logger: CLILogger


def build_context(*, root: Path, no_emoji: bool = False, debug: bool = False) -> CommandContext:
    """Load configuration for ``root`` and build the matching logger.

    Raises:
        CLIError: If the configuration cannot be loaded.
    """

    configure_debug_logging(debug)
    try:
        config = load_config(root)
    except ConfigError as exc:
        build_cli_logger(emoji=not no_emoji).fail(str(exc))
        raise CLIError(str(exc)) from exc
    logger = build_cli_logger(
        emoji=config.console.emoji and not no_emoji,
        debug=debug,
        no_color=not config.console.color,
    )
    logger.debug(f"config filename={config.output.filename} format={config.output.format}")
    return CommandContext(config=config, logger=logger)


def select_languages(raw: Sequence[str], *, logger: CLILogger, stderr: bool = False) -> LanguageSelection:
    """Normalise ``raw`` template arguments, warning about dropped duplicates.

    Raises:
        CLIError: If no template identifier remains.
    """

    selection = split_languages(raw)
    for duplicate in dict.fromkeys(selection.duplicates):
        message = f"Ignoring duplicate template '{duplicate}'"
        if stderr:
            typer.echo(message, err=True)
        else:
            logger.warn(message)
    if not selection.languages:
        logger.fail("No templates selected")
        raise CLIError("No templates selected")
    return selection


__all__ = [
    "CLIError",
    "CLILogger",
    "CommandContext",
    "build_cli_logger",
    "build_context",
    "configure_debug_logging",
    "select_languages",
]
