# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command listing the available templates."""

from __future__ import annotations

from typing import Annotated

import typer

from ...catalog import default_catalog
from ...errors import DevTemplateError
from ...fragments import parse
from ...logging import colorize
from ..shared import CLIError, CLILogger, build_cli_logger


def list_command(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show the catalog checksum and per-template contents."),
    ] = False,
) -> None:
    """List every template that can be passed to ``init``."""

    logger = build_cli_logger(emoji=False)
    try:
        _emit_catalog(verbose=verbose, logger=logger)
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc


def _emit_catalog(*, verbose: bool, logger: CLILogger) -> None:
    try:
        catalog = default_catalog()
        logger.echo("Available templates:")
        for raw in catalog.fragments():
            line = f"  {colorize(raw.language, 'cyan', True)} - {raw.description}"
            if verbose:
                fragment = parse(raw)
                line += (
                    f" [{len(fragment.packages)} packages, {len(fragment.sources)} inputs,"
                    f" {len(fragment.env)} env]"
                )
            logger.echo(line)
    except DevTemplateError as exc:
        logger.fail(str(exc))
        raise CLIError(str(exc)) from exc
    if verbose:
        logger.echo("")
        logger.echo(f"Catalog checksum: {catalog.checksum}")


def register(app: typer.Typer) -> None:
    """Register the ``list`` command on ``app``."""

    app.command(name="list")(list_command)


__all__ = ["list_command", "register"]
