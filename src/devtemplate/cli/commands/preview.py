# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command printing a merged descriptor without writing it."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ...errors import DevTemplateError
from ...generator import generate
from ..shared import CLIError, build_context, select_languages


def preview_command(
    templates: Annotated[
        list[str],
        typer.Argument(help="Templates to merge, e.g. 'rust,go' or 'rust go'.", show_default=False),
    ],
    debug: Annotated[bool, typer.Option("--debug", help="Stream diagnostic logs to stderr.")] = False,
) -> None:
    """Print the descriptor generated from TEMPLATES to stdout."""

    try:
        context = build_context(root=Path.cwd(), debug=debug)
        selection = select_languages(templates, logger=context.logger, stderr=True)
        try:
            generated = generate(selection.languages, options=context.config.render_options())
        except DevTemplateError as exc:
            context.logger.fail(str(exc))
            raise CLIError(str(exc)) from exc
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    typer.echo(generated.text, nl=False)
    for companion in generated.files:
        typer.echo(f"companion file {companion.name} is written by init only", err=True)


def register(app: typer.Typer) -> None:
    """Register the ``preview`` command on ``app``."""

    app.command(name="preview")(preview_command)


__all__ = ["preview_command", "register"]
