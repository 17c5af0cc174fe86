# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command writing a merged environment into a directory."""

from __future__ import annotations

import dataclasses
from pathlib import Path
from typing import Annotated

import typer

from ...errors import DevTemplateError
from ...generator import GeneratedEnvironment, generate
from ...workspace import WriteResult, write_environment
from ..shared import CLIError, CLILogger, build_context, select_languages


def init_command(
    templates: Annotated[
        list[str],
        typer.Argument(help="Templates to merge, e.g. 'rust,go' or 'rust go'.", show_default=False),
    ],
    path: Annotated[
        Path,
        typer.Option("--path", "-p", help="Directory receiving the environment.", file_okay=False),
    ] = Path("."),
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing descriptor.")] = False,
    no_format: Annotated[bool, typer.Option("--no-format", help="Skip the formatter pass.")] = False,
    no_emoji: Annotated[bool, typer.Option("--no-emoji", help="Disable emoji in console output.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Stream diagnostic logs to stderr.")] = False,
) -> None:
    """Generate a development environment in PATH from one or more templates."""

    try:
        context = build_context(root=Path.cwd(), no_emoji=no_emoji, debug=debug)
        logger = context.logger
        selection = select_languages(templates, logger=logger)
        options = context.config.write_options()
        options = dataclasses.replace(
            options,
            overwrite=options.overwrite or force,
            format=options.format and not no_format,
        )
        logger.debug(f"init languages={','.join(selection.languages)} target={path}")
        try:
            generated = generate(selection.languages, options=context.config.render_options())
            result = write_environment(path, generated.text, generated.files, options)
        except DevTemplateError as exc:
            logger.fail(str(exc))
            raise CLIError(str(exc)) from exc
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc

    _report(generated, result, path, logger=logger)


def _report(generated: GeneratedEnvironment, result: WriteResult, path: Path, *, logger: CLILogger) -> None:
    for warning in result.warnings:
        logger.warn(warning)
    for skipped in result.skipped:
        logger.warn(f"Keeping existing {skipped.name}")
    for written in result.written[1:]:
        logger.info(f"Wrote {written.name}")
    if generated.is_multi_language:
        logger.ok(f"Initialized multi-language template ({','.join(generated.languages)}) in {path}")
    else:
        logger.ok(f"Initialized {generated.languages[0]} template in {path}")


def register(app: typer.Typer) -> None:
    """Register the ``init`` command on ``app``."""

    app.command(name="init")(init_command)


__all__ = ["init_command", "register"]
