# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""CLI command describing the parsed sections of a single template."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from ...catalog import default_catalog
from ...errors import DevTemplateError
from ...fragments import ParsedFragment, parse
from ..shared import CLIError, build_cli_logger


def show_command(
    template: Annotated[str, typer.Argument(help="Template to describe.", show_default=False)],
) -> None:
    """Show the inputs, packages, and environment contributed by TEMPLATE."""

    logger = build_cli_logger(emoji=True)
    try:
        try:
            fragment = parse(default_catalog().get(template.strip()))
        except DevTemplateError as exc:
            logger.fail(str(exc))
            raise CLIError(str(exc)) from exc
    except CLIError as exc:
        raise typer.Exit(code=exc.exit_code) from exc
    logger.console.print(build_table(fragment))


def build_table(fragment: ParsedFragment) -> Table:
    """Return a two-column table describing ``fragment``."""

    table = Table(title=f"{fragment.language}: {fragment.description}", show_lines=True)
    table.add_column("Section", style="bold")
    table.add_column("Value")
    inputs = []
    for source in fragment.sources:
        follows = ", ".join(f"{dep} -> {target}" for dep, target in source.sub_overrides.items())
        inputs.append(f"{source.name} = {source.locator}" + (f" (follows {follows})" if follows else ""))
    table.add_row("Inputs", "\n".join(inputs) or "-")
    table.add_row("Overlays", "\n".join(overlay.expression for overlay in fragment.overlays) or "-")
    table.add_row("Overlay attributes", "\n".join(binding.name for binding in fragment.overlay_bindings) or "-")
    packages = [
        entry.identifier if entry.platform is None else f"{entry.identifier} ({entry.platform.value})"
        for entry in fragment.packages
    ]
    table.add_row("Packages", "\n".join(packages) or "-")
    table.add_row("Environment", "\n".join(f"{var.name} = {var.expression}" for var in fragment.env) or "-")
    table.add_row("Shell hook", "yes" if fragment.setup is not None else "no")
    table.add_row("Allow unfree", "yes" if fragment.allow_unfree else "no")
    table.add_row("Files", "\n".join(companion.name for companion in fragment.files) or "-")
    return table


def register(app: typer.Typer) -> None:
    """Register the ``show`` command on ``app``."""

    app.command(name="show")(show_command)


__all__ = ["build_table", "register", "show_command"]
