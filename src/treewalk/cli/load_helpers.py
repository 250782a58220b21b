from __future__ import annotations

"""Shared helper for loading settings with CLI-friendly errors."""

import typer
from rich.console import Console
from rich.markup import escape

from treewalk.cli.paths import resolve_settings_path
from treewalk.config import Settings
from treewalk.errors import SettingsError
from treewalk.io import load_settings


def load_settings_or_exit(
    path: str | None,
    *,
    console: Console,
    verbose_errors: bool = False,
) -> Settings:
    resolved = resolve_settings_path(path)
    try:
        return load_settings(resolved)
    except SettingsError as err:
        if verbose_errors and err.cause:
            console.print(f"[red]Failed to load settings:[/red] {escape(err.message)}\n{escape(str(err.cause))}")
        else:
            console.print(f"[red]Failed to load settings:[/red] {escape(str(err))}")
        raise typer.Exit(code=1)


__all__ = ["load_settings_or_exit"]
