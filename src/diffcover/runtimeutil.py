# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import importlib.metadata
import sys
from pathlib import Path

import typer

from diffcover.constants import APP_NAME, LOG_DIR
from diffcover.core.exceptions import DiffInputError


def ensure_utf8_output():
    # force utf-8 encoding
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8")


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        try:
            version = importlib.metadata.version(APP_NAME)
            typer.echo(f"{APP_NAME} version {version}")
        except importlib.metadata.PackageNotFoundError:
            typer.echo(f"{APP_NAME} version: development")
        raise typer.Exit()


def get_log_dir_callback(value: bool):
    """Show the log directory and exit."""
    if value:
        typer.echo(str(LOG_DIR))
        raise typer.Exit()


def read_diff_input(diff_file: Path | None) -> str:
    """
    Read diff text from a file, or from stdin when no file (or "-") is given.

    Raises:
        DiffInputError: if the file is missing or not valid UTF-8
    """
    if diff_file is None or str(diff_file) == "-":
        return sys.stdin.read()

    if not diff_file.is_file():
        raise DiffInputError(f"Diff file not found: {diff_file}")

    try:
        return diff_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DiffInputError(f"Diff file is not valid UTF-8: {diff_file}", str(e)) from e
