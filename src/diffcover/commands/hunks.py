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

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from diffcover.context import GlobalContext
from diffcover.core.diff.data.indexed_hunk import IndexedHunk
from diffcover.core.diff.index.hunk_context import format_hunks_context
from diffcover.core.diff.index.hunk_indexer import parse_hunks_with_ids
from diffcover.core.exceptions import handle_diffcover_exception
from diffcover.core.logging.utils import log_hunks, time_block
from diffcover.runtimeutil import read_diff_input


def run_hunks(global_context: GlobalContext, diff_text: str) -> list[IndexedHunk]:
    with time_block("Index hunks"):
        hunks = parse_hunks_with_ids(
            diff_text, skip_generated=global_context.config.skip_generated
        )
    log_hunks("Indexed", hunks)
    return hunks


def render_hunk_table(hunks: list[IndexedHunk], max_hunk_lines: int | None) -> Table:
    table = Table(title=f"{len(hunks)} hunks")
    table.add_column("ID", justify="right")
    table.add_column("File")
    table.add_column("Header")
    table.add_column("Lines", justify="right")

    for hunk in hunks:
        size = str(len(hunk.lines))
        if max_hunk_lines is not None and len(hunk.lines) > max_hunk_lines:
            size += " (large)"
        table.add_row(str(hunk.id), hunk.filename, hunk.header, size)

    return table


def main(
    ctx: typer.Context,
    diff_file: Path | None = typer.Argument(
        None,
        help="File containing `git diff` output. Reads stdin when omitted.",
    ),
    xml: bool = typer.Option(
        False,
        "--xml",
        help="Print numbered <hunk> blocks for an annotator instead of a table.",
    ),
) -> None:
    """List the hunks of a diff with their ids.

    Examples:
        git diff | diffcover hunks

        diffcover hunks changes.diff --xml
    """
    global_context: GlobalContext = ctx.obj

    with handle_diffcover_exception(exit_on_fail=True):
        hunks = run_hunks(global_context, read_diff_input(diff_file))

    if xml:
        typer.echo(format_hunks_context(hunks))
        return

    Console().print(render_hunk_table(hunks, global_context.config.max_hunk_lines))
