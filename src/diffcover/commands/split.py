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

from diffcover.commands.hunks import run_hunks
from diffcover.context import GlobalContext
from diffcover.core.diff.data.indexed_hunk import IndexedHunk
from diffcover.core.diff.index.hunk_indexer import create_hunk_map
from diffcover.core.diff.split.hunk_splitter import create_sub_hunk
from diffcover.core.exceptions import handle_diffcover_exception, unknown_hunk_id
from diffcover.runtimeutil import read_diff_input


def run_split(
    global_context: GlobalContext, diff_text: str, hunk_id: int, start: int, end: int
) -> IndexedHunk:
    """Cut lines start..end (1-based, inclusive) out of hunk `hunk_id`."""
    hunk_map = create_hunk_map(run_hunks(global_context, diff_text))

    hunk = hunk_map.get(hunk_id)
    if hunk is None:
        raise unknown_hunk_id(hunk_id)

    return create_sub_hunk(hunk, start - 1, end - 1)


def main(
    ctx: typer.Context,
    hunk_id: int = typer.Argument(..., help="Id of the hunk, as listed by `diffcover hunks`."),
    start: int = typer.Argument(..., help="First line of the hunk body to keep (1-based)."),
    end: int = typer.Argument(..., help="Last line of the hunk body to keep (1-based, inclusive)."),
    diff_file: Path | None = typer.Argument(
        None,
        help="File containing `git diff` output. Reads stdin when omitted.",
    ),
) -> None:
    """Print a standalone patch for part of a hunk.

    Examples:
        # lines 3 to 7 of hunk 2
        git diff | diffcover split 2 3 7
    """
    global_context: GlobalContext = ctx.obj

    with handle_diffcover_exception(exit_on_fail=True):
        sub_hunk = run_split(
            global_context, read_diff_input(diff_file), hunk_id, start, end
        )

    typer.echo(sub_hunk.raw_diff)
