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

from collections.abc import Iterable
from xml.sax.saxutils import quoteattr

from diffcover.core.diff.data.indexed_hunk import IndexedHunk


def format_hunks_context(hunks: Iterable[IndexedHunk]) -> str:
    """
    Render hunks for an annotator, one `<hunk>` element per hunk.

    Body lines are numbered like `cat -n` (1-based, right-aligned, then a
    tab) so an annotator can refer to them with a 1-based `lineRange`.
    """
    output: list[str] = []

    for hunk in hunks:
        output.append(
            f"<hunk id=\"{hunk.id}\" file={quoteattr(hunk.filename)} "
            f"totalLines=\"{len(hunk.lines)}\">"
        )
        width = len(str(len(hunk.lines)))
        for number, line in enumerate(hunk.lines, start=1):
            output.append(f"{number:>{width}}\t{line}")
        output.append("</hunk>")
        output.append("")

    return "\n".join(output)
