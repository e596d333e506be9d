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

"""
Builds standalone unified-diff text for a single hunk.

The output always carries its own `---`/`+++` file headers so that every
hunk (or sub-hunk) can be parsed or applied without the rest of its file.
"""

from collections.abc import Iterable
from typing import NamedTuple


class LineCounts(NamedTuple):
    old_lines: int
    new_lines: int


def count_line_prefixes(lines: Iterable[str]) -> LineCounts:
    """
    Count how many old-file and new-file lines a run of hunk lines spans.

    Context lines count for both sides, removals for the old side only and
    additions for the new side only. Any other prefix is ignored.
    """
    old_lines = 0
    new_lines = 0

    for line in lines:
        prefix = line[:1]
        if prefix == " ":
            old_lines += 1
            new_lines += 1
        elif prefix == "-":
            old_lines += 1
        elif prefix == "+":
            new_lines += 1

    return LineCounts(old_lines, new_lines)


def format_hunk_header(old_start: int, old_lines: int, new_start: int, new_lines: int) -> str:
    return f"@@ -{old_start},{old_lines} +{new_start},{new_lines} @@"


def build_patch(filename: str, old_start: int, new_start: int, lines: Iterable[str]) -> str:
    """
    Build a valid unified diff for one hunk.

    Args:
        filename: File path without the a/ or b/ prefix
        old_start: Starting line number in the old file
        new_start: Starting line number in the new file
        lines: Hunk lines with their ' ', '-' or '+' prefix

    Returns:
        The patch text. Header counts are derived from `lines`.
    """
    lines = list(lines)
    old_lines, new_lines = count_line_prefixes(lines)

    header = "\n".join(
        [
            f"--- a/{filename}",
            f"+++ b/{filename}",
            format_hunk_header(old_start, old_lines, new_start, new_lines),
        ]
    )

    return header + "\n" + "\n".join(lines)
