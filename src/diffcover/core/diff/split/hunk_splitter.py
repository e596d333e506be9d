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
Splits a hunk into a smaller, independently valid hunk.

A sub-hunk keeps the id, filename and hunk index of the hunk it came from.
Its start lines are shifted by the old and new lines consumed before the
slice, and its counts and raw_diff are rebuilt from the slice itself.
"""

from collections.abc import Sequence
from typing import NamedTuple

from loguru import logger

from diffcover.core.diff.data.indexed_hunk import IndexedHunk
from diffcover.core.diff.patch.patch_builder import build_patch, count_line_prefixes
from diffcover.core.exceptions import invalid_range


class LineOffsets(NamedTuple):
    old_offset: int
    new_offset: int


def calculate_line_offsets(lines: Sequence[str], up_to_index: int) -> LineOffsets:
    """
    Count the old-file and new-file lines consumed by lines[0:up_to_index].

    An index past the end of `lines` counts every line.
    """
    return LineOffsets(*count_line_prefixes(lines[: max(up_to_index, 0)]))


def create_sub_hunk(hunk: IndexedHunk, start_idx: int, end_idx: int) -> IndexedHunk:
    """
    Extract hunk.lines[start_idx..end_idx] (0-based, inclusive) as its own hunk.

    The range is clamped to the hunk's lines first.

    Raises:
        InvalidRangeError: if start_idx > end_idx after clamping
    """
    start = max(start_idx, 0)
    end = min(end_idx, len(hunk.lines) - 1)

    if (start, end) != (start_idx, end_idx):
        logger.debug(
            "Clamped range [{a}, {b}] of hunk #{id} to [{start}, {end}]",
            a=start_idx,
            b=end_idx,
            id=hunk.id,
            start=start,
            end=end,
        )

    if start > end:
        raise invalid_range(start, end)

    sub_lines = hunk.lines[start : end + 1]
    old_offset, new_offset = calculate_line_offsets(hunk.lines, start)
    old_start = hunk.old_start + old_offset
    new_start = hunk.new_start + new_offset
    old_lines, new_lines = count_line_prefixes(sub_lines)

    return IndexedHunk(
        id=hunk.id,
        filename=hunk.filename,
        hunk_index=hunk.hunk_index,
        old_start=old_start,
        old_lines=old_lines,
        new_start=new_start,
        new_lines=new_lines,
        lines=tuple(sub_lines),
        raw_diff=build_patch(hunk.filename, old_start, new_start, sub_lines),
    )
