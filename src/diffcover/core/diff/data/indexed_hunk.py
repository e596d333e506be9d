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

from dataclasses import dataclass

from diffcover.core.diff.patch.patch_builder import format_hunk_header


@dataclass(frozen=True)
class IndexedHunk:
    """
    A single hunk with an id that is unique across the whole diff.

    Attributes:
        id: 1-based id, assigned in file-then-hunk order during one indexing pass
        filename: Display path of the file the hunk belongs to
        hunk_index: Position of the hunk within its file (0-based)
        old_start: First line of the hunk in the old file
        old_lines: Number of old-file lines the hunk spans
        new_start: First line of the hunk in the new file
        new_lines: Number of new-file lines the hunk spans
        lines: Hunk body lines, each with its ' ', '-' or '+' prefix
        raw_diff: Standalone unified diff containing only this hunk
    """

    id: int
    filename: str
    hunk_index: int
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    lines: tuple[str, ...]
    raw_diff: str

    @property
    def header(self) -> str:
        return format_hunk_header(
            self.old_start, self.old_lines, self.new_start, self.new_lines
        )
