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

from dataclasses import dataclass, field

from pydantic import BaseModel, Field


class HunkCoverage(BaseModel):
    """Explained lines of one hunk."""

    hunk_id: int
    total_lines: int
    # 0-based inclusive, kept sorted and merged
    covered_ranges: list[tuple[int, int]] = Field(default_factory=list)

    @property
    def covered_lines(self) -> int:
        return sum(end - start + 1 for start, end in self.covered_ranges)


class ReviewCoverage(BaseModel):
    """
    Coverage state for a whole review.

    The aggregate counts are derived from `hunks` and are recomputed by the
    tracker after every change. Instances are mutable and not thread-safe.
    """

    hunks: dict[int, HunkCoverage] = Field(default_factory=dict)
    total_hunks: int = 0
    fully_explained_hunks: int = 0
    partially_explained_hunks: int = 0
    unexplained_hunks: int = 0


@dataclass
class UncoveredPortion:
    hunk_id: int
    filename: str
    uncovered_ranges: list[tuple[int, int]] = field(default_factory=list)
    total_uncovered_lines: int = 0
