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
Tracks which lines of which hunks an annotator has explained.

Line indices here are 0-based and inclusive. The 1-based `lineRange` of a
ReviewGroup is converted on the way in.
"""

from collections.abc import Iterable, Mapping

from loguru import logger

from diffcover.constants import UNCOVERED_HEADER_MESSAGE, UNCOVERED_SUCCESS_MESSAGE
from diffcover.core.coverage.models import HunkCoverage, ReviewCoverage, UncoveredPortion
from diffcover.core.coverage.review import ReviewDocument, ReviewGroup
from diffcover.core.diff.data.indexed_hunk import IndexedHunk
from diffcover.core.diff.split.hunk_splitter import create_sub_hunk
from diffcover.core.exceptions import InvalidRangeError

Range = tuple[int, int]


def merge_ranges(ranges: Iterable[Range]) -> list[Range]:
    """Sort ranges and merge the ones that overlap or touch."""
    merged: list[Range] = []

    for start, end in sorted(ranges):
        if merged and start <= merged[-1][1] + 1:
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))

    return merged


def _uncovered_ranges(covered_ranges: list[Range], total_lines: int) -> list[Range]:
    uncovered: list[Range] = []
    current = 0

    for start, end in merge_ranges(covered_ranges):
        if current < start:
            uncovered.append((current, start - 1))
        current = end + 1

    if current < total_lines:
        uncovered.append((current, total_lines - 1))

    return uncovered


def _update_stats(coverage: ReviewCoverage) -> None:
    fully = 0
    partially = 0
    unexplained = 0

    for hunk_coverage in coverage.hunks.values():
        covered = hunk_coverage.covered_lines
        if covered >= hunk_coverage.total_lines:
            fully += 1
        elif covered > 0:
            partially += 1
        else:
            unexplained += 1

    coverage.total_hunks = len(coverage.hunks)
    coverage.fully_explained_hunks = fully
    coverage.partially_explained_hunks = partially
    coverage.unexplained_hunks = unexplained


def initialize_coverage(hunks: Iterable[IndexedHunk]) -> ReviewCoverage:
    coverage = ReviewCoverage(
        hunks={
            hunk.id: HunkCoverage(hunk_id=hunk.id, total_lines=len(hunk.lines))
            for hunk in hunks
        }
    )
    _update_stats(coverage)
    return coverage


def mark_covered(coverage: ReviewCoverage, hunk_id: int, start_line: int, end_line: int) -> None:
    """
    Record lines start_line..end_line (0-based, inclusive) of a hunk as explained.

    Unknown hunk ids are ignored. The range is clamped to the hunk's lines,
    and a range that is empty after clamping records nothing.
    """
    hunk_coverage = coverage.hunks.get(hunk_id)
    if hunk_coverage is None:
        logger.warning("Ignoring coverage for unknown hunk #{id}", id=hunk_id)
        return

    start = max(start_line, 0)
    end = min(end_line, hunk_coverage.total_lines - 1)
    if start > end:
        logger.warning(
            "Ignoring empty range [{a}, {b}] for hunk #{id} ({total} lines)",
            a=start_line,
            b=end_line,
            id=hunk_id,
            total=hunk_coverage.total_lines,
        )
        return
    if (start, end) != (start_line, end_line):
        logger.warning(
            "Clamped range [{a}, {b}] of hunk #{id} to [{start}, {end}]",
            a=start_line,
            b=end_line,
            id=hunk_id,
            start=start,
            end=end,
        )

    hunk_coverage.covered_ranges = merge_ranges([*hunk_coverage.covered_ranges, (start, end)])
    _update_stats(coverage)


def mark_hunk_fully_covered(coverage: ReviewCoverage, hunk_id: int) -> None:
    hunk_coverage = coverage.hunks.get(hunk_id)
    if hunk_coverage is None:
        logger.warning("Ignoring coverage for unknown hunk #{id}", id=hunk_id)
        return
    if hunk_coverage.total_lines == 0:
        return

    mark_covered(coverage, hunk_id, 0, hunk_coverage.total_lines - 1)


def update_coverage_from_group(coverage: ReviewCoverage, group: ReviewGroup) -> None:
    """Apply one review group. Its line_range is 1-based and inclusive."""
    if group.hunk_ids:
        for hunk_id in group.hunk_ids:
            mark_hunk_fully_covered(coverage, hunk_id)

    if group.hunk_id is not None:
        if group.line_range is not None:
            start, end = group.line_range
            mark_covered(coverage, group.hunk_id, start - 1, end - 1)
        else:
            mark_hunk_fully_covered(coverage, group.hunk_id)


def update_coverage_from_review(coverage: ReviewCoverage, document: ReviewDocument) -> None:
    for group in document.hunks:
        update_coverage_from_group(coverage, group)


def get_uncovered_portions(
    coverage: ReviewCoverage, hunks: Iterable[IndexedHunk]
) -> list[UncoveredPortion]:
    """List the unexplained ranges of each hunk, in the order of `hunks`."""
    portions: list[UncoveredPortion] = []

    for hunk in hunks:
        hunk_coverage = coverage.hunks.get(hunk.id)
        if hunk_coverage is None:
            continue

        ranges = _uncovered_ranges(hunk_coverage.covered_ranges, hunk_coverage.total_lines)
        if ranges:
            portions.append(
                UncoveredPortion(
                    hunk_id=hunk.id,
                    filename=hunk.filename,
                    uncovered_ranges=ranges,
                    total_uncovered_lines=sum(end - start + 1 for start, end in ranges),
                )
            )

    return portions


def format_uncovered_message(portions: list[UncoveredPortion]) -> str:
    if not portions:
        return UNCOVERED_SUCCESS_MESSAGE

    lines = [UNCOVERED_HEADER_MESSAGE]
    for portion in portions:
        ranges = ", ".join(
            f"line {start}" if start == end else f"lines {start}-{end}"
            for start, end in portion.uncovered_ranges
        )
        lines.append(f"  - Hunk #{portion.hunk_id} ({portion.filename}): {ranges}")

    return "\n".join(lines)


def resolve_group_hunks(
    group: ReviewGroup, hunk_map: Mapping[int, IndexedHunk]
) -> list[IndexedHunk]:
    """
    The hunks a review group refers to: full hunks for `hunk_ids`, and for
    `hunk_id` either the full hunk or the sub-hunk selected by `line_range`.

    An invalid line range falls back to the full hunk. Unknown ids are
    skipped.
    """
    resolved: list[IndexedHunk] = []

    if group.hunk_ids:
        for hunk_id in group.hunk_ids:
            hunk = hunk_map.get(hunk_id)
            if hunk is not None:
                resolved.append(hunk)

    if group.hunk_id is not None:
        hunk = hunk_map.get(group.hunk_id)
        if hunk is not None and group.line_range is not None:
            start, end = group.line_range
            try:
                resolved.append(create_sub_hunk(hunk, start - 1, end - 1))
            except InvalidRangeError as e:
                logger.debug(
                    "Showing full hunk #{id}: {message}", id=hunk.id, message=e.message
                )
                resolved.append(hunk)
        elif hunk is not None:
            resolved.append(hunk)

    return resolved
