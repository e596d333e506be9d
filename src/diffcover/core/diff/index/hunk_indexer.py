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
Assigns diff-wide ids to hunks.

Ids start at 1 and follow file-then-hunk order. They are only meaningful
within one indexing pass: re-indexing a different diff reuses the same ids
for different hunks.
"""

from collections.abc import Iterable, Sequence

from loguru import logger

from diffcover.constants import (
    AUTO_GENERATED_PATTERNS,
    DEV_NULL,
    IGNORED_FILES,
    UNKNOWN_FILENAME,
)
from diffcover.core.diff.data.indexed_hunk import IndexedHunk
from diffcover.core.diff.data.parsed_file import ParsedFile
from diffcover.core.diff.parse.git_diff_reader import parse_git_diff_files
from diffcover.core.diff.parse.patch_parser import DiffParser, parse_patch
from diffcover.core.diff.patch.patch_builder import build_patch, count_line_prefixes


def is_lockfile(filename: str) -> bool:
    base_name = filename.rsplit("/", 1)[-1]
    return base_name in IGNORED_FILES or base_name.endswith(".lock")


def is_auto_generated(filename: str) -> bool:
    return any(pattern.search(filename) for pattern in AUTO_GENERATED_PATTERNS)


def should_skip_file(filename: str, skip_generated: bool = True) -> bool:
    """Lockfiles are always skipped, auto-generated files unless skip_generated is off."""
    if is_lockfile(filename):
        return True
    return skip_generated and is_auto_generated(filename)


def indexed_filename(file: ParsedFile) -> str:
    if file.new_file_name and file.new_file_name != DEV_NULL:
        return file.new_file_name
    return file.old_file_name or UNKNOWN_FILENAME


def create_hunk(
    id: int,
    filename: str,
    hunk_index: int,
    old_start: int,
    new_start: int,
    lines: Sequence[str],
) -> IndexedHunk:
    """
    Build an IndexedHunk from its lines, counting the old and new spans and
    rendering its standalone patch.
    """
    lines = tuple(lines)
    old_lines, new_lines = count_line_prefixes(lines)

    return IndexedHunk(
        id=id,
        filename=filename,
        hunk_index=hunk_index,
        old_start=old_start,
        old_lines=old_lines,
        new_start=new_start,
        new_lines=new_lines,
        lines=lines,
        raw_diff=build_patch(filename, old_start, new_start, lines),
    )


def index_hunks(files: Iterable[ParsedFile], skip_generated: bool = True) -> list[IndexedHunk]:
    """
    Flatten parsed files into indexed hunks, skipping lockfiles and
    auto-generated files.

    The header counts of the parsed hunk are kept as they are. Each hunk's
    raw_diff is a self-contained patch built from its lines.
    """
    hunks: list[IndexedHunk] = []
    next_id = 1

    for file in files:
        filename = indexed_filename(file)

        if should_skip_file(filename, skip_generated=skip_generated):
            logger.debug("Skipping {filename}: lockfile or generated", filename=filename)
            continue

        for hunk_index, hunk in enumerate(file.hunks):
            lines = tuple(hunk.lines)
            hunks.append(
                IndexedHunk(
                    id=next_id,
                    filename=filename,
                    hunk_index=hunk_index,
                    old_start=hunk.old_start,
                    old_lines=hunk.old_lines,
                    new_start=hunk.new_start,
                    new_lines=hunk.new_lines,
                    lines=lines,
                    raw_diff=build_patch(filename, hunk.old_start, hunk.new_start, lines),
                )
            )
            next_id += 1

    logger.debug("Indexed {count} hunks", count=len(hunks))
    return hunks


def parse_hunks_with_ids(
    raw_diff: str, parser: DiffParser = parse_patch, skip_generated: bool = True
) -> list[IndexedHunk]:
    """Preprocess, parse and index raw `git diff` output in one call."""
    files = parse_git_diff_files(raw_diff, parser=parser)
    return index_hunks(files, skip_generated=skip_generated)


def create_hunk_map(hunks: Iterable[IndexedHunk]) -> dict[int, IndexedHunk]:
    return {hunk.id: hunk for hunk in hunks}
