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
from enum import Enum
from typing import NamedTuple

from diffcover.constants import DEV_NULL, UNKNOWN_FILENAME
from diffcover.core.diff.data.parsed_file import ParsedFile, ParsedHunk


class FileStatus(str, Enum):
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    MODIFIED = "modified"


class ChangeCounts(NamedTuple):
    additions: int
    deletions: int


def _is_missing(name: str | None) -> bool:
    return not name or name == DEV_NULL


def get_file_status(file: ParsedFile) -> FileStatus:
    """
    Classify a parsed file. Checks run in order and the first match wins:
    added, deleted, renamed by metadata, renamed by differing names, modified.
    """
    if _is_missing(file.old_file_name):
        return FileStatus.ADDED
    if _is_missing(file.new_file_name):
        return FileStatus.DELETED
    if file.rename_from and file.rename_to:
        return FileStatus.RENAMED
    if file.old_file_name != file.new_file_name:
        return FileStatus.RENAMED
    return FileStatus.MODIFIED


def get_file_name(file: ParsedFile) -> str:
    """Display name of a file: the rename target, else whichever side is not /dev/null."""
    if file.rename_to:
        return file.rename_to
    if not _is_missing(file.new_file_name):
        return file.new_file_name
    if not _is_missing(file.old_file_name):
        return file.old_file_name
    return UNKNOWN_FILENAME


def get_old_file_name(file: ParsedFile) -> str | None:
    """Previous path of a renamed or copied file, or None when the path did not change."""
    if file.rename_from:
        return file.rename_from

    old_name = file.old_file_name
    new_name = file.new_file_name
    if _is_missing(old_name) or _is_missing(new_name) or old_name == new_name:
        return None
    return old_name


def count_changes(hunks: Iterable[ParsedHunk]) -> ChangeCounts:
    additions = 0
    deletions = 0

    for hunk in hunks:
        for line in hunk.lines:
            if line.startswith("+"):
                additions += 1
            elif line.startswith("-"):
                deletions += 1

    return ChangeCounts(additions, deletions)
