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
from enum import Enum


class RenameType(str, Enum):
    """Kind of git path move recorded in a diff section's extended headers."""

    RENAME = "rename"
    COPY = "copy"


@dataclass(frozen=True)
class RenameInfo:
    type: RenameType
    from_path: str
    to_path: str
    similarity: int = 100


@dataclass
class FileSection:
    """
    The lines of one `diff --git` section of a raw diff.

    `index` is the section's position in the raw diff and is carried through
    parsing so rename metadata is joined back to the right file.
    """

    index: int
    lines: list[str]
    rename_info: RenameInfo | None = None
    has_file_headers: bool = False

    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass
class ParsedHunk:
    old_start: int
    old_lines: int
    new_start: int
    new_lines: int
    # each line keeps its ' ', '-', '+' (or '\') prefix
    lines: list[str] = field(default_factory=list)


@dataclass
class ParsedFile:
    old_file_name: str | None = None
    new_file_name: str | None = None
    hunks: list[ParsedHunk] = field(default_factory=list)
    # merged in from RenameInfo, copies use the same fields
    rename_from: str | None = None
    rename_to: str | None = None
    similarity: int | None = None

    def attach_rename_info(self, info: RenameInfo) -> None:
        self.rename_from = info.from_path
        self.rename_to = info.to_path
        self.similarity = info.similarity
