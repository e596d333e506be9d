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
Normalizes git's extended diff headers before generic parsing.

A pure rename or copy (`similarity index 100%`) has no `---`/`+++` lines, so
a plain unified-diff parser would drop it. Such sections get synthetic file
headers, and the rename/copy metadata of every section is collected by the
section's position in the diff.
"""

import re
from dataclasses import dataclass, field

from loguru import logger

from diffcover.core.diff.data.parsed_file import FileSection, RenameInfo, RenameType
from diffcover.core.diff.parse.patch_parser import unquote_git_path

SECTION_MARKER = "diff --git "

_SIMILARITY_RE = re.compile(r"^similarity index (\d+)%")
_PATH_KEYWORDS = {
    "rename from ": (RenameType.RENAME, "from"),
    "rename to ": (RenameType.RENAME, "to"),
    "copy from ": (RenameType.COPY, "from"),
    "copy to ": (RenameType.COPY, "to"),
}
_SUBMODULE_PATTERNS = (
    re.compile(r"^Submodule \S+ [a-f0-9]+\.\.[a-f0-9]+:?$"),
    re.compile(r"^Submodule \S+ contains (modified|untracked) content$"),
    re.compile(r"^Submodule \S+ \(.*\)$"),
)


@dataclass
class PreprocessedDiff:
    processed_diff: str
    rename_info: dict[int, RenameInfo] = field(default_factory=dict)
    sections: list[FileSection] = field(default_factory=list)


def strip_submodule_headers(diff_text: str) -> str:
    """
    Drop the status lines `git diff --submodule=diff` prints for submodules.

    Examples of removed lines:
        Submodule errore 1bf6fc8..d746b25:
        Submodule unframer contains modified content
        Submodule vendor (new commits)
    """
    return "\n".join(
        line
        for line in diff_text.split("\n")
        if not any(pattern.match(line) for pattern in _SUBMODULE_PATTERNS)
    )


def split_sections(lines: list[str]) -> tuple[list[str], list[FileSection]]:
    """Split diff lines into the preamble and one FileSection per `diff --git` marker."""
    preamble: list[str] = []
    sections: list[FileSection] = []

    for line in lines:
        if line.startswith(SECTION_MARKER):
            sections.append(FileSection(index=len(sections), lines=[line]))
        elif sections:
            sections[-1].lines.append(line)
        else:
            preamble.append(line)

    return preamble, sections


def _scan_section(section: FileSection) -> None:
    """Fill in rename_info and has_file_headers from the section's extended headers."""
    rename_type: RenameType | None = None
    paths: dict[str, str] = {}
    similarity: int | None = None

    for line in section.lines:
        if line.startswith("@@ "):
            break
        if line.startswith("--- "):
            section.has_file_headers = True
            continue

        match = _SIMILARITY_RE.match(line)
        if match:
            similarity = int(match.group(1))
            continue

        for keyword, (kind, side) in _PATH_KEYWORDS.items():
            if line.startswith(keyword):
                rename_type = kind
                paths[side] = unquote_git_path(line[len(keyword) :].rstrip("\r"))
                break

    if rename_type is not None and "from" in paths and "to" in paths:
        section.rename_info = RenameInfo(
            type=rename_type,
            from_path=paths["from"],
            to_path=paths["to"],
            similarity=similarity if similarity is not None else 100,
        )


def _with_synthetic_headers(section: FileSection) -> list[str]:
    info = section.rename_info
    lines = list(section.lines)

    # keep trailing blank lines (the diff's final newline) at the end
    insert_at = len(lines)
    while insert_at > 0 and lines[insert_at - 1] == "":
        insert_at -= 1

    lines[insert_at:insert_at] = [f"--- {info.from_path}", f"+++ {info.to_path}"]
    return lines


def preprocess_diff(raw_diff: str) -> PreprocessedDiff:
    """
    Make every rename/copy section visible to a generic unified-diff parser.

    Sections that carry both a source and a destination path but no `---`
    line get `--- {from}` / `+++ {to}` appended. Sections without rename or
    copy keywords are passed through untouched, and running this on its own
    output changes nothing.

    Args:
        raw_diff: Output of `git diff` (any prefix style)

    Returns:
        PreprocessedDiff with the rewritten text, the RenameInfo keyed by
        section index, and the sections themselves.
    """
    if not raw_diff:
        return PreprocessedDiff(processed_diff="")

    preamble, sections = split_sections(raw_diff.split("\n"))
    output = list(preamble)
    rename_info: dict[int, RenameInfo] = {}

    for section in sections:
        _scan_section(section)

        if section.rename_info is None:
            output.extend(section.lines)
            continue

        rename_info[section.index] = section.rename_info
        if section.has_file_headers:
            output.extend(section.lines)
        else:
            logger.debug(
                "Adding file headers for pure {kind} {src} -> {dst}",
                kind=section.rename_info.type.value,
                src=section.rename_info.from_path,
                dst=section.rename_info.to_path,
            )
            section.lines = _with_synthetic_headers(section)
            section.has_file_headers = True
            output.extend(section.lines)

    return PreprocessedDiff(
        processed_diff="\n".join(output),
        rename_info=rename_info,
        sections=sections,
    )
