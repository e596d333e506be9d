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
Count-driven parser for unified diff text.

Hunk bodies are consumed by the counts in their `@@` header, so body lines
that happen to look like `---`, `+++` or `@@` headers are never treated as
structure.
"""

import re
from typing import Protocol

from loguru import logger

from diffcover.constants import DEV_NULL
from diffcover.core.diff.data.parsed_file import ParsedFile, ParsedHunk
from diffcover.core.exceptions import DiffParseError, truncated_hunk

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_GIT_ESCAPE_RE = re.compile(r"\\([0-7]{1,3}|.)")
_QUOTED_PAIR_RE = re.compile(r'^("(?:[^"\\]|\\.)*") ("(?:[^"\\]|\\.)*")$')
_GIT_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    '"': '"',
    "\\": "\\",
}


class DiffParser(Protocol):
    """Anything that turns unified diff text into parsed files, in order."""

    def __call__(self, text: str) -> list[ParsedFile]: ...


def unquote_git_path(path: str) -> str:
    """
    Undo git's C-style quoting of a path ("a b.ts", "caf\\303\\251.ts").

    Unquoted paths are returned unchanged.
    """
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    inner = path[1:-1]
    out = bytearray()
    pos = 0
    for match in _GIT_ESCAPE_RE.finditer(inner):
        out.extend(inner[pos : match.start()].encode("utf-8"))
        escape = match.group(1)
        if escape[0] in "01234567":
            out.append(int(escape, 8) & 0xFF)
        else:
            out.extend(_GIT_ESCAPES.get(escape, escape).encode("utf-8"))
        pos = match.end()
    out.extend(inner[pos:].encode("utf-8"))

    return out.decode("utf-8", errors="replace")


def _header_name(line: str, marker: str) -> str:
    name = line[len(marker) :]
    name = name.split("\t", 1)[0].rstrip("\r")
    return unquote_git_path(name)


def _git_line_paths(git_line: str) -> tuple[str, str] | None:
    """
    Split a `diff --git` line into its two paths.

    Only lines whose two paths can be told apart are split: both quoted, or
    unquoted halves of equal length (the same path on both sides, as for
    added and deleted files).
    """
    rest = git_line[len("diff --git ") :].rstrip("\r")

    match = _QUOTED_PAIR_RE.match(rest)
    if match:
        return unquote_git_path(match.group(1)), unquote_git_path(match.group(2))

    half = len(rest) // 2
    if len(rest) % 2 == 1 and rest[half] == " ":
        return rest[:half], rest[half + 1 :]
    return None


def _has_git_prefixes(old_name: str, new_name: str, git_line: str | None) -> bool:
    if old_name == new_name == DEV_NULL:
        return False

    if DEV_NULL in (old_name, new_name) and git_line is not None:
        # `--no-prefix` output keeps the real path on the other side
        paths = _git_line_paths(git_line)
        if paths is not None:
            old_path, new_path = paths
            return (
                old_path.startswith("a/")
                and new_path.startswith("b/")
                and old_path[2:] == new_path[2:]
            )

    old_prefixed = old_name.startswith("a/") or old_name == DEV_NULL
    new_prefixed = new_name.startswith("b/") or new_name == DEV_NULL
    return old_prefixed and new_prefixed


def _strip_git_prefixes(
    old_name: str, new_name: str, git_line: str | None = None
) -> tuple[str, str]:
    if not _has_git_prefixes(old_name, new_name, git_line):
        return old_name, new_name

    if old_name != DEV_NULL:
        old_name = old_name[2:]
    if new_name != DEV_NULL:
        new_name = new_name[2:]
    return old_name, new_name


def _parse_hunk(lines: list[str], start: int) -> tuple[ParsedHunk, int]:
    """Parse the hunk whose header is lines[start]. Returns the hunk and the next index."""
    header = lines[start]
    match = _HUNK_HEADER_RE.match(header)
    if match is None:
        raise DiffParseError(f"Malformed hunk header: {header}")

    old_start = int(match.group(1))
    old_lines = int(match.group(2)) if match.group(2) is not None else 1
    new_start = int(match.group(3))
    new_lines = int(match.group(4)) if match.group(4) is not None else 1

    hunk = ParsedHunk(old_start, old_lines, new_start, new_lines)
    remaining_old = old_lines
    remaining_new = new_lines
    i = start + 1

    while remaining_old > 0 or remaining_new > 0:
        if i >= len(lines):
            raise truncated_hunk(header, remaining_old, remaining_new)

        line = lines[i]
        # editors strip trailing whitespace from empty context lines
        if line == "":
            line = " "
        prefix = line[0]

        if prefix == " " and remaining_old > 0 and remaining_new > 0:
            remaining_old -= 1
            remaining_new -= 1
        elif prefix == "-" and remaining_old > 0:
            remaining_old -= 1
        elif prefix == "+" and remaining_new > 0:
            remaining_new -= 1
        elif prefix != "\\":
            raise truncated_hunk(header, remaining_old, remaining_new)

        hunk.lines.append(line)
        i += 1

    # "\ No newline at end of file" may follow the last counted line
    if i < len(lines) and lines[i].startswith("\\"):
        hunk.lines.append(lines[i])
        i += 1

    return hunk, i


def parse_patch(text: str) -> list[ParsedFile]:
    """
    Parse unified diff text into one ParsedFile per `---`/`+++` pair.

    Lines outside file headers and hunks (git extended headers, commit
    metadata, `Binary files ... differ`) are skipped.

    Raises:
        DiffParseError: a `---` line without `+++`, a hunk before any file
            header, or a hunk body shorter than its header counts
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    files: list[ParsedFile] = []
    current: ParsedFile | None = None
    git_line: str | None = None
    i = 0

    while i < len(lines):
        line = lines[i]

        if line.startswith("--- "):
            if i + 1 >= len(lines) or not lines[i + 1].startswith("+++ "):
                raise DiffParseError(
                    f"File header without a matching '+++' line: {line}",
                    f"Line {i + 1} of the diff",
                )
            old_name, new_name = _strip_git_prefixes(
                _header_name(line, "--- "),
                _header_name(lines[i + 1], "+++ "),
                git_line,
            )
            current = ParsedFile(old_file_name=old_name, new_file_name=new_name)
            files.append(current)
            i += 2
            continue

        if line.startswith("@@ "):
            if current is None:
                raise DiffParseError(
                    f"Hunk found before any file header: {line}",
                    f"Line {i + 1} of the diff",
                )
            hunk, i = _parse_hunk(lines, i)
            current.hunks.append(hunk)
            continue

        if line.startswith("diff --git "):
            # hunks of the next section must not land on the previous file
            current = None
            git_line = line

        i += 1

    logger.debug("Parsed {count} files from diff", count=len(files))
    return files
