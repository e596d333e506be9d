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

import pytest

from diffcover.core.diff.parse.patch_parser import parse_patch
from diffcover.core.diff.patch.patch_builder import (
    LineCounts,
    build_patch,
    count_line_prefixes,
    format_hunk_header,
)


def test_count_line_prefixes_ignores_unknown_prefixes():
    lines = [" a", "-b", "+c", "\\ No newline at end of file", "", "?x"]

    assert count_line_prefixes(lines) == LineCounts(old_lines=2, new_lines=2)


def test_format_hunk_header():
    assert format_hunk_header(10, 2, 12, 3) == "@@ -10,2 +12,3 @@"


def test_build_patch_layout():
    patch = build_patch("src/a.ts", 10, 12, [" a", "-b", "+c", "+d"])

    assert patch == "--- a/src/a.ts\n+++ b/src/a.ts\n@@ -10,2 +12,3 @@\n a\n-b\n+c\n+d"


def test_build_patch_all_additions():
    patch = build_patch("new.py", 0, 1, ["+one", "+two"])

    assert "@@ -0,0 +1,2 @@" in patch


@pytest.mark.parametrize(
    "filename, old_start, new_start, lines",
    [
        ("new.py", 0, 1, ["+one", "+two"]),
        ("old.py", 3, 0, ["-one", "-two", "-three"]),
        ("my dir/file name.ts", 1, 1, [" keep", "-drop", "+add"]),
        ("src/ünïcødé/文件.py", 5, 5, ["-héllo", "+wörld", " 字"]),
        ("app/[id]/page.tsx", 2, 2, [" x", "+y"]),
        ("x ", 1, 1, ["-a", "+b"]),
        (" padded name.txt", 1, 1, ["-a", "+b"]),
        ("notes.md", 1, 1, ["--- not a header", "+++ also not", " @@ -1 +1 @@", "+\tindented"]),
        ("big.txt", 1, 1, ["-" + "a" * 10000, "+" + "b" * 10000]),
    ],
)
def test_build_patch_parses_back(filename, old_start, new_start, lines):
    files = parse_patch(build_patch(filename, old_start, new_start, lines))

    assert len(files) == 1
    assert files[0].old_file_name == filename
    assert files[0].new_file_name == filename
    assert len(files[0].hunks) == 1

    hunk = files[0].hunks[0]
    assert hunk.lines == lines
    assert (hunk.old_start, hunk.new_start) == (old_start, new_start)
    assert (hunk.old_lines, hunk.new_lines) == count_line_prefixes(lines)
