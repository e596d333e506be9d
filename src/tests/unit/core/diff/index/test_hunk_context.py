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

from diffcover.core.diff.index.hunk_context import format_hunks_context
from diffcover.core.diff.index.hunk_indexer import create_hunk


def test_lines_are_numbered_from_one():
    hunk = create_hunk(1, "a.py", 0, 1, 1, [" x", "-y", "+z"])

    assert format_hunks_context([hunk]) == (
        '<hunk id="1" file="a.py" totalLines="3">\n'
        "1\t x\n"
        "2\t-y\n"
        "3\t+z\n"
        "</hunk>\n"
    )


def test_numbers_are_right_aligned():
    hunk = create_hunk(4, "b.py", 0, 1, 1, [f"+line {i}" for i in range(10)])

    output = format_hunks_context([hunk])

    assert " 1\t+line 0" in output
    assert "10\t+line 9" in output


def test_file_attribute_is_escaped():
    hunk = create_hunk(2, 'we"ird & <name>.py', 0, 1, 1, [" x"])

    assert "file='we\"ird &amp; &lt;name&gt;.py'" in format_hunks_context([hunk])


def test_no_hunks():
    assert format_hunks_context([]) == ""
