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

from diffcover.core.diff.data.parsed_file import ParsedFile, ParsedHunk
from diffcover.core.diff.index.hunk_indexer import (
    create_hunk,
    create_hunk_map,
    index_hunks,
    parse_hunks_with_ids,
    should_skip_file,
)
from diffcover.core.diff.patch.patch_builder import build_patch

# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


def _file(name, *hunks, old_name=None):
    return ParsedFile(
        old_file_name=old_name if old_name is not None else name,
        new_file_name=name,
        hunks=list(hunks),
    )


def _hunk(old_start=1, new_start=1, lines=(" a", "-b", "+c")):
    return ParsedHunk(old_start, 2, new_start, 2, list(lines))


# -----------------------------------------------------------------------------
# Skipping
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "filename",
    [
        "pnpm-lock.yaml",
        "frontend/package-lock.json",
        "rust/Cargo.lock",
        "deps.lock",
        "src/api.generated.ts",
        "src/parser.g.js",
        "dist/app.min.js",
        "dist/app.min.css",
        "dist/vendor.bundle.js",
        "dist/app.js.map",
        "types/index.d.ts",
        "db/migrations/20240101120000_init.sql",
        "src/__snapshots__/view.test.tsx.txt",
        "tests/view.snap",
    ],
)
def test_should_skip_file(filename):
    assert should_skip_file(filename)


@pytest.mark.parametrize(
    "filename",
    ["src/app.ts", "lockfile.txt", "migrations/001_init.sql", "src/mapper.py", "docs/readme.md"],
)
def test_should_not_skip_file(filename):
    assert not should_skip_file(filename)


def test_lockfiles_are_skipped_even_when_generated_files_are_kept():
    assert should_skip_file("yarn.lock", skip_generated=False)
    assert not should_skip_file("dist/app.min.js", skip_generated=False)


# -----------------------------------------------------------------------------
# Indexing
# -----------------------------------------------------------------------------


def test_ids_are_global_and_sequential():
    files = [
        _file("a.py", _hunk(1, 1), _hunk(20, 21)),
        _file("package-lock.json", _hunk()),
        _file("b.py", _hunk(5, 5)),
    ]

    hunks = index_hunks(files)

    assert [h.id for h in hunks] == [1, 2, 3]
    assert [(h.filename, h.hunk_index) for h in hunks] == [("a.py", 0), ("a.py", 1), ("b.py", 0)]


def test_indexed_hunk_keeps_header_counts_and_builds_raw_diff():
    hunk = _hunk(20, 21)

    indexed = index_hunks([_file("a.py", hunk)])[0]

    assert (indexed.old_start, indexed.old_lines, indexed.new_start, indexed.new_lines) == (20, 2, 21, 2)
    assert indexed.lines == (" a", "-b", "+c")
    assert indexed.raw_diff == build_patch("a.py", 20, 21, hunk.lines)
    assert indexed.header == "@@ -20,2 +21,2 @@"


def test_deleted_file_uses_old_name():
    files = [_file("/dev/null", _hunk(), old_name="gone.py")]

    assert index_hunks(files)[0].filename == "gone.py"


def test_missing_names_fall_back_to_unknown():
    files = [ParsedFile(old_file_name=None, new_file_name="/dev/null", hunks=[_hunk()])]

    assert index_hunks(files)[0].filename == "unknown"


def test_generated_files_can_be_kept():
    files = [_file("dist/app.min.js", _hunk())]

    assert index_hunks(files) == []
    assert len(index_hunks(files, skip_generated=False)) == 1


def test_parse_hunks_with_ids_end_to_end():
    raw = "\n".join(
        [
            "diff --git a/yarn.lock b/yarn.lock",
            "--- a/yarn.lock",
            "+++ b/yarn.lock",
            "@@ -1 +1 @@",
            "-a",
            "+b",
            "diff --git a/src/old.py b/src/new.py",
            "similarity index 90%",
            "rename from src/old.py",
            "rename to src/new.py",
            "--- a/src/old.py",
            "+++ b/src/new.py",
            "@@ -3,2 +3,2 @@",
            " def run():",
            "-    return 1",
            "+    return 2",
            "diff --git a/moved.txt b/elsewhere.txt",
            "similarity index 100%",
            "rename from moved.txt",
            "rename to elsewhere.txt",
            "",
        ]
    )

    hunks = parse_hunks_with_ids(raw)

    assert len(hunks) == 1
    assert hunks[0].id == 1
    assert hunks[0].filename == "src/new.py"
    assert hunks[0].raw_diff.startswith("--- a/src/new.py\n+++ b/src/new.py\n@@ -3,2 +3,2 @@")


def test_no_prefix_diff_keeps_top_level_a_and_b_directories():
    raw = "\n".join(
        [
            "diff --git b/new.ts b/new.ts",
            "new file mode 100644",
            "--- /dev/null",
            "+++ b/new.ts",
            "@@ -0,0 +1 @@",
            "+x",
            "diff --git a/poetry.lock a/poetry.lock",
            "deleted file mode 100644",
            "--- a/poetry.lock",
            "+++ /dev/null",
            "@@ -1 +0,0 @@",
            "-y",
            "",
        ]
    )

    hunks = parse_hunks_with_ids(raw)

    assert [hunk.filename for hunk in hunks] == ["b/new.ts"]


# -----------------------------------------------------------------------------
# create_hunk / create_hunk_map
# -----------------------------------------------------------------------------


def test_create_hunk_counts_lines():
    hunk = create_hunk(7, "x.py", 2, 10, 11, [" a", "-b", "+c", "+d"])

    assert hunk.id == 7
    assert hunk.hunk_index == 2
    assert (hunk.old_lines, hunk.new_lines) == (2, 3)
    assert hunk.raw_diff == "--- a/x.py\n+++ b/x.py\n@@ -10,2 +11,3 @@\n a\n-b\n+c\n+d"


def test_create_hunk_map():
    hunks = [create_hunk(i, "x.py", i - 1, i, i, [" a"]) for i in (1, 2, 3)]

    hunk_map = create_hunk_map(hunks)

    assert list(hunk_map) == [1, 2, 3]
    assert hunk_map[2] is hunks[1]
