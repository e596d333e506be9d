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

from loguru import logger

from diffcover.core.diff.data.parsed_file import ParsedFile
from diffcover.core.diff.parse.patch_parser import DiffParser, parse_patch
from diffcover.core.diff.parse.preprocessor import preprocess_diff, strip_submodule_headers
from diffcover.core.exceptions import MalformedDiffSectionError


def parse_git_diff_files(
    raw_diff: str, parser: DiffParser = parse_patch, strict: bool = False
) -> list[ParsedFile]:
    """
    Parse raw `git diff` output into files, rename and copy metadata included.

    Each `diff --git` section is parsed on its own and keeps its section
    index, so rename metadata is joined to the file it was read from rather
    than to whatever file happens to sit at the same position in the parser's
    output. Text without any `diff --git` marker is handed to the parser
    whole.

    `git diff --submodule=diff` status lines are dropped before parsing.

    Args:
        raw_diff: Output of `git diff`
        parser: Unified-diff parser to run on each section
        strict: Raise instead of warning when a section does not parse into
            exactly one file

    Raises:
        MalformedDiffSectionError: strict mode only
        DiffParseError: propagated from the parser
    """
    preprocessed = preprocess_diff(strip_submodule_headers(raw_diff))

    if not preprocessed.sections:
        return parser(preprocessed.processed_diff)

    files: list[ParsedFile] = []
    for section in preprocessed.sections:
        parsed = parser(section.text())

        if len(parsed) == 1:
            info = preprocessed.rename_info.get(section.index)
            if info is not None:
                parsed[0].attach_rename_info(info)
        elif not parsed:
            # binary files and mode-only changes have nothing to parse
            logger.debug(
                "Section {index} has no file headers: {marker}",
                index=section.index,
                marker=section.lines[0],
            )
        else:
            error = MalformedDiffSectionError(
                section.index,
                len(parsed),
                f"Section starts with: {section.lines[0]}",
            )
            if strict:
                raise error
            logger.warning(
                "{message}, rename metadata for it is skipped", message=error.message
            )

        files.extend(parsed)

    logger.debug(
        "Read {files} files from {sections} diff sections",
        files=len(files),
        sections=len(preprocessed.sections),
    )
    return files
