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
Custom exception hierarchy for diffcover.

Every error raised by the diff, split and coverage layers derives from
DiffcoverError so callers (and the CLI) can handle them uniformly.
"""

import contextlib

import typer
from loguru import logger


class DiffcoverError(Exception):
    """
    Base exception for all diffcover-related errors.

    All diffcover-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str | None = None):
        """
        Initialize a DiffcoverError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class DiffParseError(DiffcoverError):
    """
    Raised when raw diff text cannot be parsed into files and hunks,
    such as a hunk body that is shorter than its header claims.
    """

    pass


class MalformedDiffSectionError(DiffcoverError):
    """
    Raised when a `diff --git` section does not parse into exactly one file,
    which breaks the pairing between rename metadata and parsed files.
    """

    def __init__(self, section_index: int, parsed_count: int, details: str | None = None):
        self.section_index = section_index
        self.parsed_count = parsed_count
        super().__init__(
            f"Diff section {section_index} parsed into {parsed_count} files, expected 1",
            details,
        )


class InvalidRangeError(DiffcoverError):
    """Raised when a sub-hunk range is empty after clamping."""

    pass


class ReviewInputError(DiffcoverError):
    """
    Raised when an annotator's review document fails validation.
    """

    pass


class DiffInputError(DiffcoverError):
    """Raised when the CLI cannot read the diff it was pointed at."""

    pass


class ConfigurationError(DiffcoverError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


# Convenience functions for creating common errors
def invalid_range(start: int, end: int) -> InvalidRangeError:
    """Create an InvalidRangeError for a start index past the end index."""
    return InvalidRangeError(
        f"Invalid line range: start {start} > end {end}",
        "Line ranges are inclusive and must select at least one line of the hunk",
    )


def truncated_hunk(header: str, missing_old: int, missing_new: int) -> DiffParseError:
    """Create a DiffParseError for a hunk body that ends before its counts are met."""
    return DiffParseError(
        f"Hunk ended early: {header}",
        f"{missing_old} old and {missing_new} new lines missing from the hunk body",
    )


def unknown_hunk_id(hunk_id: int) -> ReviewInputError:
    """Create a ReviewInputError for a hunk id that was never indexed."""
    return ReviewInputError(
        f"Unknown hunk id: {hunk_id}",
        "Hunk ids come from the most recent indexing pass and start at 1",
    )


@contextlib.contextmanager
def handle_diffcover_exception(exit_on_fail: bool = True):
    """
    Log any DiffcoverError raised inside the block and optionally exit the CLI.
    """
    try:
        yield
    except DiffcoverError as e:
        logger.error(e.message)
        if e.details:
            logger.debug(e.details)
        if exit_on_fail:
            raise typer.Exit(1) from e
        raise
