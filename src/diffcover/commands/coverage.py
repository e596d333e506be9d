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

from pathlib import Path
from typing import NamedTuple

import typer
from loguru import logger

from diffcover.commands.hunks import run_hunks
from diffcover.context import GlobalContext
from diffcover.core.coverage.models import ReviewCoverage, UncoveredPortion
from diffcover.core.coverage.review import ReviewDocument, load_review_document
from diffcover.core.coverage.tracker import (
    format_uncovered_message,
    get_uncovered_portions,
    initialize_coverage,
    resolve_group_hunks,
    update_coverage_from_review,
)
from diffcover.core.diff.data.indexed_hunk import IndexedHunk
from diffcover.core.diff.index.hunk_indexer import create_hunk_map
from diffcover.core.exceptions import ReviewInputError, handle_diffcover_exception
from diffcover.runtimeutil import read_diff_input


class CoverageReport(NamedTuple):
    hunks: list[IndexedHunk]
    document: ReviewDocument
    coverage: ReviewCoverage
    portions: list[UncoveredPortion]


def run_coverage(
    global_context: GlobalContext, diff_text: str, review_json: str
) -> CoverageReport:
    hunks = run_hunks(global_context, diff_text)
    document = load_review_document(review_json)

    coverage = initialize_coverage(hunks)
    update_coverage_from_review(coverage, document)

    logger.debug(
        "Applied {groups} review groups to {hunks} hunks",
        groups=len(document.hunks),
        hunks=len(hunks),
    )
    return CoverageReport(hunks, document, coverage, get_uncovered_portions(coverage, hunks))


def format_review_groups(document: ReviewDocument, hunks: list[IndexedHunk]) -> str:
    """
    Render each review group with its description and the patch text of the
    hunks (or the part of a hunk) it explains.
    """
    hunk_map = create_hunk_map(hunks)
    blocks: list[str] = []

    for number, group in enumerate(document.hunks, start=1):
        title = group.markdown_description.split("\n", 1)[0] or "(no description)"
        blocks.append(f"## Group {number}: {title}")

        resolved = resolve_group_hunks(group, hunk_map)
        if not resolved:
            blocks.append("(no matching hunks)")
        for hunk in resolved:
            blocks.append(f"Hunk #{hunk.id} ({hunk.filename})")
            blocks.append(hunk.raw_diff)

        blocks.append("")

    return "\n".join(blocks)


def main(
    ctx: typer.Context,
    review_file: Path = typer.Argument(
        ...,
        help="JSON review with a `hunks` list of groups (hunkIds, or hunkId with an optional lineRange).",
    ),
    diff_file: Path | None = typer.Argument(
        None,
        help="File containing `git diff` output. Reads stdin when omitted.",
    ),
    show_groups: bool = typer.Option(
        False,
        "--show-groups",
        help="Print each review group with the patch text of the hunks it explains.",
    ),
) -> None:
    """Report which parts of a diff a review left unexplained.

    Exits with code 1 when any line of any hunk is unexplained.

    Examples:
        git diff | diffcover coverage review.json

        # see what each group of the review points at
        diffcover coverage review.json changes.diff --show-groups
    """
    global_context: GlobalContext = ctx.obj

    with handle_diffcover_exception(exit_on_fail=True):
        if not review_file.is_file():
            raise ReviewInputError(f"Review file not found: {review_file}")
        report = run_coverage(
            global_context,
            read_diff_input(diff_file),
            review_file.read_text(encoding="utf-8"),
        )

    if show_groups:
        typer.echo(format_review_groups(report.document, report.hunks))

    coverage = report.coverage
    typer.echo(
        f"Hunks: {coverage.total_hunks} | "
        f"fully explained: {coverage.fully_explained_hunks} | "
        f"partially explained: {coverage.partially_explained_hunks} | "
        f"unexplained: {coverage.unexplained_hunks}"
    )
    typer.echo(format_uncovered_message(report.portions))

    if report.portions:
        raise typer.Exit(1)
