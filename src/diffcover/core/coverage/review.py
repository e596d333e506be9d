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
Models for the review an annotator produces.

Field names follow the annotator's camelCase JSON (`hunkIds`, `lineRange`,
`markdownDescription`); snake_case names are accepted too.
"""

import textwrap

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from diffcover.core.exceptions import ReviewInputError


def dedent_description(text: str) -> str:
    """Remove the common indentation of a description and trim it."""
    return textwrap.dedent(text).strip()


class ReviewGroup(BaseModel):
    """
    One explained group of the review.

    A group references either several full hunks (`hunk_ids`) or a single
    hunk (`hunk_id`), optionally narrowed to a 1-based inclusive
    `line_range` as numbered in the annotator's hunk listing.
    """

    model_config = ConfigDict(populate_by_name=True)

    hunk_ids: list[int] | None = Field(default=None, alias="hunkIds")
    hunk_id: int | None = Field(default=None, alias="hunkId")
    line_range: tuple[int, int] | None = Field(default=None, alias="lineRange")
    markdown_description: str = Field(default="", alias="markdownDescription")

    @field_validator("markdown_description")
    @classmethod
    def _dedent(cls, value: str) -> str:
        return dedent_description(value)

    @model_validator(mode="after")
    def _check_hunk_reference(self) -> "ReviewGroup":
        if self.hunk_ids is None and self.hunk_id is None:
            raise ValueError("A review group needs hunkIds or hunkId")
        return self


class ReviewDocument(BaseModel):
    title: str | None = None
    hunks: list[ReviewGroup] = Field(min_length=1)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


def load_review_document(raw_json: str | bytes) -> ReviewDocument:
    """
    Validate an annotator's JSON review.

    Raises:
        ReviewInputError: if the JSON is malformed or does not match the
            review shape
    """
    try:
        return ReviewDocument.model_validate_json(raw_json)
    except ValidationError as e:
        raise ReviewInputError("Invalid review document", str(e)) from e
