"""Assembled book data model."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from usfmbook.models.inline import InlineItem

MISSING = "MISSING"


class PoeticLineBlock(BaseModel):
    """A poetic line. ``text`` is None for a bare ``\\q1`` marker."""

    kind: Literal["poetic_line"] = "poetic_line"
    text: str | None = None


class ParaBlock(BaseModel):
    kind: Literal["para"] = "para"
    items: list[InlineItem] = Field(default_factory=list)
    indented: bool = False


class VerseBlock(BaseModel):
    kind: Literal["verse"] = "verse"
    number: int
    items: list[InlineItem]


class DescriptiveTitleBlock(BaseModel):
    kind: Literal["descriptive_title"] = "descriptive_title"
    items: list[InlineItem]


ContentBlock = Annotated[
    Union[PoeticLineBlock, ParaBlock, VerseBlock, DescriptiveTitleBlock],
    Field(discriminator="kind"),
]


class Chapter(BaseModel):
    """A numbered chapter. Chapter 0 holds front matter."""

    model_config = ConfigDict(frozen=True)

    number: int
    content: list[ContentBlock] = Field(default_factory=list)


class Book(BaseModel):
    """A fully assembled book.

    Metadata never found in the source is left as ``"MISSING"``.
    """

    model_config = ConfigDict(frozen=True)

    id: str = MISSING  # e.g. "2JN"
    long_name: str = MISSING  # e.g. "Second John"
    short_name: str = MISSING  # e.g. "2 John"
    abbreviation: str | None = None
    chapters: list[Chapter] = Field(default_factory=list)
