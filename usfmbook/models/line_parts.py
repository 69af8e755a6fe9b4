"""Typed results of classifying a single USFM line.

Every recognised line becomes exactly one of these parts. Metadata parts
describe the book as a whole, content parts become chapter blocks during
assembly.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from usfmbook.models.inline import InlineItem

# ── Metadata ────────────────────────────────────────────────────────────────


class IdLine(BaseModel):
    """``\\id 2JN Free Bible Version`` -> code plus optional description."""

    kind: Literal["id"] = "id"
    code: str
    description: str | None = None


class HeaderLine(BaseModel):
    kind: Literal["header"] = "header"
    text: str


class Toc1Line(BaseModel):
    """Long table-of-contents name, e.g. 'Second John'."""

    kind: Literal["toc1"] = "toc1"
    text: str


class Toc2Line(BaseModel):
    """Short table-of-contents name, e.g. '2 John'."""

    kind: Literal["toc2"] = "toc2"
    text: str


class Toc3Line(BaseModel):
    """Book abbreviation."""

    kind: Literal["toc3"] = "toc3"
    text: str


class MajorTitleLine(BaseModel):
    kind: Literal["major_title"] = "major_title"
    text: str


# ── Content ─────────────────────────────────────────────────────────────────


class PoeticLineEmpty(BaseModel):
    kind: Literal["poetic_line_empty"] = "poetic_line_empty"


class PoeticLineText(BaseModel):
    kind: Literal["poetic_line"] = "poetic_line"
    text: str


class ParaEmpty(BaseModel):
    kind: Literal["para_empty"] = "para_empty"


class ParaWithText(BaseModel):
    kind: Literal["para"] = "para"
    text: str


class ParaIndented(BaseModel):
    kind: Literal["para_indented"] = "para_indented"
    text: str | None = None


class DescriptiveTitleLine(BaseModel):
    kind: Literal["descriptive_title"] = "descriptive_title"
    text: str


class ChapterNumber(BaseModel):
    kind: Literal["chapter_number"] = "chapter_number"
    number: int


class SimpleVerse(BaseModel):
    """A verse with no inline markup."""

    kind: Literal["simple_verse"] = "simple_verse"
    number: int
    text: str


class ComplexVerse(BaseModel):
    kind: Literal["complex_verse"] = "complex_verse"
    number: int
    items: list[InlineItem]


class ComplexPara(BaseModel):
    kind: Literal["complex_para"] = "complex_para"
    items: list[InlineItem]


class ComplexParaIndented(BaseModel):
    kind: Literal["complex_para_indented"] = "complex_para_indented"
    items: list[InlineItem]


class ComplexDescriptiveTitle(BaseModel):
    kind: Literal["complex_descriptive_title"] = "complex_descriptive_title"
    items: list[InlineItem]


LinePart = Annotated[
    Union[
        IdLine,
        HeaderLine,
        Toc1Line,
        Toc2Line,
        Toc3Line,
        MajorTitleLine,
        PoeticLineEmpty,
        PoeticLineText,
        ParaEmpty,
        ParaWithText,
        ParaIndented,
        DescriptiveTitleLine,
        ChapterNumber,
        SimpleVerse,
        ComplexVerse,
        ComplexPara,
        ComplexParaIndented,
        ComplexDescriptiveTitle,
    ],
    Field(discriminator="kind"),
]
