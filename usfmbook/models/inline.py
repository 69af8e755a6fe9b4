"""Inline rich content found inside paragraphs, verses and titles."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator


class FootnoteDetails(BaseModel):
    """The captured parts of a ``\\f ... \\f*`` footnote.

    Symbol and reference are optional and stored trimmed. The body is
    required and kept verbatim.
    """

    symbol: str | None = None
    reference: str | None = None
    body: str

    @field_validator("symbol", "reference")
    @classmethod
    def _strip(cls, value: str | None) -> str | None:
        return value.strip() if value is not None else None


class PlainText(BaseModel):
    kind: Literal["plain"] = "plain"
    text: str


class ItalicText(BaseModel):
    kind: Literal["italic"] = "italic"
    text: str


class Footnote(BaseModel):
    kind: Literal["footnote"] = "footnote"
    details: FootnoteDetails


InlineItem = Annotated[
    Union[PlainText, ItalicText, Footnote],
    Field(discriminator="kind"),
]
