"""Lexical token models produced by the line tokenizer."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TagToken(BaseModel):
    """An opening marker such as ``\\p`` or ``\\v``."""

    kind: Literal["tag"] = "tag"
    name: str


class TagEndToken(BaseModel):
    """A marker closed by an asterisk, e.g. ``\\it*`` or ``\\f*``."""

    kind: Literal["tag_end"] = "tag_end"
    name: str


class TextToken(BaseModel):
    """A run of text between markers."""

    kind: Literal["text"] = "text"
    content: str


Token = Annotated[
    Union[TagToken, TagEndToken, TextToken],
    Field(discriminator="kind"),
]
