"""Parsed document models for the ingestion pipeline."""

from pydantic import BaseModel, Field

from usfmbook.models.book import Book


class LineDiagnostic(BaseModel):
    """A source line that could not be classified and was skipped."""

    line_number: int  # 1-based position in the source
    line: str  # The raw offending line
    reason: str = ""


class ParsedUsfm(BaseModel):
    """The result of parsing one USFM document.

    Holds the assembled book alongside the diagnostics for every line
    that was skipped, so callers can decide how strict to be.
    """

    book: Book
    diagnostics: list[LineDiagnostic] = Field(default_factory=list)
    source_path: str = "<memory>"
    encoding: str = "utf-8"
