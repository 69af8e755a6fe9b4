"""Data models for the USFM book parser."""

from usfmbook.models.book import (
    MISSING,
    Book,
    Chapter,
    ContentBlock,
    DescriptiveTitleBlock,
    ParaBlock,
    PoeticLineBlock,
    VerseBlock,
)
from usfmbook.models.inline import (
    Footnote,
    FootnoteDetails,
    InlineItem,
    ItalicText,
    PlainText,
)
from usfmbook.models.line_parts import (
    ChapterNumber,
    ComplexDescriptiveTitle,
    ComplexPara,
    ComplexParaIndented,
    ComplexVerse,
    DescriptiveTitleLine,
    HeaderLine,
    IdLine,
    LinePart,
    MajorTitleLine,
    ParaEmpty,
    ParaIndented,
    ParaWithText,
    PoeticLineEmpty,
    PoeticLineText,
    SimpleVerse,
    Toc1Line,
    Toc2Line,
    Toc3Line,
)
from usfmbook.models.parsed import LineDiagnostic, ParsedUsfm
from usfmbook.models.tokens import TagEndToken, TagToken, TextToken, Token

__all__ = [
    "MISSING",
    "Book",
    "Chapter",
    "ChapterNumber",
    "ComplexDescriptiveTitle",
    "ComplexPara",
    "ComplexParaIndented",
    "ComplexVerse",
    "ContentBlock",
    "DescriptiveTitleBlock",
    "DescriptiveTitleLine",
    "Footnote",
    "FootnoteDetails",
    "HeaderLine",
    "IdLine",
    "InlineItem",
    "ItalicText",
    "LineDiagnostic",
    "LinePart",
    "MajorTitleLine",
    "ParaBlock",
    "ParaEmpty",
    "ParaIndented",
    "ParaWithText",
    "ParsedUsfm",
    "PlainText",
    "PoeticLineBlock",
    "PoeticLineEmpty",
    "PoeticLineText",
    "SimpleVerse",
    "TagEndToken",
    "TagToken",
    "TextToken",
    "Toc1Line",
    "Toc2Line",
    "Toc3Line",
    "Token",
    "VerseBlock",
]
