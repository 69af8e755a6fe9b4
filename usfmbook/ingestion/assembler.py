"""Fold classified line parts into chapters and a Book."""

import logging
from collections.abc import Iterable

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
from usfmbook.models.inline import PlainText
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

logger = logging.getLogger(__name__)


def to_content_block(part: LinePart) -> ContentBlock | None:
    """Map a content line part to its chapter block.

    Plain strings become a single PlainText item. Returns None for
    metadata parts and chapter markers.
    """
    if isinstance(part, PoeticLineEmpty):
        return PoeticLineBlock(text=None)
    if isinstance(part, PoeticLineText):
        return PoeticLineBlock(text=part.text)
    if isinstance(part, ParaEmpty):
        return ParaBlock(items=[], indented=False)
    if isinstance(part, ParaWithText):
        return ParaBlock(items=[PlainText(text=part.text)], indented=False)
    if isinstance(part, ParaIndented):
        items = [PlainText(text=part.text)] if part.text is not None else []
        return ParaBlock(items=items, indented=True)
    if isinstance(part, DescriptiveTitleLine):
        return DescriptiveTitleBlock(items=[PlainText(text=part.text)])
    if isinstance(part, SimpleVerse):
        return VerseBlock(number=part.number, items=[PlainText(text=part.text)])
    if isinstance(part, ComplexVerse):
        return VerseBlock(number=part.number, items=list(part.items))
    if isinstance(part, ComplexPara):
        return ParaBlock(items=list(part.items), indented=False)
    if isinstance(part, ComplexParaIndented):
        return ParaBlock(items=list(part.items), indented=True)
    if isinstance(part, ComplexDescriptiveTitle):
        return DescriptiveTitleBlock(items=list(part.items))
    return None


class BookAssembler:
    """Builds a Book from the ordered line parts of one document.

    Content seen before the first ``\\c`` marker lands in chapter 0.
    A chapter marker with no content before it does not produce an
    empty chapter. Chapter numbers are kept in encounter order and are
    not validated.
    """

    def assemble(self, parts: Iterable[LinePart]) -> Book:
        """Assemble a Book.

        Args:
            parts: Line parts in source order.

        Returns:
            The assembled Book. Metadata never seen is ``"MISSING"``.
        """
        book_id: str | None = None
        long_name: str | None = None
        short_name: str | None = None
        abbreviation: str | None = None
        chapters: list[Chapter] = []
        chapter_number = 0
        content: list[ContentBlock] = []

        for part in parts:
            if isinstance(part, IdLine):
                book_id = part.code
            elif isinstance(part, Toc1Line):
                long_name = part.text
            elif isinstance(part, Toc2Line):
                short_name = part.text
            elif isinstance(part, Toc3Line):
                abbreviation = part.text
            elif isinstance(part, (HeaderLine, MajorTitleLine)):
                # Redundant with the toc lines and inconsistently cased
                continue
            elif isinstance(part, ChapterNumber):
                if content:
                    chapters.append(Chapter(number=chapter_number, content=content))
                    content = []
                chapter_number = part.number
            else:
                block = to_content_block(part)
                if block is None:
                    logger.warning("Unhandled line part: %s", part.kind)
                    continue
                content.append(block)

        if content:
            chapters.append(Chapter(number=chapter_number, content=content))

        logger.debug("Assembled %s with %d chapters", book_id or MISSING, len(chapters))
        return Book(
            id=book_id or MISSING,
            long_name=long_name or MISSING,
            short_name=short_name or MISSING,
            abbreviation=abbreviation,
            chapters=chapters,
        )


def assemble(parts: Iterable[LinePart]) -> Book:
    """Assemble with a fresh :class:`BookAssembler`."""
    return BookAssembler().assemble(parts)
