"""Classify a tokenized USFM line into a typed line part.

Three rules are tried in priority order and the first success wins:

1. simple case: a marker followed only by text (or nothing)
2. simple verse: ``\\v <number> <text>`` with no inline markup
3. rich content: inline italics and footnotes, wrapped by marker

A rule that does not match returns None and the next one is tried.
"""

import logging
import re
from collections.abc import Callable, Sequence

from usfmbook.ingestion.inline import InlineContentParser
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
from usfmbook.models.tokens import TagToken, TextToken, Token

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Markers allowed on their own, with no text
EMPTY_LINE_PARTS: dict[str, Callable[[], LinePart]] = {
    "p": ParaEmpty,
    "pi1": lambda: ParaIndented(text=None),
    "q1": PoeticLineEmpty,
}

# Markers whose text is taken verbatim
TEXT_LINE_PARTS: dict[str, Callable[[str], LinePart]] = {
    "p": lambda text: ParaWithText(text=text),
    "q1": lambda text: PoeticLineText(text=text),
    "pi1": lambda text: ParaIndented(text=text),
    "d": lambda text: DescriptiveTitleLine(text=text),
    "h": lambda text: HeaderLine(text=text),
    "toc1": lambda text: Toc1Line(text=text),
    "toc2": lambda text: Toc2Line(text=text),
    "toc3": lambda text: Toc3Line(text=text),
    "mt1": lambda text: MajorTitleLine(text=text),
}


def parse_int(text: str) -> int | None:
    """Parse a strict integer: optional sign and ASCII digits only."""
    if INTEGER_PATTERN.fullmatch(text) is None:
        return None
    return int(text)


def split_verse_number(text: str) -> tuple[int, str] | None:
    """Split ``"12 In the beginning"`` into ``(12, "In the beginning")``.

    Returns None when there is no space or the leading part is not an
    integer. The remainder may be empty.
    """
    number_text, sep, remainder = text.partition(" ")
    if not sep:
        return None
    number = parse_int(number_text)
    if number is None:
        return None
    return number, remainder


class LineClassifier:
    """Turns the token sequence of one line into a LinePart."""

    def __init__(self) -> None:
        self._inline = InlineContentParser()

    def classify(self, tokens: Sequence[Token]) -> LinePart | None:
        """Classify one tokenized line.

        Args:
            tokens: Tokens from :func:`usfmbook.ingestion.tokenizer.tokenize`.

        Returns:
            The recognised LinePart, or None if the line is empty, does
            not start with a tag, or matches no rule.
        """
        if not tokens:
            return None
        first = tokens[0]
        if not isinstance(first, TagToken):
            return None

        rest = tokens[1:]
        for rule in _RULES:
            part = rule(self, first.name, rest)
            if part is not None:
                return part
        return None

    def try_simple(self, tag: str, rest: Sequence[Token]) -> LinePart | None:
        """Marker followed by nothing or by text tokens only."""
        if not rest:
            factory = EMPTY_LINE_PARTS.get(tag)
            return factory() if factory else None

        if not all(isinstance(token, TextToken) for token in rest):
            return None
        text = "".join(token.content for token in rest)  # type: ignore[union-attr]

        if tag in TEXT_LINE_PARTS:
            return TEXT_LINE_PARTS[tag](text)
        if tag == "c":
            number = parse_int(text)
            return ChapterNumber(number=number) if number is not None else None
        if tag == "id":
            code, sep, description = text.partition(" ")
            if not code:
                return None
            return IdLine(code=code, description=description if sep else None)
        return None

    def try_simple_verse(self, tag: str, rest: Sequence[Token]) -> LinePart | None:
        """``\\v`` with exactly one text token shaped ``<int> <text>``."""
        if tag != "v" or len(rest) != 1:
            return None
        token = rest[0]
        if not isinstance(token, TextToken):
            return None
        split = split_verse_number(token.content)
        if split is None or not split[1]:
            return None
        number, text = split
        return SimpleVerse(number=number, text=text)

    def try_rich(self, tag: str, rest: Sequence[Token]) -> LinePart | None:
        """Inline italics and footnotes, wrapped according to ``tag``."""
        if tag not in ("p", "pi1", "d", "v"):
            return None
        items = self._inline.parse(rest)
        if items is None:
            return None

        if tag == "p":
            return ComplexPara(items=items)
        if tag == "pi1":
            return ComplexParaIndented(items=items)
        if tag == "d":
            return ComplexDescriptiveTitle(items=items)

        if not items or not isinstance(items[0], PlainText):
            return None
        split = split_verse_number(items[0].text)
        if split is None:
            return None
        number, remainder = split
        items[0] = PlainText(text=remainder)
        return ComplexVerse(number=number, items=items)


# Tried in order; the first non-None result wins
_RULES = (
    LineClassifier.try_simple,
    LineClassifier.try_simple_verse,
    LineClassifier.try_rich,
)


def classify(tokens: Sequence[Token]) -> LinePart | None:
    """Classify with a fresh :class:`LineClassifier`."""
    return LineClassifier().classify(tokens)
