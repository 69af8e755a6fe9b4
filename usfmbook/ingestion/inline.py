"""State machine for inline content: plain text, italics and footnotes.

Walks the tokens that follow a line's leading marker and produces an
ordered list of inline items. Footnotes are built up across several
tokens::

    \\f + \\fr 1:1 \\ft a note\\f*
     |  |  |    |   |   |     +-- close: emit Footnote
     |  |  |    |   |   +-------- body text
     |  |  |    |   +------------ switch to body
     |  |  |    +---------------- reference text
     |  |  +--------------------- switch to reference
     |  +------------------------ symbol
     +--------------------------- open

Cross-reference (``xt``) and nested italic (``it``, ``+it``) markers inside
a footnote are consumed without changing state, so their text merges into
whichever footnote field is open.
"""

import logging
from collections.abc import Callable, Sequence
from enum import Enum, auto

from usfmbook.models.inline import (
    Footnote,
    FootnoteDetails,
    InlineItem,
    ItalicText,
    PlainText,
)
from usfmbook.models.tokens import TagEndToken, TagToken, TextToken, Token

logger = logging.getLogger(__name__)

# Markers read through inside a footnote's reference or body
FOOTNOTE_PASSTHROUGH_TAGS = frozenset({"xt", "it", "+it"})


class State(Enum):
    NORMAL = auto()
    ITALIC = auto()
    FOOTNOTE_SYMBOL = auto()
    FOOTNOTE_AWAITING_SECTION = auto()
    FOOTNOTE_REFERENCE = auto()
    FOOTNOTE_BODY = auto()


class InlineContentParser:
    """Parses a token sequence into inline items.

    One instance can be reused; every call to :meth:`parse` starts from
    a clean state. Each handler returns False to reject the sequence.
    """

    def __init__(self) -> None:
        self._handlers: dict[State, Callable[[Token], bool]] = {
            State.NORMAL: self._on_normal,
            State.ITALIC: self._on_italic,
            State.FOOTNOTE_SYMBOL: self._on_footnote_symbol,
            State.FOOTNOTE_AWAITING_SECTION: self._on_footnote_awaiting_section,
            State.FOOTNOTE_REFERENCE: self._on_footnote_reference,
            State.FOOTNOTE_BODY: self._on_footnote_body,
        }
        self._reset()

    def parse(self, tokens: Sequence[Token]) -> list[InlineItem] | None:
        """Run the state machine over ``tokens``.

        Args:
            tokens: The tokens following the line's leading marker.

        Returns:
            The inline items in order, or None if the sequence is
            malformed (unknown marker, footnote without a body, or an
            italic/footnote left open at the end).
        """
        self._reset()
        for token in tokens:
            if not self._handlers[self._state](token):
                logger.debug("Inline parse rejected %r in state %s", token, self._state.name)
                return None

        if self._state is not State.NORMAL:
            logger.debug("Inline parse ended inside %s", self._state.name)
            return None
        return self._items

    def _reset(self) -> None:
        self._state = State.NORMAL
        self._items: list[InlineItem] = []
        self._reset_footnote()

    def _reset_footnote(self) -> None:
        self._symbol: str | None = None
        self._reference: str | None = None
        self._body: str | None = None

    def _close_footnote(self) -> bool:
        if not self._body:
            return False
        self._items.append(
            Footnote(
                details=FootnoteDetails(
                    symbol=self._symbol,
                    reference=self._reference,
                    body=self._body,
                )
            )
        )
        self._reset_footnote()
        self._state = State.NORMAL
        return True

    # ── State handlers ──────────────────────────────────────────────────────

    def _on_normal(self, token: Token) -> bool:
        if isinstance(token, TextToken):
            self._items.append(PlainText(text=token.content))
            return True
        if isinstance(token, TagToken):
            if token.name == "it":
                self._state = State.ITALIC
                return True
            if token.name == "f":
                self._reset_footnote()
                self._state = State.FOOTNOTE_SYMBOL
                return True
        return False

    def _on_italic(self, token: Token) -> bool:
        if isinstance(token, TextToken):
            self._items.append(ItalicText(text=token.content))
            return True
        if isinstance(token, TagEndToken) and token.name == "it":
            self._state = State.NORMAL
            return True
        return False

    def _on_footnote_symbol(self, token: Token) -> bool:
        if isinstance(token, TextToken):
            self._symbol = token.content.strip()
            self._state = State.FOOTNOTE_AWAITING_SECTION
            return True
        return False

    def _on_footnote_awaiting_section(self, token: Token) -> bool:
        if isinstance(token, TextToken):
            # Lenient: body text without an explicit \ft
            self._body = (self._body or "") + token.content
            return True
        if isinstance(token, TagToken):
            return self._enter_section(token.name)
        if token.name == "f":
            return self._close_footnote()
        return False

    def _on_footnote_reference(self, token: Token) -> bool:
        if isinstance(token, TextToken):
            self._reference = (self._reference or "") + token.content
            return True
        return self._on_footnote_marker(token)

    def _on_footnote_body(self, token: Token) -> bool:
        if isinstance(token, TextToken):
            self._body = (self._body or "") + token.content
            return True
        return self._on_footnote_marker(token)

    def _on_footnote_marker(self, token: TagToken | TagEndToken) -> bool:
        """Markers seen while a reference or body section is open."""
        if token.name in FOOTNOTE_PASSTHROUGH_TAGS:
            return True
        if isinstance(token, TagToken):
            return self._enter_section(token.name)
        if token.name == "f":
            return self._close_footnote()
        return False

    def _enter_section(self, name: str) -> bool:
        if name == "fr":
            self._state = State.FOOTNOTE_REFERENCE
        elif name == "ft":
            self._state = State.FOOTNOTE_BODY
        else:
            return False
        return True


def parse_inline(tokens: Sequence[Token]) -> list[InlineItem] | None:
    """Parse inline content with a fresh :class:`InlineContentParser`."""
    return InlineContentParser().parse(tokens)
