"""Split a raw USFM line into tag, tag-end and text tokens."""

from enum import Enum, auto

from usfmbook.models.tokens import TagEndToken, TagToken, TextToken, Token

USFM_WHITESPACE = frozenset(" \t\r\n")


class _ScanState(Enum):
    IDLE = auto()
    TEXT = auto()
    TAG = auto()


def tokenize(line: str) -> list[Token]:
    """Tokenize one line of USFM.

    A backslash starts a marker name. The marker ends at an asterisk
    (giving a tag-end) or at whitespace (giving a tag); the terminating
    character is consumed. Everything else is text.

    Args:
        line: A single source line.

    Returns:
        The tokens in source order. Empty for an empty line.
    """
    tokens: list[Token] = []
    state = _ScanState.IDLE
    buffer: list[str] = []

    for char in line:
        if state is _ScanState.TAG:
            if char == "*":
                tokens.append(TagEndToken(name="".join(buffer)))
                buffer = []
                state = _ScanState.IDLE
            elif char in USFM_WHITESPACE:
                tokens.append(TagToken(name="".join(buffer)))
                buffer = []
                state = _ScanState.IDLE
            elif char == "\\":
                # Back-to-back markers with no separator
                tokens.append(TagToken(name="".join(buffer)))
                buffer = []
            else:
                buffer.append(char)
        elif char == "\\":
            if state is _ScanState.TEXT:
                tokens.append(TextToken(content="".join(buffer)))
                buffer = []
            state = _ScanState.TAG
        else:
            buffer.append(char)
            state = _ScanState.TEXT

    if state is _ScanState.TEXT:
        tokens.append(TextToken(content="".join(buffer)))
    elif state is _ScanState.TAG:
        tokens.append(TagToken(name="".join(buffer)))

    return tokens
