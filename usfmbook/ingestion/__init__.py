"""USFM ingestion: tokenizing, classifying and assembling books."""

from usfmbook.ingestion.assembler import BookAssembler, assemble
from usfmbook.ingestion.classifier import LineClassifier, classify
from usfmbook.ingestion.inline import InlineContentParser, parse_inline
from usfmbook.ingestion.parser import UsfmParser
from usfmbook.ingestion.tokenizer import tokenize

__all__ = [
    "BookAssembler",
    "InlineContentParser",
    "LineClassifier",
    "UsfmParser",
    "assemble",
    "classify",
    "parse_inline",
    "tokenize",
]
