"""Write parsed books to disk and render them for the console."""

import logging
from pathlib import Path

from usfmbook.models.book import MISSING, Book, ParaBlock, VerseBlock
from usfmbook.models.parsed import ParsedUsfm

logger = logging.getLogger(__name__)


def write_book_json(parsed: ParsedUsfm, output_dir: str | Path, indent: int = 2) -> Path:
    """Serialize a parsed book to ``<output_dir>/<book id>.json``.

    Books without a usable ``\\id`` (missing, or containing a path
    separator or ``..``) are named after their source file. An existing
    file is overwritten with a warning.

    Returns:
        The path written.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    name = parsed.book.id
    if name == MISSING or not _is_safe_file_name(name):
        name = Path(parsed.source_path).stem
    target = out / f"{name}.json"
    if target.exists():
        logger.warning("Overwriting %s with %s", target, parsed.source_path)
    target.write_text(parsed.book.model_dump_json(indent=indent), encoding="utf-8")
    logger.info("Wrote %s", target)
    return target


def _is_safe_file_name(name: str) -> bool:
    return bool(name) and "/" not in name and "\\" not in name and ".." not in name


def format_book_summary(book: Book) -> str:
    """One header line for the book, then one line per chapter."""
    lines = [f"{book.id}: {book.long_name} ({book.short_name})"]
    for chapter in book.chapters:
        verses = sum(1 for block in chapter.content if isinstance(block, VerseBlock))
        paras = sum(1 for block in chapter.content if isinstance(block, ParaBlock))
        lines.append(
            f"  chapter {chapter.number}: {len(chapter.content)} blocks, "
            f"{verses} verses, {paras} paragraphs"
        )
    return "\n".join(lines)
