"""SQLite persistence for parsed books and their parse failures."""

import sqlite3
from pathlib import Path

from usfmbook.models.book import Book
from usfmbook.models.parsed import LineDiagnostic, ParsedUsfm


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Create a connection to the SQLite database.

    Args:
        db_path: Path to the SQLite database file.

    Returns:
        A sqlite3 Connection with row_factory set to Row.
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def initialize_database(db_path: str | Path) -> None:
    """Create the database schema if it doesn't exist.

    Args:
        db_path: Path to the SQLite database file.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = get_connection(db_path)
    try:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS books (
                source_path TEXT PRIMARY KEY,
                book_code TEXT NOT NULL,
                long_name TEXT NOT NULL,
                short_name TEXT NOT NULL,
                encoding TEXT DEFAULT 'utf-8',
                chapter_count INTEGER DEFAULT 0,
                content_json TEXT NOT NULL,
                ingested_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS parse_failures (
                source_path TEXT NOT NULL
                    REFERENCES books(source_path) ON DELETE CASCADE,
                line_number INTEGER NOT NULL,
                line TEXT NOT NULL,
                reason TEXT DEFAULT '',
                PRIMARY KEY (source_path, line_number)
            );
            """
        )
        conn.commit()
    finally:
        conn.close()


def save_parsed_book(db_path: str | Path, parsed: ParsedUsfm) -> str:
    """Insert or replace a parsed book and its failures.

    Args:
        db_path: Path to an initialized SQLite database.
        parsed: The parsed document to store.

    Returns:
        The source path the book is stored under.
    """
    book = parsed.book
    conn = get_connection(db_path)
    try:
        conn.execute("DELETE FROM parse_failures WHERE source_path = ?", (parsed.source_path,))
        conn.execute(
            """
            INSERT OR REPLACE INTO books
                (source_path, book_code, long_name, short_name, encoding,
                 chapter_count, content_json)
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                parsed.source_path,
                book.id,
                book.long_name,
                book.short_name,
                parsed.encoding,
                len(book.chapters),
                book.model_dump_json(),
            ),
        )
        conn.executemany(
            """
            INSERT INTO parse_failures (source_path, line_number, line, reason)
            VALUES (?, ?, ?, ?)
            """,
            [
                (parsed.source_path, d.line_number, d.line, d.reason)
                for d in parsed.diagnostics
            ],
        )
        conn.commit()
    finally:
        conn.close()
    return parsed.source_path


def load_book(db_path: str | Path, source_path: str) -> Book | None:
    """Load a stored book, or None if nothing is stored for source_path."""
    conn = get_connection(db_path)
    try:
        row = conn.execute(
            "SELECT content_json FROM books WHERE source_path = ?", (source_path,)
        ).fetchone()
    finally:
        conn.close()
    if row is None:
        return None
    return Book.model_validate_json(row["content_json"])


def list_failures(db_path: str | Path, source_path: str) -> list[LineDiagnostic]:
    """Return the stored parse failures for a book, in line order."""
    conn = get_connection(db_path)
    try:
        rows = conn.execute(
            """
            SELECT line_number, line, reason FROM parse_failures
            WHERE source_path = ? ORDER BY line_number
            """,
            (source_path,),
        ).fetchall()
    finally:
        conn.close()
    return [
        LineDiagnostic(line_number=r["line_number"], line=r["line"], reason=r["reason"])
        for r in rows
    ]
