"""USFM document parser: decoding, line classification and assembly."""

import concurrent.futures
import logging
from collections.abc import Iterable
from pathlib import Path

import chardet

from usfmbook.config import ParsingConfig
from usfmbook.ingestion.assembler import BookAssembler
from usfmbook.ingestion.classifier import LineClassifier
from usfmbook.ingestion.tokenizer import tokenize
from usfmbook.models.line_parts import LinePart
from usfmbook.models.parsed import LineDiagnostic, ParsedUsfm
from usfmbook.models.tokens import TagToken

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    ``str.splitlines`` also breaks on form feeds, vertical tabs and the
    Unicode line separators, which may appear inside verse text.
    """
    return [line.removesuffix("\r") for line in text.split("\n")]


class UsfmParser:
    """Parses USFM files into a structured ParsedUsfm representation.

    Each line is tokenized and classified on its own. Lines that cannot
    be classified are skipped and reported as diagnostics; they never
    abort the document.

    Args:
        config: ParsingConfig with the source extension, fallback
                encoding and worker count.
    """

    def __init__(self, config: ParsingConfig | None = None) -> None:
        self._config = config or ParsingConfig()
        self._classifier = LineClassifier()
        self._assembler = BookAssembler()

    def parse_lines(
        self, lines: Iterable[str], source_path: str = "<memory>", encoding: str = "utf-8"
    ) -> ParsedUsfm:
        """Parse already-decoded lines of one document.

        Args:
            lines: The document's lines, without trailing newlines.
            source_path: Where the lines came from, for reporting.
            encoding: The encoding the lines were decoded with.

        Returns:
            The assembled book together with per-line diagnostics.
        """
        parts: list[LinePart] = []
        diagnostics: list[LineDiagnostic] = []

        for line_number, line in enumerate(lines, start=1):
            if not line:
                continue
            tokens = tokenize(line)
            part = self._classifier.classify(tokens)
            if part is not None:
                parts.append(part)
                continue

            first = tokens[0]
            if isinstance(first, TagToken):
                reason = f"unrecognised tag combination for \\{first.name}"
            else:
                reason = "line does not start with a tag"
            logger.warning("%s:%d: skipped line (%s): %s", source_path, line_number, reason, line)
            diagnostics.append(LineDiagnostic(line_number=line_number, line=line, reason=reason))

        book = self._assembler.assemble(parts)
        return ParsedUsfm(
            book=book,
            diagnostics=diagnostics,
            source_path=source_path,
            encoding=encoding,
        )

    def parse(self, file_path: str | Path) -> ParsedUsfm:
        """Parse a USFM file.

        Args:
            file_path: Path to the .usfm file.

        Returns:
            A ParsedUsfm for the file.

        Raises:
            FileNotFoundError: If file_path does not exist.
            ValueError: If the file does not have the configured extension.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        self._check_extension(path)

        text, encoding = self._read_text(path)
        logger.info("Parsing %s (%s)", path, encoding)
        return self.parse_lines(split_lines(text), source_path=str(path), encoding=encoding)

    def discover(self, directory: str | Path) -> list[Path]:
        """List the source files in a directory, sorted by name.

        Raises:
            NotADirectoryError: If directory is not a directory.
        """
        folder = Path(directory)
        if not folder.is_dir():
            raise NotADirectoryError(f"Not a directory: {folder}")
        extension = self._config.file_extension.lower()
        return sorted(
            p for p in folder.iterdir() if p.is_file() and p.suffix.lower() == extension
        )

    def parse_directory(self, directory: str | Path) -> list[ParsedUsfm]:
        """Parse every source file in a directory.

        A file that fails to parse is logged and skipped; the remaining
        files are still processed. With ``max_workers`` above 1 the files
        are parsed in a process pool.

        Returns:
            One ParsedUsfm per successfully parsed file, in name order.
        """
        files = self.discover(directory)
        logger.info("Found %d %s files in %s", len(files), self._config.file_extension, directory)

        if self._config.max_workers <= 1 or len(files) <= 1:
            results = []
            for path in files:
                try:
                    results.append(self.parse(path))
                except Exception:
                    logger.exception("Failed to parse %s", path)
            return results

        by_path: dict[Path, ParsedUsfm] = {}
        with concurrent.futures.ProcessPoolExecutor(
            max_workers=self._config.max_workers
        ) as executor:
            futures = {
                executor.submit(_parse_file, path, self._config): path for path in files
            }
            for future in concurrent.futures.as_completed(futures):
                path = futures[future]
                try:
                    by_path[path] = future.result()
                except Exception:
                    logger.exception("Failed to parse %s", path)
        return [by_path[path] for path in files if path in by_path]

    def _check_extension(self, file_path: Path) -> None:
        """Reject files that do not carry the configured extension.

        Raises:
            ValueError: If the extension does not match.
        """
        ext = file_path.suffix.lower()
        expected = self._config.file_extension.lower()
        if ext != expected:
            raise ValueError(f"Unsupported file format: '{ext}'. Expected: {expected}")

    def _read_text(self, file_path: Path) -> tuple[str, str]:
        """Read a source file with encoding detection.

        Tries UTF-8 (with or without BOM) first, then chardet, then the
        configured fallback encoding.

        Returns:
            The decoded text and the name of the encoding used.
        """
        raw_bytes = file_path.read_bytes()
        try:
            return raw_bytes.decode("utf-8-sig"), "utf-8"
        except UnicodeDecodeError:
            pass

        detected = chardet.detect(raw_bytes)
        encoding = detected.get("encoding") or self._config.fallback_encoding
        confidence = detected.get("confidence", 0)

        if confidence < 0.7:
            logger.warning(
                "Low confidence encoding detection for %s: %s (%.0f%%)",
                file_path,
                encoding,
                confidence * 100,
            )

        try:
            return raw_bytes.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError):
            try:
                fallback = self._config.fallback_encoding
                return raw_bytes.decode(fallback), fallback
            except (UnicodeDecodeError, LookupError):
                logger.error("Failed to decode file: %s", file_path)
                return raw_bytes.decode("utf-8", errors="replace"), "utf-8"


def _parse_file(path: Path, config: ParsingConfig) -> ParsedUsfm:
    # Module level so the process pool can pickle it
    return UsfmParser(config).parse(path)
