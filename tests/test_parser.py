"""Tests for the USFM document parser."""

import logging
from pathlib import Path

import pytest

from usfmbook.config import ParsingConfig
from usfmbook.ingestion.parser import UsfmParser, split_lines
from usfmbook.models.book import DescriptiveTitleBlock, ParaBlock, PoeticLineBlock, VerseBlock
from usfmbook.models.inline import Footnote, FootnoteDetails, ItalicText, PlainText

FIXTURES_DIR = Path(__file__).parent / "fixtures" / "sample_usfm"


@pytest.fixture
def parser() -> UsfmParser:
    return UsfmParser()


class TestParseLines:
    """Tests for parsing already-decoded lines."""

    def test_minimal_book(self, parser: UsfmParser) -> None:
        result = parser.parse_lines(
            [r"\id GEN", r"\toc1 Genesis", r"\c 1", r"\v 1 In the beginning"]
        )
        assert result.book.id == "GEN"
        assert result.book.long_name == "Genesis"
        assert result.book.chapters[0].number == 1
        assert result.book.chapters[0].content == [
            VerseBlock(number=1, items=[PlainText(text="In the beginning")])
        ]
        assert result.diagnostics == []

    def test_empty_lines_are_skipped_silently(self, parser: UsfmParser) -> None:
        result = parser.parse_lines(["", r"\p", ""])
        assert result.diagnostics == []
        assert result.book.chapters[0].content == [ParaBlock(items=[])]

    def test_whitespace_only_line_is_reported(self, parser: UsfmParser) -> None:
        result = parser.parse_lines([r"\c 1", "   ", r"\v 1 x"])
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.line_number == 2
        assert diagnostic.line == "   "
        assert diagnostic.reason == "line does not start with a tag"
        assert result.book.chapters[0].content == [
            VerseBlock(number=1, items=[PlainText(text="x")])
        ]

    def test_bad_line_is_skipped_and_reported(
        self, parser: UsfmParser, caplog: pytest.LogCaptureFixture
    ) -> None:
        lines = [r"\c 1", r"\v 1 first", r"\v InTheBeginning", r"\v 2 second"]
        with caplog.at_level(logging.WARNING):
            result = parser.parse_lines(lines, source_path="gen.usfm")

        verses = [b.number for b in result.book.chapters[0].content if isinstance(b, VerseBlock)]
        assert verses == [1, 2]
        assert len(result.diagnostics) == 1
        diagnostic = result.diagnostics[0]
        assert diagnostic.line_number == 3
        assert diagnostic.line == r"\v InTheBeginning"
        assert diagnostic.reason == r"unrecognised tag combination for \v"
        assert r"\v InTheBeginning" in caplog.text

    def test_line_starting_with_text_is_reported(self, parser: UsfmParser) -> None:
        result = parser.parse_lines(["stray continuation text"])
        assert result.diagnostics[0].reason == "line does not start with a tag"

    def test_footnote_without_body_is_not_fatal(self, parser: UsfmParser) -> None:
        result = parser.parse_lines(
            [r"\c 1", r"\p Grace\f + \fr 1:1\f*", r"\p Peace"]
        )
        assert len(result.diagnostics) == 1
        assert result.book.chapters[0].content == [
            ParaBlock(items=[PlainText(text="Peace")])
        ]

    def test_source_path_and_encoding_recorded(self, parser: UsfmParser) -> None:
        result = parser.parse_lines([r"\p"], source_path="x.usfm", encoding="cp1252")
        assert result.source_path == "x.usfm"
        assert result.encoding == "cp1252"


class TestSplitLines:
    """Tests for splitting decoded text into lines."""

    def test_newline_and_crlf(self) -> None:
        assert split_lines("\\p\r\n\\q1\n") == ["\\p", "\\q1", ""]

    def test_other_separators_are_kept(self) -> None:
        text = "a\x0bb\x0cc\x1cd\x85e\u2028f\u2029g"
        assert split_lines(text) == [text]


class TestParseFile:
    """Tests for reading fixture files."""

    def test_parse_second_john(self, parser: UsfmParser) -> None:
        result = parser.parse(FIXTURES_DIR / "2jn.usfm")
        book = result.book
        assert book.id == "2JN"
        assert book.long_name == "Second John"
        assert book.short_name == "2 John"
        assert book.abbreviation == "2Jn"
        assert [c.number for c in book.chapters] == [1]

        content = book.chapters[0].content
        assert len(content) == 9
        assert content[4] == VerseBlock(
            number=3,
            items=[
                PlainText(text="Grace, mercy, and peace will be with us from God the Father."),
                Footnote(
                    details=FootnoteDetails(
                        symbol="+",
                        reference="1:3",
                        body='Literally, "from Jesus Christ, the Son of the Father."',
                    )
                ),
            ],
        )
        assert content[5] == VerseBlock(
            number=4,
            items=[
                PlainText(text="I was very glad to find some of your children "),
                ItalicText(text="living"),
                PlainText(text=" in the truth."),
            ],
        )
        assert content[6] == PoeticLineBlock(text=None)
        assert content[7] == PoeticLineBlock(text="Love one another.")

        assert len(result.diagnostics) == 1
        assert result.diagnostics[0].line_number == 16

    def test_parse_psalm_with_cross_reference(self, parser: UsfmParser) -> None:
        result = parser.parse(FIXTURES_DIR / "psa.usfm")
        assert result.diagnostics == []
        chapter = result.book.chapters[0]
        assert chapter.number == 53
        title = chapter.content[0]
        assert isinstance(title, DescriptiveTitleBlock)
        footnote = title.items[1]
        assert isinstance(footnote, Footnote)
        assert footnote.details.body == "This psalm is almost identical to Psalms 14."
        assert chapter.content[-1] == ParaBlock(
            items=[PlainText(text="They are corrupt.")], indented=True
        )

    def test_crlf_line_endings(self, parser: UsfmParser, tmp_path: Path) -> None:
        f = tmp_path / "gen.usfm"
        f.write_bytes(b"\\id GEN\r\n\\c 1\r\n\\v 1 In the beginning\r\n")
        result = parser.parse(f)
        assert result.diagnostics == []
        assert result.book.chapters[0].number == 1

    def test_form_feed_inside_verse_does_not_split_line(
        self, parser: UsfmParser, tmp_path: Path
    ) -> None:
        f = tmp_path / "gen.usfm"
        f.write_text("\\c 1\n\\v 1 In the\x0cbeginning\n", encoding="utf-8")
        result = parser.parse(f)
        assert result.diagnostics == []
        assert result.book.chapters[0].content == [
            VerseBlock(number=1, items=[PlainText(text="In the\x0cbeginning")])
        ]

    def test_utf8_bom_is_stripped(self, parser: UsfmParser, tmp_path: Path) -> None:
        f = tmp_path / "gen.usfm"
        f.write_bytes("\\id GEN\n".encode("utf-8-sig"))
        result = parser.parse(f)
        assert result.book.id == "GEN"
        assert result.encoding == "utf-8"

    def test_non_utf8_file_is_decoded(self, parser: UsfmParser, tmp_path: Path) -> None:
        f = tmp_path / "gen.usfm"
        text = "\\id GEN\n\\toc1 Génesis première\n\\c 1\n\\v 1 Au commencement, Dieu créa.\n"
        f.write_bytes(text.encode("latin-1"))
        result = parser.parse(f)
        assert result.book.id == "GEN"
        assert result.encoding != "utf-8"
        assert result.diagnostics == []

    def test_nonexistent_file_raises(self, parser: UsfmParser) -> None:
        with pytest.raises(FileNotFoundError):
            parser.parse("/nonexistent/file.usfm")

    def test_wrong_extension_raises(self, parser: UsfmParser, tmp_path: Path) -> None:
        f = tmp_path / "book.txt"
        f.touch()
        with pytest.raises(ValueError, match="Unsupported file format"):
            parser.parse(f)

    def test_extension_is_case_insensitive(self, parser: UsfmParser, tmp_path: Path) -> None:
        f = tmp_path / "GEN.USFM"
        f.write_text("\\id GEN\n", encoding="utf-8")
        assert parser.parse(f).book.id == "GEN"


class TestParseDirectory:
    """Tests for multi-file runs."""

    def test_discover_filters_and_sorts(self, parser: UsfmParser, tmp_path: Path) -> None:
        (tmp_path / "b.usfm").write_text("\\p\n", encoding="utf-8")
        (tmp_path / "a.usfm").write_text("\\p\n", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignore", encoding="utf-8")
        (tmp_path / "sub.usfm").mkdir()
        assert [p.name for p in parser.discover(tmp_path)] == ["a.usfm", "b.usfm"]

    def test_discover_requires_directory(self, parser: UsfmParser, tmp_path: Path) -> None:
        with pytest.raises(NotADirectoryError):
            parser.discover(tmp_path / "missing")

    def test_all_files_are_processed(self, parser: UsfmParser) -> None:
        results = parser.parse_directory(FIXTURES_DIR)
        assert [r.book.id for r in results] == ["2JN", "PSA"]

    def test_failing_file_does_not_stop_the_run(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "a.usfm").write_text("\\id AAA\n", encoding="utf-8")
        (tmp_path / "b.usfm").write_text("\\id BBB\n", encoding="utf-8")
        (tmp_path / "c.usfm").write_text("\\id CCC\n", encoding="utf-8")

        parser = UsfmParser()
        real_read = parser._read_text

        def flaky_read(path: Path) -> tuple[str, str]:
            if path.name == "b.usfm":
                raise OSError("disk error")
            return real_read(path)

        monkeypatch.setattr(parser, "_read_text", flaky_read)
        results = parser.parse_directory(tmp_path)

        assert [r.book.id for r in results] == ["AAA", "CCC"]
        assert "Failed to parse" in caplog.text

    def test_process_pool_keeps_order(self, tmp_path: Path) -> None:
        for code in ("GEN", "EXO", "LEV"):
            (tmp_path / f"{code.lower()}.usfm").write_text(f"\\id {code}\n", encoding="utf-8")
        parser = UsfmParser(ParsingConfig(max_workers=2))
        results = parser.parse_directory(tmp_path)
        assert [r.book.id for r in results] == ["EXO", "GEN", "LEV"]

    def test_custom_extension(self, tmp_path: Path) -> None:
        (tmp_path / "gen.sfm").write_text("\\id GEN\n", encoding="utf-8")
        (tmp_path / "exo.usfm").write_text("\\id EXO\n", encoding="utf-8")
        parser = UsfmParser(ParsingConfig(file_extension=".sfm"))
        assert [r.book.id for r in parser.parse_directory(tmp_path)] == ["GEN"]
