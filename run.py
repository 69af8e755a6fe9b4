"""Entry point for the USFM book parser."""

import logging
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser

from usfmbook.config import load_config
from usfmbook.ingestion.parser import UsfmParser
from usfmbook.storage.database import initialize_database, save_parsed_book
from usfmbook.storage.export import format_book_summary, write_book_json

logger = logging.getLogger(__name__)


def build_arg_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Convert a directory of USFM files into structured JSON books.",
        formatter_class=ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("source_dir", nargs="?", help="directory containing .usfm files")
    parser.add_argument("-c", "--config", default="config.yaml", help="YAML config file")
    parser.add_argument("-o", "--output-dir", help="directory for JSON output")
    parser.add_argument("--store", action="store_true", help="also save books to SQLite")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="info logging")
    verbosity.add_argument("-d", "--debug", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse every USFM file in the source directory and write the results."""
    args = build_arg_parser().parse_args(argv)
    config = load_config(args.config)

    level = config.logging.level
    if args.verbose:
        level = "INFO"
    elif args.debug:
        level = "DEBUG"
    logging.basicConfig(format=config.logging.format, level=level)

    source_dir = args.source_dir or config.source_dir
    if not source_dir:
        logger.error("No source directory given (argument or USFM_SOURCE_DIR)")
        return 1

    parser = UsfmParser(config.parsing)
    try:
        results = parser.parse_directory(source_dir)
    except NotADirectoryError as err:
        logger.error("%s", err)
        return 1
    if not results:
        logger.error("No %s files parsed in %s", config.parsing.file_extension, source_dir)
        return 1

    output_dir = args.output_dir or config.output.output_dir
    if args.store:
        initialize_database(config.storage.sqlite_path)

    for parsed in results:
        write_book_json(parsed, output_dir, indent=config.output.indent)
        if args.store:
            save_parsed_book(config.storage.sqlite_path, parsed)
        print(format_book_summary(parsed.book))
        if parsed.diagnostics:
            print(f"  {len(parsed.diagnostics)} lines skipped")

    print("Done")
    return 0


if __name__ == "__main__":
    sys.exit(main())
