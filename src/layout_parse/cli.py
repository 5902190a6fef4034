import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .constants import PAGE_BREAK
from .extractor import ExtractionError
from .markdown import NoExtractableTextError, PageLimitExceededError
from .parser import FileTooLargeError, LayoutParser, UnsupportedFileError

_KNOWN_ERRORS = (
    FileNotFoundError,
    UnsupportedFileError,
    FileTooLargeError,
    PageLimitExceededError,
    NoExtractableTextError,
    ExtractionError,
)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="layout-parse",
        description="Reconstruct Markdown from the text layout of a PDF.",
    )
    parser.add_argument("pdf_path", help="Path to the input PDF file")
    parser.add_argument(
        "-o", "--output", help="Write Markdown to this file instead of stdout"
    )
    parser.add_argument(
        "--pages",
        action="store_true",
        help="Emit one block per page, keeping empty pages",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Hide the progress bar"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    # Minimal logging setup when running as a script
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

    parser = LayoutParser(show_progress=not args.no_progress)
    pdf_path = Path(args.pdf_path).resolve()
    try:
        if args.pages:
            markdown = PAGE_BREAK.join(parser.convert_pdf_pages(pdf_path))
        else:
            markdown = parser.convert_pdf(pdf_path)
    except _KNOWN_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_text(markdown + "\n", encoding="utf-8")
    else:
        sys.stdout.write(markdown + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
