import logging
from pathlib import Path
from typing import List, Optional, Union

from tqdm import tqdm

from .constants import LayoutConfig
from .extractor import PdfTextExtractor
from .markdown import (
    PageLimitExceededError,
    assemble_document,
    build_pages,
    render_pages,
)
from .models import Page

_logger = logging.getLogger(__name__)


class UnsupportedFileError(Exception):
    """Raised when the input file is not a PDF."""

    pass


class FileTooLargeError(Exception):
    """Raised when the input file exceeds the configured byte limit."""

    def __init__(self, size: int, maximum: int):
        self.size = size
        self.maximum = maximum
        super().__init__(
            f"PDF is {size} bytes; at most {maximum} bytes are supported"
        )


class LayoutParser:
    """Convert text-based PDFs to Markdown by reconstructing layout from geometry."""

    def __init__(
        self,
        config: Optional[LayoutConfig] = None,
        show_progress: bool = True,
    ):
        """Initialize parser with layout thresholds and admission limits."""
        self.config = config or LayoutConfig()
        self.show_progress = show_progress

    def _check_file(self, pdf_path: Path) -> None:
        """Refuse missing, non-PDF and oversized inputs before opening them."""
        if not pdf_path.exists() or not pdf_path.is_file():
            raise FileNotFoundError(f"PDF file not found: {pdf_path}")

        if pdf_path.suffix.lower() != ".pdf":
            raise UnsupportedFileError(f"File is not a PDF: {pdf_path}")

        size = pdf_path.stat().st_size
        if size > self.config.max_file_bytes:
            _logger.warning("Refusing %s: %d bytes", pdf_path.name, size)
            raise FileTooLargeError(size, self.config.max_file_bytes)

    def _extract_pages(self, pdf_path: Union[str, Path]) -> List[Page]:
        """Admit the document, then classify its pages in order."""
        pdf_path = Path(pdf_path)
        self._check_file(pdf_path)

        extractor = PdfTextExtractor(pdf_path)
        total_pages = extractor.page_count()
        _logger.info("Loaded %d pages from %s", total_pages, pdf_path.name)
        if total_pages > self.config.max_pages:
            _logger.warning("Refusing %s: %d pages", pdf_path.name, total_pages)
            raise PageLimitExceededError(total_pages, self.config.max_pages)

        raw_pages = list(
            tqdm(
                extractor.iter_page_runs(),
                total=total_pages,
                desc="Extracting text from pages",
                disable=not self.show_progress,
            )
        )
        return build_pages(raw_pages, self.config)

    def convert_pdf_pages(self, pdf_path: Union[str, Path]) -> List[str]:
        """Convert each page to Markdown; empty pages come back as ''."""
        pages = self._extract_pages(pdf_path)
        return render_pages(pages, self.config)

    def convert_pdf(self, pdf_path: Union[str, Path]) -> str:
        """Convert the whole PDF to one Markdown string with page-break markers."""
        markdown = assemble_document(self.convert_pdf_pages(pdf_path))
        _logger.info("Markdown extracted from %s", Path(pdf_path).name)
        return markdown
