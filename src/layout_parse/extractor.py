import logging
from contextlib import suppress
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import pdfplumber
import pypdfium2 as pdfium

from .models import RawTextRun

_logger = logging.getLogger(__name__)
logging.getLogger("pdfminer").setLevel(logging.ERROR)


class ExtractionError(Exception):
    """Raised when the PDF cannot be opened or its text cannot be decoded."""

    def __init__(self, message: str, cause: Union[BaseException, None] = None):
        super().__init__(message)
        self.cause = cause


def word_to_run(word: Dict[str, Any], page_height: float) -> RawTextRun:
    """Map a pdfplumber word to a run positioned on its baseline.

    The baseline is the translation of the first glyph's text matrix, which
    is in bottom-left page space and does not move with font size. Words
    without glyph matrices fall back to the bottom of their bounding box.
    """
    x0 = float(word["x0"])
    chars = word.get("chars") or []
    matrix = chars[0].get("matrix") if chars else None
    if matrix is not None and len(matrix) >= 6:
        baseline = float(matrix[5])
    else:
        baseline = page_height - float(word["bottom"])
    return RawTextRun(
        text=word.get("text", ""),
        x=x0,
        y=baseline,
        width=float(word["x1"]) - x0,
        height=float(word["bottom"]) - float(word["top"]),
        font_size=word.get("size"),
    )


class PdfTextExtractor:
    """Pull positioned text runs out of a PDF, one page at a time.

    The page count comes from pypdfium2, which opens the document without
    decoding page content, so callers can refuse oversized documents before
    any text is extracted. Runs come from pdfplumber words: characters on one
    line that touch (blank characters included) and share a font size.
    """

    def __init__(self, pdf_path: Union[str, Path], x_tolerance: float = 3.0) -> None:
        self.pdf_path = Path(pdf_path)
        self.x_tolerance = x_tolerance

    def page_count(self) -> int:
        """Return the number of pages in the document."""
        pdf_document = None
        try:
            pdf_document = pdfium.PdfDocument(str(self.pdf_path))
            return len(pdf_document)
        except Exception as e:
            _logger.warning("Unable to open %s: %s", self.pdf_path.name, e)
            raise ExtractionError(
                f"Failed to open PDF file {self.pdf_path.name}: {str(e)}", e
            ) from e
        finally:
            if pdf_document is not None:
                with suppress(Exception):
                    pdf_document.close()

    def _page_runs(self, page: Any) -> List[RawTextRun]:
        words = page.extract_words(
            x_tolerance=self.x_tolerance,
            keep_blank_chars=True,
            extra_attrs=["size"],
            return_chars=True,
        )
        page_height = float(page.height)
        return [word_to_run(word, page_height) for word in words]

    def iter_page_runs(self) -> Iterator[List[RawTextRun]]:
        """Yield each page's runs in document order."""
        try:
            with pdfplumber.open(str(self.pdf_path)) as plumber_pdf:
                for page_number, plumber_page in enumerate(plumber_pdf.pages, start=1):
                    runs = self._page_runs(plumber_page)
                    _logger.debug("Page %d: %d text runs", page_number, len(runs))
                    yield runs
        except Exception as e:
            _logger.warning("Text extraction failed for %s: %s", self.pdf_path.name, e)
            raise ExtractionError(
                f"Failed to extract text from {self.pdf_path.name}: {str(e)}", e
            ) from e
