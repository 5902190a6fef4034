from pathlib import Path
from typing import Sequence, Tuple

import fitz  # PyMuPDF
import pypdfium2 as pdfium
import pytest

PAGE_WIDTH = 612
PAGE_HEIGHT = 792


def _write_text_pdf(path: Path, lines: Sequence[Tuple[float, float, float, str]]) -> Path:
    """Write a one-page Helvetica PDF; each line is (font_size, x, baseline_y, text).

    Baselines are given in PDF space (origin bottom-left).
    """
    doc = fitz.open()
    try:
        page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        for size, x, y, text in lines:
            page.insert_text((x, PAGE_HEIGHT - y), text, fontsize=size, fontname="helv")
        doc.save(str(path))
    finally:
        doc.close()
    return path


def _write_blank_pdf(path: Path, page_count: int) -> Path:
    pdf = pdfium.PdfDocument.new()
    try:
        for _ in range(page_count):
            pdf.new_page(PAGE_WIDTH, PAGE_HEIGHT)
        pdf.save(str(path))
    finally:
        pdf.close()
    return path


@pytest.fixture
def report_pdf(tmp_path) -> Path:
    """A one-page report: a title, a sentence and a two-column table."""
    return _write_text_pdf(
        tmp_path / "report.pdf",
        [
            (24, 72, 700, "Report Title"),
            (12, 72, 640, "This is the body text of the report."),
            (12, 72, 600, "Fruit"),
            (12, 300, 600, "Qty"),
            (12, 72, 585, "Apples"),
            (12, 300, 585, "3"),
        ],
    )


@pytest.fixture
def blank_pdf(tmp_path) -> Path:
    return _write_blank_pdf(tmp_path / "blank.pdf", 2)


@pytest.fixture
def make_blank_pdf(tmp_path):
    def _make(page_count: int, name: str = "pages.pdf") -> Path:
        return _write_blank_pdf(tmp_path / name, page_count)

    return _make


@pytest.fixture
def mixed_size_pdf(tmp_path) -> Path:
    """A 12pt label and a 24pt value sharing one baseline."""
    return _write_text_pdf(
        tmp_path / "mixed.pdf",
        [(12, 72, 600, "Total due"), (24, 200, 600, "42")],
    )
