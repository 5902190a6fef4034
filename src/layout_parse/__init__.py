from .constants import LayoutConfig
from .extractor import ExtractionError, PdfTextExtractor
from .layout import (
    assemble_row,
    build_page,
    classify_lines,
    cluster_rows,
    estimate_body_font_size,
    normalize_segment,
    quantize_y,
)
from .markdown import (
    NoExtractableTextError,
    PageLimitExceededError,
    heading_level,
    render_page,
    text_to_markdown,
)
from .models import (
    FlattenedLines,
    Line,
    Page,
    RawTextRun,
    Row,
    TableBlock,
    TextSegment,
)
from .parser import FileTooLargeError, LayoutParser, UnsupportedFileError
from .tables import reconstruct_table, render_tab_block
from .utils import median

__version__ = "0.1.0"

__all__ = [
    "LayoutParser",
    "LayoutConfig",
    "PdfTextExtractor",
    "text_to_markdown",
    "render_page",
    "heading_level",
    "build_page",
    "normalize_segment",
    "quantize_y",
    "cluster_rows",
    "assemble_row",
    "classify_lines",
    "estimate_body_font_size",
    "reconstruct_table",
    "render_tab_block",
    "median",
    "RawTextRun",
    "TextSegment",
    "Row",
    "Line",
    "Page",
    "TableBlock",
    "FlattenedLines",
    "ExtractionError",
    "PageLimitExceededError",
    "NoExtractableTextError",
    "UnsupportedFileError",
    "FileTooLargeError",
]
