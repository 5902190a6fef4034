import logging
import re
from typing import Iterable, List, Optional, Sequence, Union

from .constants import PAGE_BREAK, LayoutConfig
from .layout import build_page, estimate_body_font_size
from .models import Line, Page, RawTextRun
from .tables import reconstruct_table, render_tab_block
from .utils import has_list_marker, normalize_list_marker

_logger = logging.getLogger(__name__)


class PageLimitExceededError(Exception):
    """Raised when a document has more pages than the engine accepts."""

    def __init__(self, actual: int, maximum: int):
        self.actual = actual
        self.maximum = maximum
        super().__init__(
            f"PDF has {actual} pages; at most {maximum} pages are supported"
        )


class NoExtractableTextError(Exception):
    """Raised when a document yields no text lines at all."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "No extractable text found; the PDF may be a scanned image (OCR is not supported)"
        )


def _meets_ratio(font_size: float, body_font_size: float, ratio: float) -> bool:
    return font_size >= body_font_size * ratio


def heading_level(
    text: str,
    font_size: float,
    body_font_size: float,
    config: Optional[LayoutConfig] = None,
) -> int:
    """Return the Markdown heading level for a line, or 0 for body text."""
    config = config or LayoutConfig()
    if (
        len(text) > config.heading_max_chars
        or has_list_marker(text)
        or "\t" in text
        or len(text.split()) > config.heading_max_words
        or not _meets_ratio(font_size, body_font_size, config.heading_min_ratio)
    ):
        return 0
    if _meets_ratio(font_size, body_font_size, config.heading_h1_ratio):
        return 1
    if _meets_ratio(font_size, body_font_size, config.heading_h2_ratio):
        return 2
    return 3


def _finish_block(content: str) -> str:
    """Collapse blank-line runs, drop trailing spaces and trim the block."""
    content = re.sub(r"\n{3,}", "\n\n", content)
    content = re.sub(r"[ \t]+\n", "\n", content)
    return content.strip()


def render_page(
    lines: Sequence[Line],
    body_font_size: float,
    config: Optional[LayoutConfig] = None,
) -> str:
    """Render one page's classified lines to a Markdown block."""
    config = config or LayoutConfig()
    markdown_lines: List[str] = []
    index = 0

    while index < len(lines):
        line = lines[index]

        if line.has_tabs:
            end = index
            while end < len(lines) and lines[end].has_tabs:
                end += 1
            block = reconstruct_table(lines[index:end])
            markdown_lines.append(render_tab_block(block))
            markdown_lines.append("")
            index = end
            continue

        text = normalize_list_marker(line.text)
        if not text:
            markdown_lines.append("")
            index += 1
            continue

        level = heading_level(text, line.font_size, body_font_size, config)
        if level:
            markdown_lines.append(f"{'#' * level} {text}")
        else:
            markdown_lines.append(text)

        if line.break_after:
            markdown_lines.append("")
        index += 1

    return _finish_block("\n".join(markdown_lines))


def assemble_document(page_blocks: Iterable[str]) -> str:
    """Join non-empty page blocks with a thematic-break page marker."""
    return PAGE_BREAK.join(block for block in page_blocks if block).strip()


def build_pages(
    raw_pages: Sequence[Iterable[Union[RawTextRun, dict]]],
    config: Optional[LayoutConfig] = None,
) -> List[Page]:
    """Classify every page, refusing documents over the page limit."""
    config = config or LayoutConfig()
    if len(raw_pages) > config.max_pages:
        raise PageLimitExceededError(len(raw_pages), config.max_pages)

    pages = [
        build_page(runs, number, config)
        for number, runs in enumerate(raw_pages, start=1)
    ]
    if not any(page.lines for page in pages):
        raise NoExtractableTextError()
    return pages


def render_pages(
    pages: Sequence[Page], config: Optional[LayoutConfig] = None
) -> List[str]:
    """Render every page against one document-wide body font size."""
    config = config or LayoutConfig()
    body_font_size = estimate_body_font_size(pages, config)
    _logger.debug("Body font size: %.2f", body_font_size)
    return [render_page(page.lines, body_font_size, config) for page in pages]


def text_to_markdown(
    raw_pages: Sequence[Iterable[Union[RawTextRun, dict]]],
    config: Optional[LayoutConfig] = None,
) -> str:
    """Reconstruct Markdown from per-page sets of positioned text runs.

    Raises PageLimitExceededError before any page is examined when there are
    too many pages, and NoExtractableTextError when no page yields a line.
    """
    pages = build_pages(raw_pages, config)
    return assemble_document(render_pages(pages, config))
