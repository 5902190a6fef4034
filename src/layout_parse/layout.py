"""Geometric reconstruction of text lines from positioned PDF text runs.

A page arrives as an unordered bag of runs. The stages below turn it into
classified lines: runs are normalized into segments, segments are bucketed
into rows by baseline, each row is assembled into one string with inferred
separators, and each line is tagged with its font size and whether a
paragraph gap follows it. Every stage is a pure function of its input.
"""

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .constants import (
    DEFAULT_RUN_CHAR_WIDTH,
    DEFAULT_RUN_FONT_SIZE,
    MIN_DEFAULT_RUN_WIDTH,
    LayoutConfig,
)
from .models import Line, Page, RawTextRun, Row, TextSegment
from .utils import collapse_spaces, collapse_whitespace, median

_logger = logging.getLogger(__name__)


# ---------- Segment normalization ----------


def _resolve_font_size(run: RawTextRun) -> float:
    candidates = [run.font_size, run.height]
    if run.transform is not None:
        candidates.append(math.hypot(run.transform[0], run.transform[1]))
    for size in candidates:
        if size is not None and size > 0:
            return size
    return DEFAULT_RUN_FONT_SIZE


def normalize_segment(run: Union[RawTextRun, dict]) -> Optional[TextSegment]:
    """Turn one raw run into a TextSegment, or None if it holds no text."""
    run = RawTextRun.coerce(run)
    text = collapse_whitespace(run.text)
    if not text:
        return None

    x, y = run.x, run.y
    if run.transform is not None:
        x = run.transform[4] if x is None else x
        y = run.transform[5] if y is None else y

    width = run.width
    if width is None:
        width = max(MIN_DEFAULT_RUN_WIDTH, len(text) * DEFAULT_RUN_CHAR_WIDTH)

    return TextSegment(
        text=text,
        x=x if x is not None else 0.0,
        y=y if y is not None else 0.0,
        width=width,
        font_size=_resolve_font_size(run),
    )


def normalize_segments(runs: Iterable[Union[RawTextRun, dict]]) -> List[TextSegment]:
    """Normalize a page's runs, dropping empty and whitespace-only ones."""
    segments = []
    for run in runs:
        segment = normalize_segment(run)
        if segment is not None:
            segments.append(segment)
    return segments


# ---------- Row clustering ----------


def quantize_y(y: float, bucket_size: float = 2.0) -> float:
    """Snap a baseline to the nearest multiple of ``bucket_size`` (halves up)."""
    return math.floor(y / bucket_size + 0.5) * bucket_size


def cluster_rows(
    segments: Iterable[TextSegment], config: Optional[LayoutConfig] = None
) -> List[Row]:
    """Bucket segments into rows, top of page first, each sorted by x."""
    config = config or LayoutConfig()
    buckets: Dict[float, List[TextSegment]] = defaultdict(list)
    for segment in segments:
        buckets[quantize_y(segment.y, config.row_bucket_size)].append(segment)

    rows = []
    for bucket in sorted(buckets, reverse=True):
        members = buckets[bucket]
        if not members:
            continue
        # sorted() is stable, so ties on x keep insertion order
        rows.append(
            Row(
                quantized_y=bucket,
                segments=tuple(sorted(members, key=lambda seg: seg.x)),
            )
        )
    return rows


# ---------- Row-to-line assembly ----------


def gap_separator(
    gap: float, previous_char_width: float, config: Optional[LayoutConfig] = None
) -> str:
    """Return the separator implied by a horizontal gap: tab, space or nothing."""
    config = config or LayoutConfig()
    tab_threshold = max(
        config.tab_gap_min, previous_char_width * config.tab_gap_char_factor
    )
    if gap > tab_threshold:
        return "\t"
    space_threshold = max(
        config.space_gap_min, previous_char_width * config.space_gap_char_factor
    )
    if gap > space_threshold:
        return " "
    return ""


def assemble_row(
    row: Row, config: Optional[LayoutConfig] = None
) -> Tuple[str, bool]:
    """Join a row's segments into one string, inferring separators.

    Returns the normalized text and whether a tab separator was inserted.
    """
    config = config or LayoutConfig()
    parts: List[str] = []
    has_tabs = False
    previous_end: Optional[float] = None
    previous_char_width = config.initial_char_width

    for segment in row.segments:
        if previous_end is not None:
            separator = gap_separator(
                segment.x - previous_end, previous_char_width, config
            )
            if separator == "\t":
                has_tabs = True
            parts.append(separator)
        parts.append(segment.text)
        previous_end = segment.x + segment.width
        previous_char_width = segment.width / max(len(segment.text), 1)

    text = "".join(parts).rstrip(" \t")
    return collapse_spaces(text), has_tabs


# ---------- Line classification ----------


def classify_lines(
    rows: Sequence[Row], config: Optional[LayoutConfig] = None
) -> List[Line]:
    """Assemble rows into Lines carrying font size and paragraph-break flags."""
    config = config or LayoutConfig()
    assembled = []
    for row in rows:
        text, has_tabs = assemble_row(row, config)
        if not text:
            continue
        font_size = sum(seg.font_size for seg in row.segments) / len(row.segments)
        assembled.append((row.quantized_y, text, has_tabs, font_size))

    lines = []
    for index, (y, text, has_tabs, font_size) in enumerate(assembled):
        break_after = False
        if index + 1 < len(assembled):
            next_y = assembled[index + 1][0]
            break_after = (y - next_y) > font_size * config.break_after_factor
        lines.append(
            Line(
                text=text,
                has_tabs=has_tabs,
                font_size=font_size,
                break_after=break_after,
                y=y,
            )
        )
    return lines


def build_page(
    runs: Iterable[Union[RawTextRun, dict]],
    number: int = 1,
    config: Optional[LayoutConfig] = None,
) -> Page:
    """Run normalization, clustering and classification for one page."""
    config = config or LayoutConfig()
    segments = normalize_segments(runs)
    rows = cluster_rows(segments, config)
    lines = classify_lines(rows, config)
    _logger.debug(
        "Page %d: %d segments, %d rows, %d lines",
        number,
        len(segments),
        len(rows),
        len(lines),
    )
    return Page(number=number, lines=tuple(lines))


# ---------- Body font estimation ----------


def estimate_body_font_size(
    pages: Iterable[Page], config: Optional[LayoutConfig] = None
) -> float:
    """Median font size of long, tab-free lines across the whole document.

    Falls back to every line when no line qualifies, and to the configured
    nominal size when the document has no lines at all.
    """
    config = config or LayoutConfig()
    all_lines = [line for page in pages for line in page.lines]
    candidates = [
        line.font_size
        for line in all_lines
        if len(line.text) >= config.body_min_chars and not line.has_tabs
    ]
    if not candidates:
        candidates = [line.font_size for line in all_lines]
    if not candidates:
        return config.default_body_font_size
    return median(candidates)
