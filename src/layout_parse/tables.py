import logging
from typing import List, Sequence

from .models import FlattenedLines, Line, TabBlock, TableBlock
from .utils import collapse_spaces, normalize_list_marker

_logger = logging.getLogger(__name__)


def split_cells(text: str) -> List[str]:
    """Split a tab-bearing line into trimmed cell strings."""
    return [cell.strip() for cell in text.split("\t")]


def _escape_cell(cell: str) -> str:
    return cell.replace("|", "\\|")


def reconstruct_table(lines: Sequence[Line]) -> TabBlock:
    """Decide whether a run of tab-bearing lines forms a rectangular table.

    A block is a table when it has at least two rows, at least two columns,
    and its rows differ in cell count by no more than one. Short rows are
    padded with empty cells. Anything else degrades to plain lines.
    """
    rows = [split_cells(line.text) for line in lines]
    counts = [len(row) for row in rows]
    min_cols = min(counts, default=0)
    max_cols = max(counts, default=0)

    if len(rows) >= 2 and max_cols >= 2 and max_cols - min_cols <= 1:
        _logger.debug("Accepted %dx%d table", len(rows), max_cols)
        padded = tuple(
            tuple(_escape_cell(cell) for cell in row) + ("",) * (max_cols - len(row))
            for row in rows
        )
        return TableBlock(rows=padded)

    _logger.debug(
        "Rejected table block: %d rows, %d-%d columns", len(rows), min_cols, max_cols
    )
    flattened = tuple(
        normalize_list_marker(collapse_spaces(line.text.replace("\t", " ")).strip())
        for line in lines
    )
    return FlattenedLines(lines=flattened)


def _pipe_row(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def render_tab_block(block: TabBlock) -> str:
    """Render a reconstructed block as a pipe table or as plain lines."""
    if isinstance(block, FlattenedLines):
        return "\n".join(block.lines)

    header, *body = block.rows
    md_lines = [_pipe_row(header), _pipe_row(["---"] * block.column_count)]
    md_lines.extend(_pipe_row(row) for row in body)
    return "\n".join(md_lines)
