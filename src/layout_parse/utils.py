import re
from typing import Iterable

from .constants import BULLET_CHARS

_BULLET_RE = re.compile(f"^[{re.escape(BULLET_CHARS)}]\\s*")
_PAREN_NUMBER_RE = re.compile(r"^\((\d+)\)\s+")
_LIST_MARKER_RE = re.compile(r"^(?:[-*+]|\d+[.)])(?:\s|$)")


def median(values: Iterable[float]) -> float:
    """Return the statistical median, or 0 for an empty input."""
    ordered = sorted(values)
    if not ordered:
        return 0.0
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return float(ordered[mid])
    return (ordered[mid - 1] + ordered[mid]) / 2.0


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space and trim the edges."""
    return re.sub(r"\s+", " ", text).strip()


def collapse_spaces(text: str) -> str:
    """Collapse runs of plain spaces, leaving tabs alone."""
    return re.sub(r" {2,}", " ", text)


def normalize_list_marker(text: str) -> str:
    """Rewrite bullet glyphs as '- ' and '(n) ' as 'n. '."""
    text = _BULLET_RE.sub("- ", text, count=1)
    return _PAREN_NUMBER_RE.sub(r"\1. ", text, count=1)


def has_list_marker(text: str) -> bool:
    """True if text starts with a bullet or numbered-list marker."""
    stripped = text.lstrip()
    return bool(stripped) and (
        stripped[0] in BULLET_CHARS or bool(_LIST_MARKER_RE.match(stripped))
    )
