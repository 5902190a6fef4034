import math
from typing import Any, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _finite_or_none(value: Any) -> Optional[float]:
    """Coerce a geometry value to float, mapping junk to None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class RawTextRun(BaseModel):
    """One positioned text run as reported by a PDF text-extraction library.

    Accepts both the flat ``{text, x, y, width, fontSize}`` shape and the
    ``{str, transform, width, height}`` shape. Geometry that is missing or
    unparseable is stored as ``None`` and defaulted later, never rejected.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(default="", alias="str")
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    font_size: Optional[float] = Field(default=None, alias="fontSize")
    transform: Optional[Tuple[float, ...]] = None

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("x", "y", "width", "height", "font_size", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> Optional[float]:
        return _finite_or_none(value)

    @field_validator("transform", mode="before")
    @classmethod
    def _coerce_transform(cls, value: Any) -> Optional[Tuple[float, ...]]:
        if value is None:
            return None
        try:
            numbers = [_finite_or_none(v) for v in value]
        except TypeError:
            return None
        if len(numbers) < 6 or any(n is None for n in numbers[:6]):
            return None
        return tuple(numbers[:6])

    @classmethod
    def coerce(cls, run: Union["RawTextRun", dict]) -> "RawTextRun":
        """Return ``run`` as a RawTextRun, accepting plain mappings."""
        if isinstance(run, cls):
            return run
        return cls.model_validate(dict(run))


class TextSegment(BaseModel):
    """A trimmed, whitespace-collapsed run with resolved geometry."""

    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    width: float
    font_size: float


class Row(BaseModel):
    """Segments sharing one quantized baseline, ordered left to right."""

    model_config = ConfigDict(frozen=True)

    quantized_y: float
    segments: Tuple[TextSegment, ...]


class Line(BaseModel):
    """Markdown-ready text of one row plus the metadata rendering needs."""

    model_config = ConfigDict(frozen=True)

    text: str
    has_tabs: bool = False
    font_size: float
    break_after: bool = False
    y: float = 0.0


class Page(BaseModel):
    """The classified lines of one PDF page, top to bottom."""

    model_config = ConfigDict(frozen=True)

    number: int
    lines: Tuple[Line, ...] = ()


class TableBlock(BaseModel):
    """A tab-bearing block accepted as a rectangular table."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["table"] = "table"
    rows: Tuple[Tuple[str, ...], ...]

    @property
    def column_count(self) -> int:
        return len(self.rows[0]) if self.rows else 0


class FlattenedLines(BaseModel):
    """A tab-bearing block rejected as a table, kept as plain lines."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["lines"] = "lines"
    lines: Tuple[str, ...]


TabBlock = Union[TableBlock, FlattenedLines]
