import pytest
from pydantic import ValidationError

from layout_parse import (
    LayoutConfig,
    Line,
    Page,
    Row,
    TextSegment,
    assemble_row,
    build_page,
    classify_lines,
    cluster_rows,
    estimate_body_font_size,
    median,
    normalize_segment,
    quantize_y,
)
from layout_parse.layout import gap_separator


def _segment(text, x, y=100.0, width=None, font_size=12.0):
    return TextSegment(
        text=text,
        x=x,
        y=y,
        width=width if width is not None else len(text) * 5.0,
        font_size=font_size,
    )


def _row(*segments, y=100.0):
    return Row(quantized_y=y, segments=tuple(segments))


@pytest.mark.parametrize(
    "values, expected",
    [([1, 2, 3, 4], 2.5), ([7], 7), ([], 0), ([3, 1, 2], 2)],
)
def test_median(values, expected):
    assert median(values) == expected


@pytest.mark.parametrize("y", [0.0, 1.0, 1.2, 3.0, 99.9, 700.5, -5.3, 641.04])
def test_quantize_y_is_idempotent(y):
    once = quantize_y(y)
    assert quantize_y(once) == once
    assert once % 2 == 0


def test_quantize_y_rounds_half_up():
    assert quantize_y(1.0) == 2.0
    assert quantize_y(0.99) == 0.0


def test_normalize_segment_collapses_whitespace():
    segment = normalize_segment(
        {"text": "  Hello \n  world ", "x": 10, "y": 20, "width": 50, "fontSize": 11}
    )
    assert segment.text == "Hello world"
    assert (segment.x, segment.y, segment.width, segment.font_size) == (10, 20, 50, 11)


@pytest.mark.parametrize("text", ["", "   ", "\t\n"])
def test_normalize_segment_drops_blank_runs(text):
    assert normalize_segment({"text": text, "x": 0, "y": 0}) is None


def test_normalize_segment_defaults_missing_geometry():
    segment = normalize_segment({"text": "abc"})
    assert segment.x == 0
    assert segment.y == 0
    assert segment.width == 12
    assert segment.font_size == 12

    short = normalize_segment({"text": "a", "width": "garbage", "fontSize": None})
    assert short.width == 4
    assert short.font_size == 12


def test_normalize_segment_reads_transform_shape():
    segment = normalize_segment(
        {"str": "Hi", "transform": [18, 0, 0, 18, 50, 700], "width": 20}
    )
    assert (segment.x, segment.y) == (50, 700)
    assert segment.font_size == 18


def test_normalize_segment_prefers_height_over_transform_scale():
    segment = normalize_segment(
        {"str": "Hi", "transform": [1, 0, 0, 1, 5, 6], "height": 14}
    )
    assert segment.font_size == 14


def test_normalize_segment_ignores_non_positive_font_size():
    assert normalize_segment({"text": "x", "fontSize": 0}).font_size == 12


def test_cluster_rows_orders_top_to_bottom_and_left_to_right():
    segments = [
        _segment("b", 50, y=100.4),
        _segment("low", 0, y=80),
        _segment("a", 10, y=99.6),
        _segment("top", 0, y=300),
    ]
    rows = cluster_rows(segments)
    assert [row.quantized_y for row in rows] == [300, 100, 80]
    assert [seg.text for seg in rows[1].segments] == ["a", "b"]
    for upper, lower in zip(rows, rows[1:]):
        assert upper.quantized_y > lower.quantized_y
    for row in rows:
        xs = [seg.x for seg in row.segments]
        assert xs == sorted(xs)


def test_cluster_rows_keeps_insertion_order_for_equal_x():
    rows = cluster_rows([_segment("first", 5), _segment("second", 5)])
    assert [seg.text for seg in rows[0].segments] == ["first", "second"]


def test_cluster_rows_tolerates_baseline_jitter():
    rows = cluster_rows([_segment("a", 0, y=100.2), _segment("b", 30, y=100.9)])
    assert len(rows) == 1


@pytest.mark.parametrize(
    "gap, expected", [(5, ""), (8.75, ""), (20, " "), (30, " "), (40, "\t")]
)
def test_gap_separator_thresholds(gap, expected):
    assert gap_separator(gap, previous_char_width=5) == expected


def test_gap_separator_uses_absolute_minimums_for_narrow_glyphs():
    assert gap_separator(6.5, previous_char_width=1) == " "
    assert gap_separator(24.5, previous_char_width=1) == "\t"
    assert gap_separator(6, previous_char_width=1) == ""


def test_assemble_row_joins_split_glyph_runs():
    text, has_tabs = assemble_row(_row(_segment("Hel", 0), _segment("lo", 16)))
    assert text == "Hello"
    assert not has_tabs


def test_assemble_row_inserts_space_and_tab():
    row = _row(
        _segment("Hello", 0, width=25),
        _segment("world", 45, width=25),
        _segment("42", 110, width=10),
    )
    text, has_tabs = assemble_row(row)
    assert text == "Hello world\t42"
    assert has_tabs


def test_assemble_row_collapses_spaces():
    text, _ = assemble_row(_row(_segment("a  b", 0, width=20)))
    assert text == "a b"


def test_classify_lines_font_size_and_breaks():
    rows = [
        _row(_segment("Title", 0, font_size=20), _segment("Part", 40, font_size=24), y=700),
        _row(_segment("First body line", 0), y=650),
        _row(_segment("Second body line", 0), y=636),
    ]
    lines = classify_lines(rows)
    assert [line.font_size for line in lines] == [22, 12, 12]
    # 50 > 22 * 1.7, 14 < 12 * 1.7, last line never breaks
    assert [line.break_after for line in lines] == [True, False, False]


def test_classify_lines_respects_configured_break_factor():
    rows = [_row(_segment("a", 0), y=100), _row(_segment("b", 0), y=80)]
    assert classify_lines(rows)[0].break_after is False
    loose = LayoutConfig(break_after_factor=1.5)
    assert classify_lines(rows, loose)[0].break_after is True


def test_build_page_from_raw_runs():
    page = build_page(
        [
            {"text": "second", "x": 0, "y": 50, "width": 30},
            {"text": " ", "x": 0, "y": 40},
            {"text": "first", "x": 0, "y": 90, "width": 25},
        ],
        number=3,
    )
    assert page.number == 3
    assert [line.text for line in page.lines] == ["first", "second"]


def _line(text, font_size, has_tabs=False):
    return Line(text=text, font_size=font_size, has_tabs=has_tabs)


def test_body_font_uses_long_tab_free_lines():
    pages = [
        Page(number=1, lines=(_line("Big Title", 30), _line("x" * 25, 10))),
        Page(
            number=2,
            lines=(_line("y" * 30, 11), _line("a\tb" + "c" * 30, 40)),
        ),
    ]
    assert estimate_body_font_size(pages) == 10.5


def test_body_font_falls_back_to_all_lines():
    pages = [Page(number=1, lines=(_line("Short", 14), _line("Tiny", 10)))]
    assert estimate_body_font_size(pages) == 12


def test_body_font_defaults_without_lines():
    assert estimate_body_font_size([Page(number=1)]) == 12
    assert estimate_body_font_size([], LayoutConfig(default_body_font_size=9)) == 9


@pytest.mark.parametrize(
    "field, value",
    [
        ("row_bucket_size", 0),
        ("row_bucket_size", -2),
        ("tab_gap_char_factor", 0),
        ("break_after_factor", -1),
        ("heading_min_ratio", 0),
        ("default_body_font_size", 0),
        ("max_pages", 0),
    ],
)
def test_layout_config_rejects_non_positive_thresholds(field, value):
    with pytest.raises(ValidationError):
        LayoutConfig(**{field: value})
