from pydantic import BaseModel, Field

# Row clustering: baselines are snapped to multiples of this many units.
ROW_BUCKET_SIZE: float = 2.0

# Separator inference between adjacent runs on one row.
TAB_GAP_MIN: float = 24.0
TAB_GAP_CHAR_FACTOR: float = 6.0
SPACE_GAP_MIN: float = 6.0
SPACE_GAP_CHAR_FACTOR: float = 1.75
INITIAL_CHAR_WIDTH: float = 5.0

# A blank line follows a row when the drop to the next row exceeds
# this multiple of the row's font size.
BREAK_AFTER_FACTOR: float = 1.7

# Body font estimation.
BODY_MIN_CHARS: int = 20
DEFAULT_BODY_FONT_SIZE: float = 12.0

# Heading detection, as ratios of line font size to body font size.
HEADING_MIN_RATIO: float = 1.28
HEADING_H2_RATIO: float = 1.65
HEADING_H1_RATIO: float = 1.95
HEADING_MAX_CHARS: int = 90
HEADING_MAX_WORDS: int = 14

# Fallbacks for runs with missing geometry.
DEFAULT_RUN_FONT_SIZE: float = 12.0
MIN_DEFAULT_RUN_WIDTH: float = 4.0
DEFAULT_RUN_CHAR_WIDTH: float = 4.0

# Admission limits.
MAX_PAGES: int = 100
MAX_FILE_BYTES: int = 10 * 1024 * 1024

BULLET_CHARS = "•◦▪▸►‣"
PAGE_BREAK = "\n\n---\n\n"


class LayoutConfig(BaseModel):
    """Tunable thresholds for layout reconstruction."""

    row_bucket_size: float = Field(ROW_BUCKET_SIZE, gt=0)  # y-quantization step
    tab_gap_min: float = Field(TAB_GAP_MIN, ge=0)  # smallest gap that can become a tab
    tab_gap_char_factor: float = Field(TAB_GAP_CHAR_FACTOR, gt=0)  # tab gap in char widths
    space_gap_min: float = Field(SPACE_GAP_MIN, ge=0)  # smallest gap that can become a space
    space_gap_char_factor: float = Field(SPACE_GAP_CHAR_FACTOR, gt=0)  # space gap in char widths
    initial_char_width: float = Field(INITIAL_CHAR_WIDTH, gt=0)  # char width before any run
    break_after_factor: float = Field(BREAK_AFTER_FACTOR, gt=0)  # paragraph gap in font sizes
    body_min_chars: int = Field(BODY_MIN_CHARS, ge=0)  # shortest line counted as prose
    default_body_font_size: float = Field(DEFAULT_BODY_FONT_SIZE, gt=0)
    heading_min_ratio: float = Field(HEADING_MIN_RATIO, gt=0)
    heading_h2_ratio: float = Field(HEADING_H2_RATIO, gt=0)
    heading_h1_ratio: float = Field(HEADING_H1_RATIO, gt=0)
    heading_max_chars: int = Field(HEADING_MAX_CHARS, gt=0)
    heading_max_words: int = Field(HEADING_MAX_WORDS, gt=0)
    max_pages: int = Field(MAX_PAGES, gt=0)  # documents with more pages are refused
    max_file_bytes: int = Field(MAX_FILE_BYTES, gt=0)  # files larger than this are refused
