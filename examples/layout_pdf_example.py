"""
Example demonstrating how to convert a text-based PDF to Markdown from its layout.
"""

import sys

from layout_parse import LayoutConfig, LayoutParser, NoExtractableTextError

pdf_path = sys.argv[1] if len(sys.argv) > 1 else "test.pdf"  # local path to your pdf file

# Loosen heading detection slightly for documents with subtle title sizes
config = LayoutConfig(
    heading_min_ratio=1.2,
    break_after_factor=1.5,  # treat smaller vertical gaps as paragraph breaks
)

parser = LayoutParser(config=config)

try:
    markdown_pages = parser.convert_pdf_pages(pdf_path)
except NoExtractableTextError as e:
    raise SystemExit(f"{e}. Try an OCR tool first.")

# Process results
for i, page_content in enumerate(markdown_pages):
    print(f"\n--- Page {i+1} ---\n{page_content}")

# Combine all pages into a single markdown file
with open("output_combined.md", "w", encoding="utf-8") as f:
    f.write(parser.convert_pdf(pdf_path))

print(f"Converted {len(markdown_pages)} pages to markdown.")
