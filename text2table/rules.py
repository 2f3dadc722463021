"""
Fixed conversion rules.

These are not configurable; anything a deployment may want to change lives in settings.py.
"""

DOUBLE_QUOTE = '"'

SOURCE_ENCODING = "utf-8-sig"  # UTF-8, BOM tolerated
OUTPUT_ENCODING = "utf-8"

# Markdown columns are never narrower than this
MIN_COLUMN_WIDTH = 3

# Placeholder used for column names when the input has no header row
UNKNOWN_COLUMN = "?"

DEFAULT_TABLE_NAME = "table_name"

ALLOWED_EXTENSIONS = (".txt", ".csv", ".tsv", ".dat", ".tab", ".text")
