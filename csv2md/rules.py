"""
Fixed GFM table markup rules.

Every marker the emitter writes comes from here; nothing else in the
package spells out pipe-table syntax.
"""

# Alignment separator markers (header separator row)
ALIGN_LEFT = ":--"
ALIGN_CENTER = ":--:"
ALIGN_RIGHT = "--:"
ALIGN_NONE = "---"

# Inline text style markers (written as both prefix and suffix)
STYLE_ITALIC = "_"
STYLE_BOLD = "__"
STYLE_STRIKETHROUGH = "~~"
STYLE_NONE = ""

CELL_DELIMITER = "|"
EMPTY_CELL = " "

# GFM only breaks a line that ends in two spaces, so the padding is part of
# the terminator itself.
NEWLINE_CR = "  \n"
NEWLINE_LF = "  \r"
NEWLINE_CRLF = "   \r"
DEFAULT_NEWLINE = NEWLINE_CR

NEWLINE_TOKENS = {
    "cr": NEWLINE_CR,
    "CR": NEWLINE_CR,
    "\n": NEWLINE_CR,
    "lf": NEWLINE_LF,
    "LF": NEWLINE_LF,
    "\r": NEWLINE_LF,
    "crlf": NEWLINE_CRLF,
    "CRLF": NEWLINE_CRLF,
    "\r\n": NEWLINE_CRLF,
}

# Format source: names, alignment, style. Anything after is ignored.
FORMAT_ROWS = 3

DEFAULT_DELIMITER = ","
OUTPUT_ENCODING = "utf-8"
FORMAT_ENCODING = "utf-8-sig"
