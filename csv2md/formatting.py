"""
Column format resolution.

A format source is CSV in the same dialect as the data, up to three rows:

1. column names (an empty cell means "use the data's header cell")
2. alignment tokens: l/left/:--, c/center/centered/:--:, r/right/--:
3. style tokens: b/bold/__, i/italic/italics/_, s/strikethrough/~~

Tokens are matched case-insensitively after trimming. Anything unrecognized,
including the empty string, means no alignment or no style.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence

from . import rules
from .errors import NoFormatDataError
from .log import get_logger
from .models import Alignment, Style, TableFormat

logger = get_logger(__name__)

_ALIGNMENT_TOKENS = {
    "l": Alignment.LEFT,
    "left": Alignment.LEFT,
    rules.ALIGN_LEFT: Alignment.LEFT,
    "c": Alignment.CENTER,
    "center": Alignment.CENTER,
    "centered": Alignment.CENTER,
    rules.ALIGN_CENTER: Alignment.CENTER,
    "r": Alignment.RIGHT,
    "right": Alignment.RIGHT,
    rules.ALIGN_RIGHT: Alignment.RIGHT,
}

_STYLE_TOKENS = {
    "b": Style.BOLD,
    "bold": Style.BOLD,
    rules.STYLE_BOLD: Style.BOLD,
    "i": Style.ITALIC,
    "italic": Style.ITALIC,
    "italics": Style.ITALIC,
    rules.STYLE_ITALIC: Style.ITALIC,
    "s": Style.STRIKETHROUGH,
    "strikethrough": Style.STRIKETHROUGH,
    rules.STYLE_STRIKETHROUGH: Style.STRIKETHROUGH,
}


def parse_alignment(token: str) -> Alignment:
    return _ALIGNMENT_TOKENS.get(token.strip().lower(), Alignment.NONE)


def parse_style(token: str) -> Style:
    return _STYLE_TOKENS.get(token.strip().lower(), Style.NONE)


def parse_alignments(tokens: Iterable[str]) -> List[Alignment]:
    return [parse_alignment(t) for t in tokens]


def parse_styles(tokens: Iterable[str]) -> List[Style]:
    return [parse_style(t) for t in tokens]


class FormatResolver:
    """
    Builds a TableFormat, either incrementally (set_* calls append) or from
    a format source (resolve replaces everything).
    """

    def __init__(self, table_format: TableFormat | None = None):
        self.format = table_format if table_format is not None else TableFormat()

    def set_field_names(self, names: Sequence[str]) -> None:
        self.format.names.extend(names)

    def set_field_alignment(self, tokens: Iterable[str]) -> None:
        self.format.alignment.extend(parse_alignments(tokens))

    def set_field_style(self, tokens: Iterable[str]) -> None:
        self.format.style.extend(parse_styles(tokens))

    def resolve(self, records: Iterable[Sequence[str]]) -> TableFormat:
        """
        Read up to three rows from ``records`` into the format.

        Raises NoFormatDataError when the source yields no rows. Errors from
        the source itself propagate unchanged.
        """
        rows: List[Sequence[str]] = []
        extra = 0
        for record in records:
            if len(rows) < rules.FORMAT_ROWS:
                rows.append(record)
            else:
                # keep draining so tokenizer errors in trailing rows still surface
                extra += 1
        if not rows:
            raise NoFormatDataError()

        self.format.names = list(rows[0])
        self.format.alignment = parse_alignments(rows[1]) if len(rows) > 1 else []
        self.format.style = parse_styles(rows[2]) if len(rows) > 2 else []
        logger.debug("format source: %d row(s) used, %d ignored", len(rows), extra)
        return self.format


def resolve_format(records: Iterable[Sequence[str]]) -> TableFormat:
    return FormatResolver().resolve(records)
