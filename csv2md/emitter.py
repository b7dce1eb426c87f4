"""
GFM table emission.

TableEmitter reads records from any iterable of string lists and writes
table lines to a binary sink. Every write must be accepted in full; a sink
reporting fewer bytes than submitted stops the run with ShortWriteError.
"""

from __future__ import annotations

from typing import BinaryIO, Iterable, Optional, Sequence

from . import rules
from .errors import ShortWriteError
from .log import get_logger
from .models import TableFormat

logger = get_logger(__name__)


def resolve_newline(token: str, current: str = rules.DEFAULT_NEWLINE) -> str:
    """
    Map a newline token to the terminator written after each line.

    "cr", "CR" or a line feed give two spaces + LF; "lf", "LF" or a carriage
    return give two spaces + CR; "crlf", "CRLF" or CR LF give three spaces +
    CR. Unrecognized tokens return ``current`` unchanged.
    """
    return rules.NEWLINE_TOKENS.get(token, current)


class TableEmitter:
    """
    One conversion run: records in, GFM table out.

    If ``table_format`` has names, the header block is written from them and,
    when ``has_header_record`` is set, the data's first record is dropped.
    Without names, a first record flagged as header becomes the header block.
    """

    def __init__(
        self,
        records: Iterable[Sequence[str]],
        sink: BinaryIO,
        *,
        table_format: Optional[TableFormat] = None,
        has_header_record: bool = True,
        newline: str = "\n",
    ):
        self.records = records
        self.sink = sink
        self.format = table_format if table_format is not None else TableFormat()
        self.has_header_record = has_header_record
        self._newline = resolve_newline(newline)
        self._bytes_written = 0
        self._rows = 0

    @property
    def newline(self) -> str:
        return self._newline

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    @property
    def rows(self) -> int:
        return self._rows

    def emit(self) -> int:
        """Write the whole table. Returns the total number of bytes written."""
        if self.format.has_names:
            logger.debug("header block from format names")
            self._write_header_block(self.format.names)

        for record in self.records:
            self._rows += 1
            if self._rows == 1 and self.has_header_record:
                if self.format.has_names:
                    continue
                logger.debug("header block from first record")
                self._write_header_block(record)
                continue
            self._write_record(record)

        logger.debug("table done: %d record(s), %d byte(s)", self._rows, self._bytes_written)
        return self._bytes_written

    def _write(self, text: str, operation: str) -> None:
        data = text.encode(rules.OUTPUT_ENCODING)
        n = self.sink.write(data)
        # non-blocking raw streams return None when nothing was accepted
        if n is None:
            n = 0
        if n != len(data):
            raise ShortWriteError(requested=len(data), written=n, operation=operation)
        self._bytes_written += n

    def _write_cells(self, cells: Sequence[str], operation: str) -> None:
        end = len(cells) - 1
        for i, cell in enumerate(cells):
            if i < end:
                cell += rules.CELL_DELIMITER
            self._write(cell, operation)
        self._write(self._newline, "newline")

    def _write_header_block(self, names: Sequence[str]) -> None:
        self._write_cells(names, "header field")
        separators = [self.format.alignment_for(i).value for i in range(len(names))]
        self._write_cells(separators, "separator")

    def _write_record(self, fields: Sequence[str]) -> None:
        styled = self.format.has_style
        cells = []
        for i, field in enumerate(fields):
            # an empty cell would collapse the column in rendered markdown
            if field == "":
                field = rules.EMPTY_CELL
            if styled:
                marker = self.format.style_for(i).value
                field = f"{marker}{field}{marker}"
            cells.append(field)
        self._write_cells(cells, "data field")
