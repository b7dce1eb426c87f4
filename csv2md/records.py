"""
Record sources built on the standard library csv tokenizer.

The emitter and the format resolver only need an iterable of string lists;
this module turns a text stream plus ReaderOptions into one.

Quoting differs from stricter CSV readers in one spot:
with ``lazy_quotes`` off the reader runs with ``strict=True``, which rejects
stray characters after a closing quote but still accepts a bare quote inside
an unquoted field (``a,b"c`` reads as ``["a", 'b"c']``).
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, Iterator, List, Optional

from .models import ReaderOptions

Record = List[str]


class _CommentFilter:
    """
    Line iterator that drops comment lines, but only where a record starts.

    A quoted field spanning lines may have a continuation line beginning
    with the comment character; that line belongs to the field.
    """

    def __init__(self, lines: Iterable[str], comment: Optional[str]):
        self._lines = iter(lines)
        self.comment = comment
        self.at_record_start = True

    def __iter__(self) -> "_CommentFilter":
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        if self.at_record_start and self.comment is not None:
            while line.startswith(self.comment):
                line = next(self._lines)
        self.at_record_start = False
        return line


def read_records(stream: Iterable[str], options: Optional[ReaderOptions] = None) -> Iterator[Record]:
    """
    Yield records from a text stream (file opened with newline="", list of
    lines, StringIO...).

    Blank lines and comment lines are skipped. Unless fields_per_record is
    negative, every record must have the same number of fields as the first
    one (or exactly fields_per_record when positive); a mismatch raises
    csv.Error.
    """
    options = options or ReaderOptions()
    lines = _CommentFilter(stream, options.comment)
    reader = csv.reader(
        lines,
        delimiter=options.delimiter,
        skipinitialspace=options.trim_leading_space,
        strict=not options.lazy_quotes,
    )

    expected = options.fields_per_record
    n = 0
    for record in reader:
        # the reader pulls lines on demand, so the next line starts a record
        lines.at_record_start = True
        if not record:
            continue
        n += 1
        if expected == 0:
            expected = len(record)
        elif expected > 0 and len(record) != expected:
            raise csv.Error(
                f"record {n} (line {reader.line_num}): wrong number of fields, "
                f"got {len(record)} want {expected}"
            )
        yield record


def records_from_text(text: str, options: Optional[ReaderOptions] = None) -> Iterator[Record]:
    return read_records(io.StringIO(text, newline=""), options)
