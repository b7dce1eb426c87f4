"""
Conversion pipeline shared by the HTTP service and the CLI.

Responsibilities:
- encoding detection for uploaded CSV bytes
- building record sources for the data and the format file
- filling empty format names from the data's header record
- running the emitter and reporting what it did
"""

from __future__ import annotations

import base64
import hashlib
import io
import itertools
from typing import Any, BinaryIO, Dict, Iterable, Iterator, Optional, Sequence, TextIO, Tuple

from charset_normalizer import from_bytes

from . import rules
from .emitter import TableEmitter
from .formatting import resolve_format
from .log import get_logger
from .models import ConvertOptions, TableFormat
from .records import read_records, records_from_text

logger = get_logger(__name__)

_UTF8_NAMES = ("utf_8", "utf8")


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def decode_text(raw: bytes) -> Tuple[str, Dict[str, Any]]:
    """
    Decode CSV bytes to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer; default to UTF-8.
    - A UTF-8 BOM is dropped rather than becoming part of the first cell.
    - If decoding fails, fall back to UTF-8 with replacement characters and
      report it.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and decode_used.lower().replace("-", "_") in _UTF8_NAMES:
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        logger.warning("could not decode input as %s, using utf-8 with replacement", decode_used)
        decode_used = "utf-8"
        text = raw.decode(decode_used, errors="replace")
        decode_fallback = True

    return text, {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
    }


def fill_names_from_header(
    table_format: TableFormat, records: Iterable[Sequence[str]]
) -> Iterator[Sequence[str]]:
    """
    Fill empty format names with the matching cells of the data's first
    record.

    The first record is peeked, not consumed: the returned iterator yields it
    again so the emitter can drop it as the data header.
    """
    it = iter(records)
    first = next(it, None)
    if first is None:
        return it
    table_format.names = [
        name if name != "" or i >= len(first) else first[i]
        for i, name in enumerate(table_format.names)
    ]
    return itertools.chain([first], it)


def convert_stream(
    data: TextIO,
    sink: BinaryIO,
    format_source: Optional[TextIO] = None,
    options: Optional[ConvertOptions] = None,
) -> TableEmitter:
    """
    Convert CSV text from ``data`` into a GFM table written to ``sink``.

    ``format_source`` is read fully before anything is written. Returns the
    finished emitter for its counters.
    """
    options = options or ConvertOptions()

    table_format = TableFormat()
    if format_source is not None:
        table_format = resolve_format(read_records(format_source, options.reader))

    records: Iterable[Sequence[str]] = read_records(data, options.reader)
    if options.has_header_record and "" in table_format.names:
        records = fill_names_from_header(table_format, records)

    emitter = TableEmitter(
        records,
        sink,
        table_format=table_format,
        has_header_record=options.has_header_record,
        newline=options.newline,
    )
    emitter.emit()
    return emitter


def convert_text(
    text: str,
    format_text: Optional[str] = None,
    options: Optional[ConvertOptions] = None,
) -> Tuple[bytes, Dict[str, Any]]:
    options = options or ConvertOptions()
    sink = io.BytesIO()
    format_source = io.StringIO(format_text, newline="") if format_text is not None else None
    emitter = convert_stream(io.StringIO(text, newline=""), sink, format_source, options)

    columns = None
    if emitter.format.has_names:
        columns = len(emitter.format.names)
    else:
        first = next(records_from_text(text, options.reader), None)
        if first is not None:
            columns = len(first)

    report = {
        "rows": emitter.rows,
        "columns": columns,
        "bytes_written": emitter.bytes_written,
        "newline": emitter.newline,
        "has_header_record": options.has_header_record,
        "format_applied": format_text is not None,
    }
    return sink.getvalue(), report


def convert_csv_bytes(
    raw: bytes,
    format_raw: Optional[bytes] = None,
    options: Optional[ConvertOptions] = None,
) -> Dict[str, Any]:
    """
    Convert uploaded CSV bytes (and optional format file bytes).
    Returns a dict matching the API's response envelope.
    """
    text, enc_report = decode_text(raw)
    format_text = format_raw.decode(rules.FORMAT_ENCODING) if format_raw is not None else None

    markdown, report = convert_text(text, format_text, options)
    report["encoding"] = enc_report["decode_used"]

    return {
        "markdown": {
            "sha256": _sha256_hex(markdown),
            "encoding": rules.OUTPUT_ENCODING,
            "content_b64": base64.b64encode(markdown).decode("ascii"),
            "text": markdown.decode(rules.OUTPUT_ENCODING),
        },
        "report": report,
    }
