"""Command line front-end: ``csv2md [OPTIONS] [INPUT]``."""

from __future__ import annotations

import csv
import logging
from contextlib import ExitStack
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from .convert import convert_stream
from .errors import Csv2MdError
from .log import get_logger, setup_logging
from .models import ConvertOptions, ReaderOptions

logger = get_logger(__name__)

STDIO = "-"
INPUT_ENCODING = "utf-8-sig"


def format_path_for(input_path: str) -> Path:
    """Default format file location: the input path with a .fmt suffix."""
    if input_path == STDIO:
        raise click.UsageError(
            "cannot infer the format file location when reading stdin; "
            "pass it with --format-file/-m"
        )
    return Path(input_path).with_suffix(".fmt")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_path", metavar="INPUT", default=STDIO, type=click.Path(allow_dash=True, dir_okay=False))
@click.option("-o", "--output", "output_path", default=STDIO, type=click.Path(allow_dash=True, dir_okay=False),
              help="Output file; stdout when omitted.")
@click.option("-f", "--format", "use_format", is_flag=True,
              help="Use the format file next to INPUT (same name, .fmt extension).")
@click.option("-m", "--format-file", type=click.Path(exists=True, dir_okay=False),
              help="Path to the format file; implies --format.")
@click.option("-n", "--newline", default="\n", show_default=repr("\n"),
              help="Newline sequence: cr, lf, crlf (or the literal characters).")
@click.option("-r", "--no-header-record", is_flag=True,
              help="The first CSV record is data, not field names.")
@click.option("-s", "--separator", default=",", show_default=True, help="Field delimiter.")
@click.option("-l", "--lazy-quotes", is_flag=True, help="Tolerate malformed quoting.")
@click.option("-t", "--trim-leading-space", is_flag=True, help="Ignore spaces after a delimiter.")
@click.option("-c", "--comment", default=None, help="Skip lines starting with this character.")
@click.option("-v", "--verbose", count=True, help="More logging (repeatable).")
def cli(
    input_path: str,
    output_path: str,
    use_format: bool,
    format_file: Optional[str],
    newline: str,
    no_header_record: bool,
    separator: str,
    lazy_quotes: bool,
    trim_leading_space: bool,
    comment: Optional[str],
    verbose: int,
) -> None:
    """Create GitHub Flavored Markdown tables from CSV-encoded data."""
    setup_logging(logging.WARNING - 10 * verbose if verbose else None)

    try:
        options = ConvertOptions(
            reader=ReaderOptions(
                delimiter=separator[:1] or ",",
                lazy_quotes=lazy_quotes,
                trim_leading_space=trim_leading_space,
                comment=comment,
            ),
            newline=newline,
            has_header_record=not no_header_record,
        )
    except ValidationError as e:
        raise click.UsageError(str(e))

    fmt_path: Optional[Path] = None
    if format_file:
        fmt_path = Path(format_file)
    elif use_format:
        fmt_path = format_path_for(input_path)
    if fmt_path is not None:
        logger.info("using format file %s", fmt_path)

    try:
        with ExitStack() as stack:
            fmt = None
            if fmt_path is not None:
                fmt = stack.enter_context(click.open_file(str(fmt_path), "r", encoding=INPUT_ENCODING))
            # "-" maps to stdin/stdout, which click leaves open on exit
            data = stack.enter_context(click.open_file(input_path, "r", encoding=INPUT_ENCODING))
            out = stack.enter_context(click.open_file(output_path, "wb"))
            emitter = convert_stream(data, out, fmt, options)
            out.flush()
    except (Csv2MdError, csv.Error, OSError, UnicodeDecodeError) as e:
        raise click.ClickException(f"conversion error: {e}")

    logger.info("wrote %d record(s), %d byte(s)", emitter.rows, emitter.bytes_written)


def main() -> None:
    cli(prog_name="csv2md")


if __name__ == "__main__":
    main()
