"""
Errors raised while resolving formats or emitting tables.

Tokenizer errors (csv.Error) and I/O errors (OSError) are not wrapped;
they reach the caller as raised.
"""


class Csv2MdError(Exception):
    """Base class for csv2md errors."""


class NoFormatDataError(Csv2MdError):
    """A format source was supplied but produced no rows."""

    def __init__(self, message: str = "no format data"):
        super().__init__(message)


class ShortWriteError(Csv2MdError):
    """The sink accepted fewer bytes than were submitted."""

    def __init__(self, requested: int, written: int, operation: str):
        self.requested = requested
        self.written = written
        self.operation = operation
        super().__init__(f"{operation}: short write, wrote {written} of {requested} bytes")
