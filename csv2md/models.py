from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from . import rules


class Alignment(str, Enum):
    LEFT = rules.ALIGN_LEFT
    CENTER = rules.ALIGN_CENTER
    RIGHT = rules.ALIGN_RIGHT
    NONE = rules.ALIGN_NONE


class Style(str, Enum):
    BOLD = rules.STYLE_BOLD
    ITALIC = rules.STYLE_ITALIC
    STRIKETHROUGH = rules.STYLE_STRIKETHROUGH
    NONE = rules.STYLE_NONE


class TableFormat(BaseModel):
    """
    Column schema as three positional lists.

    The lists may differ in length. Lookups past the end of the alignment or
    style list resolve to NONE; entries past the column count are never read.
    """

    names: List[str] = Field(default_factory=list)
    alignment: List[Alignment] = Field(default_factory=list)
    style: List[Style] = Field(default_factory=list)

    @property
    def has_names(self) -> bool:
        return len(self.names) > 0

    @property
    def has_alignment(self) -> bool:
        return len(self.alignment) > 0

    @property
    def has_style(self) -> bool:
        return len(self.style) > 0

    def alignment_for(self, i: int) -> Alignment:
        if i < len(self.alignment):
            return self.alignment[i]
        return Alignment.NONE

    def style_for(self, i: int) -> Style:
        if i < len(self.style):
            return self.style[i]
        return Style.NONE


def _single_char(name: str, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {value!r}")
    if value in ('"', "\r", "\n"):
        raise ValueError(f"{name} cannot be a quote or line break")
    return value


class ReaderOptions(BaseModel):
    """CSV dialect shared by the data source and the format source."""

    delimiter: str = rules.DEFAULT_DELIMITER
    lazy_quotes: bool = False
    trim_leading_space: bool = False
    comment: Optional[str] = None
    # 0: taken from the first record, > 0: fixed, < 0: unchecked
    fields_per_record: int = 0

    @field_validator("delimiter")
    @classmethod
    def _check_delimiter(cls, v: str) -> str:
        return _single_char("delimiter", v)

    @field_validator("comment")
    @classmethod
    def _check_comment(cls, v: Optional[str]) -> Optional[str]:
        if v == "":
            return None
        return _single_char("comment", v)

    @model_validator(mode="after")
    def _check_distinct(self) -> "ReaderOptions":
        if self.comment is not None and self.comment == self.delimiter:
            raise ValueError("comment and delimiter must differ")
        return self


class ConvertOptions(BaseModel):
    reader: ReaderOptions = Field(default_factory=ReaderOptions)
    newline: str = "\n"
    has_header_record: bool = True


class MarkdownTable(BaseModel):
    sha256: str
    encoding: str = Field(default=rules.OUTPUT_ENCODING)
    content_b64: str
    text: str


class ConversionReport(BaseModel):
    rows: int = 0
    columns: Optional[int] = Field(default=None, examples=[4])
    bytes_written: int = 0
    newline: str = rules.DEFAULT_NEWLINE
    encoding: Optional[str] = None
    has_header_record: bool = True
    format_applied: bool = False


class ConvertResponse(BaseModel):
    markdown: MarkdownTable
    report: ConversionReport


class HealthResponse(BaseModel):
    ok: bool = True
