import csv
import io

import pytest
from pydantic import ValidationError

from csv2md.models import ReaderOptions
from csv2md.records import read_records, records_from_text


def test_reads_records():
    assert list(records_from_text("a,b\n1,2\n")) == [["a", "b"], ["1", "2"]]


def test_skips_blank_and_comment_lines():
    text = "# generated\na,b\n\n1,2\n#2,3\n"
    records = records_from_text(text, ReaderOptions(comment="#"))
    assert list(records) == [["a", "b"], ["1", "2"]]


def test_delimiter_and_trim_leading_space():
    options = ReaderOptions(delimiter=";", trim_leading_space=True)
    assert list(records_from_text("a; b\n1;  2\n", options)) == [["a", "b"], ["1", "2"]]


def test_quoted_fields():
    assert list(records_from_text('a,"b,c"\n1,"say ""hi"""\n')) == [["a", "b,c"], ["1", 'say "hi"']]


def test_wrong_field_count():
    with pytest.raises(csv.Error, match="wrong number of fields"):
        list(records_from_text("a,b\n1,2,3\n"))


def test_fixed_field_count():
    with pytest.raises(csv.Error, match="got 2 want 3"):
        list(records_from_text("a,b\n", ReaderOptions(fields_per_record=3)))


def test_unchecked_field_count():
    records = records_from_text("a,b\n1\n", ReaderOptions(fields_per_record=-1))
    assert list(records) == [["a", "b"], ["1"]]


def test_strict_quotes_by_default():
    with pytest.raises(csv.Error):
        list(records_from_text('a,"b"c\n'))


def test_lazy_quotes():
    records = records_from_text('a,"b"c\n', ReaderOptions(lazy_quotes=True))
    assert list(records) == [["a", "bc"]]


def test_reads_from_stream():
    stream = io.StringIO("x\ny\n", newline="")
    assert list(read_records(stream)) == [["x"], ["y"]]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"delimiter": ""},
        {"delimiter": ";;"},
        {"delimiter": '"'},
        {"delimiter": "\n"},
        {"comment": "##"},
        {"delimiter": "#", "comment": "#"},
    ],
)
def test_invalid_options(kwargs):
    with pytest.raises(ValidationError):
        ReaderOptions(**kwargs)


def test_empty_comment_means_none():
    assert ReaderOptions(comment="").comment is None


def test_comment_character_inside_quoted_field():
    records = records_from_text('a,b\n"x\n#y",z\n#skipped\n1,2\n', ReaderOptions(comment="#"))
    assert list(records) == [["a", "b"], ["x\n#y", "z"], ["1", "2"]]


def test_bare_quote_in_unquoted_field_is_kept():
    # strict mode only rejects stray characters after a closing quote
    assert list(records_from_text('a,b"c\n')) == [["a", 'b"c']]
