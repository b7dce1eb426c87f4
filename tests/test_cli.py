from pathlib import Path

from click.testing import CliRunner

from csv2md.cli import cli

CSV_DATA = "Manufacturer,Model,Type,Year\nFord,Focus,Sedan,2015\nChevy,Malibu,Sedan,2015\n"
FORMAT_DATA = "Make,Model,Type,Yr\nc, l, left, right\nbold, italic, ,strikethrough\n"
FORMATTED = (
    "Make|Model|Type|Yr  \n"
    ":--:|:--|:--|--:  \n"
    "__Ford__|_Focus_|Sedan|~~2015~~  \n"
    "__Chevy__|_Malibu_|Sedan|~~2015~~  \n"
)


def test_stdin_to_stdout():
    result = CliRunner().invoke(cli, [], input=CSV_DATA)
    assert result.exit_code == 0, result.output
    assert result.output == "Manufacturer|Model|Type|Year  \n---|---|---|---  \nFord|Focus|Sedan|2015  \nChevy|Malibu|Sedan|2015  \n"


def test_file_to_file(tmp_path: Path):
    src = tmp_path / "cars.csv"
    src.write_text(CSV_DATA)
    dst = tmp_path / "cars.md"

    result = CliRunner().invoke(cli, [str(src), "-o", str(dst), "-n", "crlf"])
    assert result.exit_code == 0, result.output
    assert dst.read_bytes().startswith(b"Manufacturer|Model|Type|Year   \r")


def test_inferred_format_file(tmp_path: Path):
    src = tmp_path / "cars.csv"
    src.write_text(CSV_DATA)
    (tmp_path / "cars.fmt").write_text(FORMAT_DATA)

    result = CliRunner().invoke(cli, [str(src), "--format"])
    assert result.exit_code == 0, result.output
    assert result.output == FORMATTED


def test_explicit_format_file(tmp_path: Path):
    fmt = tmp_path / "layout.txt"
    fmt.write_text(FORMAT_DATA)

    result = CliRunner().invoke(cli, ["-m", str(fmt)], input=CSV_DATA)
    assert result.exit_code == 0, result.output
    assert result.output == FORMATTED


def test_format_flag_needs_a_file_input():
    result = CliRunner().invoke(cli, ["-f"], input=CSV_DATA)
    assert result.exit_code == 2
    assert "format file" in result.output


def test_no_header_record_and_separator():
    result = CliRunner().invoke(cli, ["-r", "-s", ";"], input=";x\n;y\n")
    assert result.exit_code == 0, result.output
    assert result.output == " |x  \n |y  \n"


def test_empty_format_file_fails(tmp_path: Path):
    fmt = tmp_path / "empty.fmt"
    fmt.write_text("")

    result = CliRunner().invoke(cli, ["-m", str(fmt)], input=CSV_DATA)
    assert result.exit_code == 1
    assert "no format data" in result.output


def test_ragged_input_fails():
    result = CliRunner().invoke(cli, [], input="a,b\n1,2,3\n")
    assert result.exit_code == 1
    assert "wrong number of fields" in result.output


def test_stdin_bom_is_dropped():
    result = CliRunner().invoke(cli, [], input="\ufeffa,b\n1,2\n".encode("utf-8"))
    assert result.exit_code == 0, result.output
    assert result.output == "a|b  \n---|---  \n1|2  \n"
