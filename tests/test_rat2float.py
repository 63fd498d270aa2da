import pytest

from polyform.rat2float import convert, main, parse_rational

SAMPLE = """H-representation
begin
2 3 rational
1 1/2 -1
0 2 4
end
lponly
"""


def test_parse_rational_with_denominator():
    assert parse_rational("3/4") == (3, 4)
    assert parse_rational("-7") == (-7, 1)


def test_parse_rational_does_not_reduce():
    assert parse_rational("2/4") == (2, 4)


def test_parse_rational_rejects_garbage():
    with pytest.raises(ValueError):
        parse_rational("abc")


def test_convert_full_output():
    expected = (
        "H-representation\nbegin\n2 3 real\n"
        " 1 0.500000000000000 -1 \n"
        " 0 1.000000000000000 2.000000000000000 \n"
        "end\nlponly\n"
    )
    assert convert(SAMPLE) == expected


def test_integer_rows_are_kept():
    out = convert("begin\n1 3 integer\n3 4 -5\nend\n")
    row = out.splitlines()[2]
    assert row.split() == ["3", "4", "-5"]


def test_scaled_row_uses_absolute_value():
    out = convert("begin\n*** 4 rational\n0 -4 8 2\nend\n")
    values = [float(x) for x in out.splitlines()[2].split()]
    assert values == [0.0, -1.0, 2.0, 0.5]


def test_row_name_is_copied():
    out = convert("begin\n*** 2 rational\n1 2\nend\n")
    assert out.splitlines()[1] == "*** 2 real"


def test_text_after_end_is_echoed():
    out = convert("begin\n1 2 rational\n1 1\nend trailing\nfirst\nsecond\n")
    assert out.endswith("end\nfirst\nsecond\n")


def test_no_begin_line():
    with pytest.raises(ValueError, match="No begin line"):
        convert("H-representation\n")


def test_premature_end():
    with pytest.raises(ValueError):
        convert("begin\n1 3 rational\n1 2 end\n")


def test_missing_data():
    with pytest.raises(ValueError, match="enough data"):
        convert("begin\n1 3 rational\n1 2\n")


def test_main_reads_file(tmp_path, capsys):
    path = tmp_path / "cube.ine"
    path.write_text(SAMPLE)
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == convert(SAMPLE)


def test_main_bad_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.ine")]) == 1
    assert "Bad input file name" in capsys.readouterr().out


def test_main_help(capsys):
    assert main(["-h"]) == 1
    assert "floating point" in capsys.readouterr().err


def test_main_reports_error(tmp_path, capsys):
    path = tmp_path / "broken.ine"
    path.write_text("no header here\n")
    assert main([str(path)]) == 1
    assert "No begin line" in capsys.readouterr().err