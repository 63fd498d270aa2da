from fractions import Fraction

import pytest

from polyform.certificate import (
    WitnessError,
    certificate,
    linearity_line,
    parse_witness,
)
from polyform.matrix import parse_polyhedron

SQUARE_H = """H-representation
linearity 1 3
begin
4 3 rational
0 1 0
0 0 1
1 -1 0
1 0 -1/2
end
eliminate 1 2
redund_list 1 1
"""

Z3_MODEL = """sat
(model
  (define-fun x_1 () Real
    (/ 1.0 2.0))
  (define-fun x_2 () Real
    (- 3.0))
)
"""


@pytest.fixture
def square():
    return parse_polyhedron(SQUARE_H)


def test_parse_witness_z3():
    assert parse_witness(Z3_MODEL, 3) == {1: Fraction(1, 2), 2: Fraction(-3)}


def test_parse_witness_integers_and_order():
    text = "sat\n(\n (define-fun x_2 () Real 4)\n (define-fun x_1 () Real (- (/ 5.0 3.0)))\n)"
    assert parse_witness(text, 3) == {1: Fraction(-5, 3), 2: Fraction(4)}


def test_parse_witness_rejects_decimal_part():
    with pytest.raises(WitnessError):
        parse_witness("sat (model (define-fun x_1 () Real 1.5))", 2)


def test_parse_witness_missing_variable():
    with pytest.raises(WitnessError):
        parse_witness("sat (model (define-fun x_1 () Real 1.0))", 3)


def test_parse_witness_unknown_operator():
    with pytest.raises(WitnessError):
        parse_witness("sat (model (define-fun x_1 () Real (* 2.0 3.0)))", 2)


def test_parse_witness_unbalanced():
    with pytest.raises(WitnessError):
        parse_witness("sat (model (define-fun x_1 () Real 1.0)", 2)


def test_linearity_line_mode_one(square):
    assert linearity_line(square, 1, 1) == "linearity 3 2 4 5"


def test_linearity_line_mode_two(square):
    assert linearity_line(square, 1, 2) == "linearity 2 3 5"


@pytest.mark.parametrize("ineq", [1, 2, 3, 4])
@pytest.mark.parametrize("mode", [1, 2])
def test_linearity_count_matches_list(square, ineq, mode):
    fields = linearity_line(square, ineq, mode).split()
    assert fields[0] == "linearity"
    assert int(fields[1]) == len(fields) - 2


def test_invalid_mode(square):
    with pytest.raises(ValueError):
        linearity_line(square, 1, 3)
    with pytest.raises(ValueError):
        certificate(square, 1, 0, {1: Fraction(0), 2: Fraction(0)}, "sq.ine")


def test_invalid_inequality(square):
    with pytest.raises(ValueError):
        certificate(square, 5, 1, {1: Fraction(0), 2: Fraction(0)}, "sq.ine")


def test_certificate_mode_one_round_trip(square):
    witness = parse_witness(Z3_MODEL, square.n)
    text = certificate(square, 1, 1, witness, "sq.ine")
    assert text.startswith("certificate 1 for sq.ine\nH-representation\n")
    assert text.endswith("end\nlponly\n")
    parsed = parse_polyhedron(text)
    assert parsed.m == square.m - 1 + square.n - 1
    assert parsed.n == square.n
    assert parsed.rows[:3] == square.rows[1:]
    assert parsed.row(4) == (witness[1], Fraction(-1), Fraction(0))
    assert parsed.row(5) == (witness[2], Fraction(0), Fraction(-1))
    assert parsed.linearities == tuple(
        int(f) for f in linearity_line(square, 1, 1).split()[2:]
    )


def test_certificate_mode_two_skips_projected(square):
    witness = {1: Fraction(7, 2), 2: Fraction(-1)}
    text = certificate(square, 2, 2, witness, "sq.ine")
    parsed = parse_polyhedron(text)
    assert parsed.m == square.m + square.n - 1 - square.nv
    assert parsed.rows[:4] == square.rows
    assert parsed.row(5) == (Fraction(7, 2), Fraction(-1), Fraction(0))


def test_certificate_missing_witness(square):
    with pytest.raises(WitnessError):
        certificate(square, 1, 1, {1: Fraction(1)}, "sq.ine")