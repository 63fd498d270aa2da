from fractions import Fraction

import pytest

from polyform.matrix import ParseError, Representation, parse_polyhedron

H_TEXT = """example
H-representation
linearity 1 2
begin
3 4 rational
1 -1 0 0
0 1/2 -1 0
2 0 0 -1
end
eliminate 1 2
redund_list 2 3 1
"""

V_TEXT = """V-representation
linearity 1 3
begin
3 3 rational
1 0 0
0 1 0
0 0 1
end
"""


def test_h_representation_fields():
    poly = parse_polyhedron(H_TEXT)
    assert poly.representation is Representation.H
    assert poly.m == 3
    assert poly.n == 4
    assert poly.linearities == (2,)
    assert poly.eliminated == (2,)
    assert poly.redund_row == 3
    assert poly.has_redund and poly.has_elimination


def test_entries_are_fractions():
    poly = parse_polyhedron(H_TEXT)
    assert poly.entry(2, 1) == Fraction(1, 2)
    assert poly.row(1) == (1, -1, 0, 0)
    assert poly.entry(3, 3) == -1


def test_linearity_and_projection_queries():
    poly = parse_polyhedron(H_TEXT)
    assert poly.is_linearity(2)
    assert not poly.is_linearity(1)
    assert poly.is_projected(2)
    assert not poly.is_projected(1)


def test_projected_dimension():
    poly = parse_polyhedron(H_TEXT)
    assert poly.projected_dimension() == 3
    assert parse_polyhedron(V_TEXT).projected_dimension() == 3


def test_renaming_puts_kept_variables_first():
    text = H_TEXT.replace("eliminate 1 2", "eliminate 2 1 3")
    poly = parse_polyhedron(text)
    names = poly.renaming()
    assert names[0] == 0
    assert sorted(names[1:]) == list(range(1, poly.n))
    kept = [names[v] for v in range(1, poly.n) if not poly.is_projected(v)]
    assert kept == list(range(1, len(kept) + 1))


def test_project_keeps_the_given_variables():
    poly = parse_polyhedron(H_TEXT.replace("eliminate 1 2", "project 1 1"))
    assert set(poly.eliminated) | {1} == set(range(1, poly.n))
    assert not poly.is_projected(1)


def test_redund_alone_selects_first_row():
    poly = parse_polyhedron(H_TEXT.replace("redund_list 2 3 1", "redund"))
    assert poly.redund_row == 1


def test_v_representation_rays():
    poly = parse_polyhedron(V_TEXT)
    assert poly.vrep
    assert poly.rays == (2,)
    assert poly.is_ray(2)
    assert not poly.is_ray(3)
    assert not poly.is_ray(1)


def test_force_turns_h_into_v():
    poly = parse_polyhedron(H_TEXT.replace("eliminate 1 2", "").replace("redund_list 2 3 1", ""),
                            Representation.V)
    assert poly.representation is Representation.V


def test_force_turns_v_into_h():
    poly = parse_polyhedron(V_TEXT, Representation.H)
    assert poly.representation is Representation.H
    assert poly.rays == ()


@pytest.mark.parametrize(
    "old, new, message",
    [
        ("end\n", "", "single end line"),
        ("end\n", "end\nend\n", "single end line"),
        ("rational", "real", "integer or rational"),
        ("3 4 rational", "x 4 rational", "dimensions"),
        ("redund_list 2 3 1", "redund_list 0", "redund_list"),
        ("eliminate 1 2", "eliminate 1 9", "invalid row index"),
        ("eliminate 1 2", "eliminate 0", "project/eliminate"),
        ("linearity 1 2", "linearity 1 9", "linearity"),
        ("begin", "start", "begin"),
    ],
)
def test_parse_errors(old, new, message):
    with pytest.raises(ParseError, match=message):
        parse_polyhedron(H_TEXT.replace(old, new))


def test_missing_entries():
    with pytest.raises(ParseError):
        parse_polyhedron("begin\n2 2 integer\n1 2 3\n")


def test_v_representation_rejects_eliminate():
    with pytest.raises(ParseError, match="V-representation"):
        parse_polyhedron(V_TEXT + "eliminate 1 1\n")