"""SMT-LIB 2.6 formulas whose models are witnesses that two polyhedra differ."""

from __future__ import annotations

from collections.abc import Sequence
from fractions import Fraction

from polyform.matrix import Polyhedron

VERSION = "20220316"
_FOOTER = "\n(check-sat)\n(get-model)\n"


class VerificationError(ValueError):
    """Raised when the inputs cannot be compared as requested."""


def format_rational(value: Fraction | int) -> str:
    """Write a rational as an SMT-LIB real term, negation written as ``(- ...)``."""
    value = Fraction(value)
    magnitude = abs(value)
    if magnitude.denominator == 1:
        body = str(magnitude.numerator)
    else:
        body = f"(/ {magnitude.numerator} {magnitude.denominator})"
    return f"(- {body})" if value < 0 else body


def _name(var: int, names: Sequence[int] | None) -> str:
    return f"x_{var if names is None else names[var]}"


def format_inequality(
    poly: Polyhedron,
    row: int,
    invert: bool = False,
    names: Sequence[int] | None = None,
) -> str:
    """Write row ``row`` as ``0 <= b + a.x`` (``=`` for linearities).

    With ``invert`` the relation is negated. ``names[j]`` renames ``x_j``.
    """
    lin = poly.is_linearity(row)
    if invert:
        relation = "not (=" if lin else ">"
    else:
        relation = "=" if lin else "<="
    parts = [f"\n         ({relation} 0\n          (+ ", format_rational(poly.entry(row, 0))]
    for var in range(1, poly.n):
        coeff = poly.entry(row, var)
        if coeff == 0:
            continue
        name = _name(var, names)
        if coeff == 1:
            parts.append(f" {name}")
        else:
            parts.append(f" (* {format_rational(coeff)} {name})")
    if invert and lin:
        parts.append(")")
    parts.append("))")
    return "".join(parts)


def format_system(
    poly: Polyhedron, skip: int = 0, names: Sequence[int] | None = None
) -> str:
    """The conjunction of all rows except row ``skip``."""
    body = "".join(
        format_inequality(poly, row, False, names)
        for row in range(1, poly.m + 1)
        if row != skip
    )
    return f"      (and{body})"


def format_combination(poly: Polyhedron) -> str:
    """Say that ``x`` is a combination of the vertices, rays and lines of ``poly``."""
    rows = range(1, poly.m + 1)
    out = ["    (exists (", *(f"(a_{i} Real) " for i in rows), ")\n      (and\n"]
    for var in range(1, poly.n):
        out.append(f"        (= x_{var} (+ ")
        out.extend(f"(* a_{i} {format_rational(poly.entry(i, var))}) " for i in rows)
        out.append("))\n")
    out.append("       ")
    out.extend(f" (>= a_{i} 0)" for i in rows if not poly.is_linearity(i))
    out.append("\n        ")
    if len(poly.rays) + len(poly.linearities) != poly.m:
        out.append("(= 1 (+")
        out.extend(
            f" a_{i}" for i in rows if not poly.is_linearity(i) and not poly.is_ray(i)
        )
        out.append("))\n")
    out.append("      )\n    )\n")
    return "".join(out)


def _invocation(argv: Sequence[str]) -> str:
    return "; invocation was:" + "".join(f" {arg}" for arg in argv) + "\n"


def header(argv: Sequence[str], what: str) -> str:
    """The comment lines and logic declaration that open every formula."""
    return (
        f"; polyv {VERSION} formula for verifying {what}\n"
        + _invocation(argv)
        + "(set-logic LRA)\n\n"
    )


def _declarations(count: int) -> str:
    return "".join(f"(declare-const x_{var} Real)\n" for var in range(1, count))


def _projected_system(poly: Polyhedron, indent: str) -> str:
    if poly.nv == 0:
        return format_system(poly, 0, None)
    names = poly.renaming()
    bound = "".join(
        f"(x_{names[var]} Real) " for var in range(1, poly.n) if poly.is_projected(var)
    )
    return (
        f"{indent}(exists ({bound})\n"
        + format_system(poly, 0, names)
        + f"{indent})\n"
    )


def checkpred_formula(
    poly: Polyhedron, ineq: int | None, filename: str, argv: Sequence[str]
) -> str:
    """Formula satisfiable iff inequality ``ineq`` is not redundant after projection."""
    bad_var = any(var < 1 or var >= poly.n for var in poly.eliminated)
    if bad_var or ineq is None or ineq < 1 or ineq > poly.m:
        raise VerificationError(
            f"Bounds error: variables 1...{poly.n}, inequalities 1...{poly.m}"
        )
    out = [
        f"; polyv {VERSION} formula for checking non-redundancy of inequality {ineq}"
        " after eliminating variables",
        *(f" {var}" for var in poly.eliminated),
        f", using file {filename}\n",
        _invocation(argv),
        "(set-logic LRA)\n\n",
        _declarations(poly.n),
        "\n(assert (and\n",
        format_system(poly, ineq),
        "  (forall (",
        *(f"(x_{var} Real) " for var in range(1, poly.n) if poly.is_projected(var)),
        ")",
        "\n    (=> ",
        format_system(poly, ineq),
        format_inequality(poly, ineq, True),
        "    )",
        "\n  )\n))",
        _FOOTER,
    ]
    return "".join(out)


def hv_formula(first: Polyhedron, second: Polyhedron, argv: Sequence[str]) -> str:
    """Formula satisfiable iff an H- and a V-representation differ."""
    if first.vrep and not second.vrep:
        vpoly, hpoly = first, second
    elif second.vrep and not first.vrep:
        vpoly, hpoly = second, first
    else:
        raise VerificationError("Error: must give one H and one V representation")
    if vpoly.n != hpoly.n - hpoly.nv:
        raise VerificationError("Dimensions don't match")
    return (
        header(argv, "H-V representation")
        + _declarations(vpoly.n)
        + "(assert (not\n  (= \n"
        + _projected_system(hpoly, "   ")
        + format_combination(vpoly)
        + "  )))"
        + _FOOTER
    )


def _hh_part(first: Polyhedron, second: Polyhedron) -> str:
    d = first.n - first.nv
    out = ["  (and\n"]
    if first.nv > 0:
        out.append(
            "    (exists (" + "".join(f"(x_{i} Real)" for i in range(d, first.n)) + ")\n"
        )
    out.append(format_system(first, 0, first.renaming()))
    out.append(f"{')' if first.nv > 0 else ' '}\n    (not\n")
    if second.nv > 0:
        out.append(
            "      (exists (" + "".join(f"(x_{i} Real)" for i in range(d, second.n)) + ")\n"
        )
    out.append(format_system(second, 0, second.renaming()))
    out.append(f"{')' if second.nv > 0 else ' '}\n    )\n  )\n")
    return "".join(out)


def hh_formula(first: Polyhedron, second: Polyhedron, argv: Sequence[str]) -> str:
    """Formula satisfiable iff two projected H-representations differ."""
    problems = []
    if first.vrep or second.vrep:
        problems.append("Error: must give two H representations")
    if first.n - first.nv != second.n - second.nv:
        problems.append("Dimensions of projections don't match")
    if problems:
        raise VerificationError("\n".join(problems))
    return (
        header(argv, "equivalency of projected H representations")
        + _declarations(first.n - first.nv)
        + "(assert (or\n"
        + _hh_part(first, second)
        + _hh_part(second, first)
        + "))\n"
        + _FOOTER
    )


def vv_formula(first: Polyhedron, second: Polyhedron, argv: Sequence[str]) -> str:
    """Formula satisfiable iff two V-representations differ."""
    if first.n != second.n:
        raise VerificationError("Dimensions don't match")
    return (
        header(argv, "V-V representation")
        + _declarations(first.n)
        + "(assert (=\n"
        + format_combination(first)
        + "  (not\n"
        + format_combination(second)
        + "  ) ))\n"
        + _FOOTER
    )


def _side(poly: Polyhedron) -> str:
    return format_combination(poly) if poly.vrep else _projected_system(poly, "    ")


def intersection_formula(
    first: Polyhedron, second: Polyhedron, third: Polyhedron, argv: Sequence[str]
) -> str:
    """Formula satisfiable iff ``first`` intersected with ``second`` is not ``third``."""
    dims = {poly.projected_dimension() for poly in (first, second, third)}
    if len(dims) != 1:
        raise VerificationError("Dimensions don't match")
    return (
        header(argv, "intersection checking")
        + _declarations(first.projected_dimension())
        + "(assert (not\n  (=\n"
        + "   (and\n"
        + _side(first)
        + _side(second)
        + "   )\n"
        + _side(third)
        + "   )\n))"
        + _FOOTER
    )