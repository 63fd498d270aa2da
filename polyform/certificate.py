"""Turning a solver's witness of non-redundancy into an lrs check file."""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from fractions import Fraction

from polyform.matrix import Polyhedron

_LEXEME = re.compile(r"[()]|[^\s()]+")
_NUMBER = re.compile(r"(\d+)(?:\.(\d*))?\Z")
_VARIABLE = re.compile(r"x_(\d+)\Z")


class WitnessError(ValueError):
    """Raised when a solver's model cannot be read."""


def _sexprs(text: str) -> list:
    stack: list[list] = [[]]
    for piece in _LEXEME.findall(text):
        if piece == "(":
            stack.append([])
        elif piece == ")":
            if len(stack) == 1:
                raise WitnessError("unbalanced parentheses in witness")
            done = stack.pop()
            stack[-1].append(done)
        else:
            stack[-1].append(piece)
    if len(stack) != 1:
        raise WitnessError("unbalanced parentheses in witness")
    return stack[0]


def _definitions(exprs: list) -> Iterator[list]:
    for expr in exprs:
        if isinstance(expr, list):
            if expr and expr[0] == "define-fun":
                yield expr
            else:
                yield from _definitions(expr)


def _value(expr) -> Fraction:
    if isinstance(expr, str):
        match = _NUMBER.match(expr)
        if match is None:
            raise WitnessError(f"unreadable number {expr!r}")
        if match.group(2) and match.group(2).strip("0"):
            raise WitnessError(f"unexpected decimal part in {expr!r}")
        return Fraction(int(match.group(1)))
    if len(expr) == 3 and expr[0] == "/":
        den = _value(expr[2])
        if den == 0:
            raise WitnessError("division by zero in witness")
        return _value(expr[1]) / den
    if len(expr) == 2 and expr[0] == "-":
        return -_value(expr[1])
    raise WitnessError(f"unknown expression {expr!r}")


def parse_witness(text: str, n: int) -> dict[int, Fraction]:
    """Read the values of ``x_1 .. x_{n-1}`` from a solver model."""
    values: dict[int, Fraction] = {}
    for definition in _definitions(_sexprs(text)):
        if len(definition) != 5:
            raise WitnessError(f"malformed definition {definition!r}")
        match = _VARIABLE.match(str(definition[1]))
        if match is None:
            continue
        values[int(match.group(1))] = _value(definition[4])
    missing = [var for var in range(1, n) if var not in values]
    if missing:
        raise WitnessError(f"no value for x_{missing[0]}")
    return {var: values[var] for var in range(1, n)}


def _check_mode(mode: int) -> None:
    if mode not in (1, 2):
        raise ValueError(f"certificate mode must be 1 or 2, not {mode}")


def linearity_line(poly: Polyhedron, ineq: int, mode: int) -> str:
    """The ``linearity`` line of certificate ``mode`` for inequality ``ineq``."""
    _check_mode(mode)
    bound = poly.n - 1 if mode == 1 else poly.n - 1 - poly.nv
    count = len(poly.linearities) + bound
    if mode == 1 and poly.is_linearity(ineq):
        count -= 1
    rows = []
    for lin in poly.linearities:
        if mode == 1 and lin == ineq:
            continue
        rows.append(lin - 1 if mode == 1 and lin > ineq else lin)
    rows.extend(poly.m + (i - 1 if mode == 1 else i) for i in range(1, bound + 1))
    return f"linearity {count}" + "".join(f" {row}" for row in rows)


def _lrs_rational(value: Fraction) -> str:
    value = Fraction(value)
    sign = "-" if value < 0 else " "
    magnitude = abs(value)
    body = str(magnitude.numerator)
    if magnitude.denominator != 1:
        body += f"/{magnitude.denominator}"
    return f"{sign}{body} "


def certificate(
    poly: Polyhedron,
    ineq: int,
    mode: int,
    witness: Mapping[int, Fraction],
    filename: str,
) -> str:
    """Build the lrs input that checks a witness; mode 1 drops row ``ineq``."""
    _check_mode(mode)
    if not 1 <= ineq <= poly.m:
        raise ValueError(f"inequality {ineq} out of range 1...{poly.m}")
    if mode == 1:
        rows = poly.m - 1 + poly.n - 1
    else:
        rows = poly.m + poly.n - 1 - poly.nv
    lines = [
        f"certificate {mode} for {filename}",
        "H-representation",
        linearity_line(poly, ineq, mode),
        "begin",
        f"{rows} {poly.n} rational",
    ]
    lines.extend(
        "".join(_lrs_rational(entry) for entry in poly.row(row))
        for row in range(1, poly.m + 1)
        if not (mode == 1 and row == ineq)
    )
    for var in range(1, poly.n):
        if mode == 2 and poly.is_projected(var):
            continue
        try:
            value = witness[var]
        except KeyError:
            raise WitnessError(f"no value for x_{var}") from None
        lines.append(
            _lrs_rational(value)
            + "".join(" -1" if col == var else " 0" for col in range(1, poly.n))
        )
    lines.extend(["end", "lponly"])
    return "\n".join(lines) + "\n"