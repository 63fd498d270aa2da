"""Reading polyhedra given as H- or V-representations in lrs input format."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass
from fractions import Fraction


class ParseError(ValueError):
    """Raised when a polyhedron file cannot be understood."""


class Representation(enum.Enum):
    """Which kind of description a polyhedron file holds."""

    H = "H-representation"
    V = "V-representation"


@dataclass(frozen=True)
class Polyhedron:
    """A parsed polyhedron file.

    Rows, linearities and variables are numbered from 1 as in the file;
    column 0 of each row holds the constant term (H) or the vertex/ray flag (V).
    """

    representation: Representation
    rows: tuple[tuple[Fraction, ...], ...]
    n: int
    linearities: tuple[int, ...] = ()
    eliminated: tuple[int, ...] = ()
    redund_row: int | None = None
    has_redund: bool = False
    has_elimination: bool = False

    @property
    def m(self) -> int:
        return len(self.rows)

    @property
    def vrep(self) -> bool:
        return self.representation is Representation.V

    @property
    def nv(self) -> int:
        """Number of variables projected out."""
        return len(self.eliminated)

    @property
    def rays(self) -> tuple[int, ...]:
        return tuple(row for row in range(1, self.m + 1) if self.is_ray(row))

    def row(self, row: int) -> tuple[Fraction, ...]:
        return self.rows[row - 1]

    def entry(self, row: int, col: int) -> Fraction:
        return self.rows[row - 1][col]

    def is_linearity(self, row: int) -> bool:
        return row in self.linearities

    def is_projected(self, var: int) -> bool:
        return var in self.eliminated

    def is_ray(self, row: int) -> bool:
        return (
            self.vrep
            and 1 <= row <= self.m
            and self.entry(row, 0) == 0
            and not self.is_linearity(row)
        )

    def projected_dimension(self) -> int:
        """Number of columns left once the projected variables are gone."""
        return self.n if self.vrep else self.n - self.nv

    def renaming(self) -> tuple[int, ...]:
        """New variable numbers: kept variables first, projected ones after.

        Element ``i`` is the new number of variable ``i``; element 0 is 0.
        """
        kept = 1
        dropped = self.n - self.nv
        names = [0]
        for var in range(1, self.n):
            if self.is_projected(var):
                names.append(dropped)
                dropped += 1
            else:
                names.append(kept)
                kept += 1
        return tuple(names)


def _unsigned(token: str | None, message: str) -> int:
    if token is None:
        raise ParseError(message)
    try:
        value = int(token)
    except ValueError:
        raise ParseError(message) from None
    if value < 0:
        raise ParseError(message)
    return value


def _parse_linearity(text: str) -> tuple[int, ...]:
    tokens = iter(text.split())
    count = _unsigned(next(tokens, None), "linearity error")
    return tuple(_unsigned(next(tokens, None), "linearity error") for _ in range(count))


def _parse_entry(token: str) -> Fraction:
    try:
        return Fraction(token)
    except (ValueError, ZeroDivisionError):
        raise ParseError(f"invalid number {token!r}") from None


def _parse_redund(name: str, tokens: Iterator[str]) -> int:
    if name == "redund":
        return 1
    count = _unsigned(next(tokens, None), "broken redund_list line")
    if count == 0:
        raise ParseError("broken redund_list line")
    rows = [_unsigned(next(tokens, None), "broken redund_list line") for _ in range(count)]
    return rows[0]


def _parse_projection(name: str, tokens: Iterator[str], m: int, n: int) -> tuple[int, ...]:
    count = _unsigned(next(tokens, None), "broken project/eliminate line")
    if count == 0:
        raise ParseError("broken project/eliminate line")
    given = []
    for _ in range(count):
        index = _unsigned(next(tokens, None), "invalid row index in project/eliminate")
        if index < 1 or index > m:
            raise ParseError("invalid row index in project/eliminate")
        given.append(index)
    if name == "eliminate":
        return tuple(given)
    kept = set(given)
    dropped = tuple(var for var in range(1, n) if var not in kept)
    if len(dropped) != n - 1 - count:
        raise ParseError("horribly broken")
    return dropped


def parse_polyhedron(text: str, force: Representation | None = None) -> Polyhedron:
    """Parse a polyhedron file; ``force`` overrides the representation it declares."""
    lines = text.splitlines()
    vrep = False
    linearities: tuple[int, ...] = ()
    for index, line in enumerate(lines):
        if line.startswith("begin"):
            break
        if line.startswith("V-representation"):
            vrep = True
        if line.startswith("linearity "):
            linearities = _parse_linearity(line[len("linearity "):])
    else:
        raise ParseError("missing begin line")

    body = lines[index + 1:]
    while body and not body[0].strip():
        body = body[1:]
    if not body:
        raise ParseError("missing or broken dimensions")
    header = body[0].split()
    if len(header) < 2:
        raise ParseError("missing or broken dimensions")
    m = _unsigned(header[0], "missing or broken dimensions")
    n = _unsigned(header[1], "missing or broken dimensions")

    if force is Representation.V and not vrep:
        vrep = True
    elif force is Representation.H and vrep:
        vrep = False

    if any(row < 1 or row > m for row in linearities):
        raise ParseError("linearity error")

    kind = " ".join(header[2:])
    if not (kind.startswith("integer") or kind.startswith("rational")):
        raise ParseError("data type must be integer or rational")

    tokens = iter(" ".join(body[1:]).split())
    rows = []
    for _ in range(m):
        row = []
        for _ in range(n):
            token = next(tokens, None)
            if token is None:
                raise ParseError("not enough matrix entries")
            row.append(_parse_entry(token))
        rows.append(tuple(row))

    ends = 0
    redund_row: int | None = None
    eliminated: tuple[int, ...] = ()
    has_redund = has_elimination = False
    for token in tokens:
        if token == "end":
            ends += 1
        elif token in ("redund_list", "redund"):
            has_redund = True
            redund_row = _parse_redund(token, tokens)
        elif token in ("eliminate", "project"):
            has_elimination = True
            eliminated = _parse_projection(token, tokens, m, n)

    if ends != 1:
        raise ParseError("single end line required")
    if vrep and (has_redund or has_elimination):
        raise ParseError("eliminate/project line not allowed in V-representation inputs")

    return Polyhedron(
        representation=Representation.V if vrep else Representation.H,
        rows=tuple(rows),
        n=n,
        linearities=linearities,
        eliminated=eliminated,
        redund_row=redund_row,
        has_redund=has_redund,
        has_elimination=has_elimination,
    )