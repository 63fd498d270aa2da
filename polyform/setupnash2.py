"""Build the polytopes Bx <= 1, x >= 0 and Ay <= 1, y >= 0 of a bimatrix game."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from polyform.rat2float import parse_rational

MAX_STRATEGIES = 1000
_NOT_ENOUGH = "Invalid input: check you have entered enough data!"

Pair = tuple[int, int]


@dataclass(frozen=True)
class RationalGame:
    """An m by n bimatrix game; payoffs are unreduced (numerator, denominator) pairs."""

    m: int
    n: int
    a: tuple[tuple[Pair, ...], ...]
    b: tuple[tuple[Pair, ...], ...]


def read_rational_game(text: str) -> RationalGame:
    """Read ``m n`` followed by the A and B payoff matrices as rationals."""
    tokens = iter(text.split())
    try:
        m = int(next(tokens))
        n = int(next(tokens))
    except (StopIteration, ValueError):
        raise ValueError("Invalid m,n") from None
    if m > MAX_STRATEGIES or n > MAX_STRATEGIES:
        raise ValueError(
            f"m={m} n={n}: both m and n must be at most {MAX_STRATEGIES}"
        )

    def matrix() -> tuple[tuple[Pair, ...], ...]:
        rows = []
        for _ in range(m):
            row = []
            for _ in range(n):
                token = next(tokens, None)
                if token is None:
                    raise ValueError(_NOT_ENOUGH)
                row.append(parse_rational(token))
            rows.append(tuple(row))
        return tuple(rows)

    a = matrix()
    b = matrix()
    return RationalGame(m=m, n=n, a=a, b=b)


def format_fraction(value: Pair) -> str:
    """Write ``(num, den)`` as ``num/den`` without reducing, sign or space first."""
    num, den = value
    sign = "-" if num < 0 else " "
    body = str(abs(num))
    if den != 1:
        body += f"/{den}"
    return f"{sign}{body} "


def _negated(value: Pair) -> str:
    num, den = value
    return format_fraction((-num, den))


def _identity_row(index: int, size: int) -> str:
    return "".join("1 " if col == index else "0 " for col in range(size))


def player_one_polytope(game: RationalGame, name: str) -> str:
    """Player one's polytope: x >= 0 and Bx <= 1."""
    m, n = game.m, game.n
    out = [
        f"*{name}: player 1",
        "\nH-representation",
        "\nbegin",
        f"\n{m + n} {m + 1} rational",
    ]
    out.extend(f"\n0 {_identity_row(i, m)}" for i in range(m))
    out.extend(
        "\n1 " + "".join(_negated(game.b[j][i]) for j in range(m)) for i in range(n)
    )
    out.append("\nend\n")
    return "".join(out)


def player_two_polytope(game: RationalGame, name: str) -> str:
    """Player two's polytope: Ay <= 1 and y >= 0."""
    m, n = game.m, game.n
    out = [
        f"*{name}: player 2",
        "\nH-representation",
        "\nbegin",
        f"\n{m + n} {n + 1} rational",
    ]
    out.extend("\n1 " + "".join(_negated(entry) for entry in game.a[i]) for i in range(m))
    out.extend(f"\n0 {_identity_row(i, n)}" for i in range(n))
    out.append("\nend\n")
    return "".join(out)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print("\nUsage: setupnash2 infile outfile1 outfile2")
        return 1
    source, first, second = args[:3]
    try:
        text = Path(source).read_text()
    except OSError:
        print("\nBad input file name")
        return 1
    sys.stdout.write(f"\n*Input taken from file {source}")
    try:
        game = read_rational_game(text)
    except ValueError as exc:
        print(f"\n{exc}")
        return 1

    for label, target, build in (
        ("one", first, player_one_polytope),
        ("two", second, player_two_polytope),
    ):
        try:
            Path(target).write_text(build(game, source))
        except OSError:
            print("\nBad output file name")
            return 1
        print(f"\n*Output {label} sent to file {target}")
    return 0