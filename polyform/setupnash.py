"""Build the two player polytopes of a bimatrix game, payoffs kept as text."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

MAX_STRATEGIES = 1000
_NOT_ENOUGH = "Invalid input: check you have entered enough data!"


@dataclass(frozen=True)
class Game:
    """An m by n bimatrix game; payoffs are the strings read from the input."""

    m: int
    n: int
    a: tuple[tuple[str, ...], ...]
    b: tuple[tuple[str, ...], ...]


def negate_payoff(text: str) -> str:
    """Negate a payoff written as text, without touching its digits."""
    if text == "0":
        return text
    if text.startswith("-"):
        return text[1:]
    return "-" + text


def _column(text: str) -> str:
    negated = negate_payoff(text)
    return (" " if negated.startswith("-") else "  ") + negated


def read_game(text: str) -> Game:
    """Read ``m n`` followed by the A and B payoff matrices, row by row."""
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

    def matrix() -> tuple[tuple[str, ...], ...]:
        rows = []
        for _ in range(m):
            row = []
            for _ in range(n):
                token = next(tokens, None)
                if token is None:
                    raise ValueError(_NOT_ENOUGH)
                row.append(token)
            rows.append(tuple(row))
        return tuple(rows)

    a = matrix()
    b = matrix()
    return Game(m=m, n=n, a=a, b=b)


def _identity_row(index: int, size: int) -> str:
    return "".join("1 " if col == index else "0 " for col in range(size))


def player_one_polytope(game: Game, name: str) -> str:
    """H-representation of player one's best-response polytope."""
    m, n = game.m, game.n
    out = [
        f"*{name}: player 1",
        "\nH-representation",
        f"\nlinearity 1 {m + n + 1}",
        "\nbegin",
        f"\n{m + n + 1} {m + 2} rational",
    ]
    out.extend(f"\n 0 {_identity_row(i, m)}0 " for i in range(m))
    out.extend(
        "\n 0 " + "".join(_column(game.b[j][i]) for j in range(m)) + " 1 "
        for i in range(n)
    )
    out.append("\n-1 " + "1 " * m + "0 ")
    out.append("\nend\n")
    return "".join(out)


def player_two_polytope(game: Game, name: str) -> str:
    """H-representation of player two's best-response polytope."""
    m, n = game.m, game.n
    out = [
        f"*{name}: player 2",
        "\nH-representation",
        f"\nlinearity 1 {m + n + 1}",
        "\nbegin",
        f"\n{m + n + 1} {n + 2} rational",
    ]
    out.extend(
        "\n 0 " + "".join(_column(payoff) for payoff in game.a[i]) + " 1 "
        for i in range(m)
    )
    out.extend(f"\n 0 {_identity_row(i, n)}0 " for i in range(n))
    out.append("\n-1 " + "1 " * n + "0 ")
    out.append("\nend\n")
    return "".join(out)


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 3:
        print("\nUsage: setupnash infile outfile1 outfile2")
        return 1
    source, first, second = args[:3]
    try:
        text = Path(source).read_text()
    except OSError:
        print("\nBad input file name")
        return 1
    sys.stdout.write(f"\n*Input taken from file {source}")
    try:
        game = read_game(text)
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