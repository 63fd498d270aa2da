"""Rewrite a polyhedron file with rational entries as decimal floating point."""

from __future__ import annotations

import math
import re
import sys
from collections.abc import Iterator, Sequence
from pathlib import Path

_WORD = re.compile(r"\S+")

_USAGE = """
float takes a polytope file with rational or integer coefficients,
and outputs an approximately equivalent one with floating point
coefficients. A file name given as the first argument is read instead
of standard input.
"""


def parse_rational(token: str) -> tuple[int, int]:
    """Split ``a/b`` (or ``a``) into numerator and denominator, unreduced."""
    num, sep, den = token.partition("/")
    try:
        return int(num), (int(den) if sep else 1)
    except ValueError:
        raise ValueError(f"invalid rational {token!r}") from None


def _integer(value: int) -> str:
    return f"{'-' if value < 0 else ' '}{abs(value)} "


def _ratio(num: int, den: int) -> float:
    if den == 0:
        return math.nan if num == 0 else math.copysign(math.inf, num)
    try:
        return num / den
    except OverflowError:
        return math.copysign(math.inf, num * den)


def _decimal(value: float) -> str:
    return f"{value:.15f} "


def _convert(text: str) -> Iterator[str]:
    pos = 0
    while True:
        if pos >= len(text):
            raise ValueError("No begin line")
        newline = text.find("\n", pos)
        stop = len(text) if newline < 0 else newline + 1
        line = text[pos:stop]
        pos = stop
        yield line
        if line.startswith("begin"):
            break

    words = _WORD.finditer(text, pos)

    def take(missing: str) -> re.Match[str]:
        match = next(words, None)
        if match is None:
            raise ValueError(missing)
        return match

    rows_name = take("No begin line").group()
    try:
        n = int(take("No begin line").group())
    except ValueError:
        raise ValueError("invalid column count") from None
    take("No begin line")
    yield f"{rows_name} {n} real\n"

    not_enough = "Invalid input: check you have entered enough data!"
    while True:
        match = take(not_enough)
        if match.group() == "end":
            break
        num, _ = parse_rational(match.group())
        scale = num == 0
        scale_den = 1
        parts = [_integer(num)]
        for j in range(1, n):
            field = take(not_enough).group()
            if field == "end":
                raise ValueError("premature end of matrix")
            num, den = parse_rational(field)
            if scale and j == 1:
                scale_den = abs(num)
            if num == 0:
                parts.append(" 0 ")
            elif den == 1:
                parts.append(_decimal(_ratio(num, scale_den)) if scale else _integer(num))
            else:
                parts.append(_decimal(_ratio(num, den)))
        yield "".join(parts) + "\n"

    yield "end\n"
    rest = text[match.end():]
    newline = rest.find("\n")
    yield "" if newline < 0 else rest[newline + 1:]


def convert(text: str) -> str:
    """Return ``text`` with its matrix entries written as decimals.

    Rows whose first entry is zero are scaled by the absolute value of
    their second entry.
    """
    return "".join(_convert(text))


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0].startswith("-h"):
        sys.stderr.write(_USAGE)
        return 1
    if args:
        try:
            text = Path(args[0]).read_text()
        except OSError:
            sys.stdout.write("\nBad input file name\n")
            return 1
    else:
        text = sys.stdin.read()
    try:
        for chunk in _convert(text):
            sys.stdout.write(chunk)
    except ValueError as exc:
        sys.stderr.write(f"{exc}\n")
        return 1
    return 0