"""Command-line front end: check polyhedra by writing SMT-LIB formulas."""

from __future__ import annotations

import enum
import re
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from polyform.certificate import WitnessError, certificate, parse_witness
from polyform.matrix import ParseError, Polyhedron, Representation, parse_polyhedron
from polyform.smt import (
    VerificationError,
    checkpred_formula,
    hh_formula,
    hv_formula,
    intersection_formula,
    vv_formula,
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UsageError(ValueError):
    """Raised when the command line cannot be understood."""


class Mode(enum.IntEnum):
    """What kind of check is to be written."""

    CHECKPRED = 0
    CERTIFICATE_ONE = 1
    CERTIFICATE_TWO = 2
    HV = 4
    HH = 5
    VV = 6
    INTERSECTION = 7

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Mode.CHECKPRED: "*polv: checkpred mode",
    Mode.CERTIFICATE_ONE: "*polyv: checkpred certificate mode",
    Mode.CERTIFICATE_TWO: "*polyv: checkpred certificate mode",
    Mode.HV: "*polyv: H/V verification mode",
    Mode.HH: "*polyv: H/H verification mode",
    Mode.VV: "*polyv: V/V verification mode",
    Mode.INTERSECTION: "*polyv: intersection verification mode",
}


@dataclass(frozen=True)
class Options:
    """Parsed command line: input files, certificate mode, forced representations."""

    filenames: tuple[str, ...] = ()
    certificate: int = 0
    force: tuple[Representation | None, ...] = (None, None, None)


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_options(argv: Sequence[str]) -> Options:
    """Parse the arguments that follow the program name."""
    args = list(argv)
    if not 1 <= len(args) <= 3:
        raise UsageError("expected one to three arguments")
    cert = 0
    force: list[Representation | None] = [None, None, None]
    files: list[str] = []
    items = iter(args)
    for arg in items:
        if arg == "-c":
            value = next(items, None)
            if value is None:
                raise UsageError("option -c needs an argument")
            cert = _atoi(value)
            if not 0 <= cert <= 2:
                raise UsageError(f"certificate mode must be 0, 1 or 2, not {cert}")
        elif arg.startswith("-"):
            if not 2 <= len(arg) <= 4:
                raise UsageError(f"unknown option {arg}")
            for slot, letter in enumerate(arg[1:]):
                if letter == "v":
                    force[slot] = Representation.V
                elif letter == "h":
                    force[slot] = Representation.H
                else:
                    raise UsageError(f"unknown option {arg}")
        elif len(files) < 3:
            files.append(arg)
        else:
            raise UsageError("too many input files")
    if not files:
        raise UsageError("no input file given")
    return Options(filenames=tuple(files), certificate=cert, force=tuple(force))


def select_mode(options: Options, polys: Sequence[Polyhedron]) -> Mode:
    """Decide which check the inputs call for, or raise if none fits."""
    polys = list(polys)
    if options.certificate in (1, 2):
        if len(polys) != 1:
            raise VerificationError("certificate generation takes one input")
        mode = Mode(options.certificate)
    elif not polys:
        raise VerificationError("no input file given")
    elif len(polys) == 1:
        if polys[0].vrep:
            raise VerificationError("no operation for single V-representation")
        mode = Mode.CHECKPRED
    elif len(polys) == 2:
        first, second = polys
        if not first.vrep and not second.vrep:
            mode = Mode.HH
        elif first.vrep and second.vrep:
            mode = Mode.VV
        else:
            mode = Mode.HV
    elif len(polys) == 3:
        mode = Mode.INTERSECTION
    else:
        raise VerificationError("at most three inputs are allowed")

    if mode <= Mode.CERTIFICATE_TWO:
        if not polys[0].has_elimination:
            raise VerificationError("error: eliminate/project line missing")
        if not polys[0].has_redund:
            raise VerificationError("error: redund/redund_list line missing")
    return mode


def _check_bounds(poly: Polyhedron, ineq: int | None) -> None:
    bad_var = any(var < 1 or var >= poly.n for var in poly.eliminated)
    if bad_var or ineq is None or ineq < 1 or ineq > poly.m:
        raise VerificationError(
            f"Bounds error: variables 1...{poly.n}, inequalities 1...{poly.m}"
        )


def _filename(options: Options, slot: int) -> str:
    return options.filenames[slot] if slot < len(options.filenames) else ""


def run(options: Options, polys: Sequence[Polyhedron], argv: Sequence[str]) -> str:
    """Return the formula or certificate the inputs call for.

    Certificate modes read the solver's witness from standard input.
    """
    polys = list(polys)
    mode = select_mode(options, polys)
    sys.stderr.write(mode.description + "\n")

    if mode <= Mode.CERTIFICATE_TWO:
        poly = polys[0]
        ineq = poly.redund_row
        _check_bounds(poly, ineq)
        filename = _filename(options, 0)
        variables = "".join(f" {var}" for var in poly.eliminated)
        sys.stderr.write(
            f"*Mode {int(mode)} checking non-redundancy of inequality {ineq}"
            f" after eliminating variables{variables} of {filename}\n"
        )
        if mode is Mode.CHECKPRED:
            return checkpred_formula(poly, ineq, filename, argv)
        witness = parse_witness(sys.stdin.read(), poly.n)
        return certificate(poly, ineq, int(mode), witness, filename)

    if mode is Mode.HV:
        return hv_formula(polys[0], polys[1], argv)
    if mode is Mode.HH:
        return hh_formula(polys[0], polys[1], argv)
    if mode is Mode.VV:
        return vv_formula(polys[0], polys[1], argv)

    formula = intersection_formula(polys[0], polys[1], polys[2], argv)
    sys.stderr.write(
        f"*polyv: checking if {_filename(options, 0)} intersect "
        f"{_filename(options, 1)} is not {_filename(options, 2)}\n"
    )
    return formula


def _usage(program: str) -> str:
    return (
        f"Usage: {program} <file.ine>\n"
        "To check redundancy of the first inequality in redund_list or redund when "
        "eliminating/projecting as specified by the eliminate/project option.\n\n"
        f"{program} -c <1/2> <file.ine>\n"
        "To generate lrs input file <1/2> checking a witness (given on stdin) of "
        "non-redundancy generated by z3\n\n"
        f"{program} <file1> <file2>\n"
        "To check whether H/V-representations file1 and file2 define different "
        "polyhedra, where H-representations may contain projections.\n\n"
        f"{program} <file1> <file2> <file3>\n"
        "To check whether the intersection of H/V-representations file1 and file2 "
        "is different from H/V-representation file3, where H-representations may "
        "contain projections.\n"
    )


def main(argv: Sequence[str] | None = None) -> int:
    if argv is None:
        program = sys.argv[0] if sys.argv else "polyv"
        args = list(sys.argv[1:])
    else:
        program = "polyv"
        args = list(argv)
    invocation = [program, *args]

    try:
        options = parse_options(args)
    except UsageError as exc:
        sys.stderr.write(f"{exc}\n")
        sys.stdout.write(_usage(program))
        return 0

    texts = []
    for name in options.filenames:
        try:
            texts.append(Path(name).read_text())
        except OSError:
            sys.stdout.write(_usage(program))
            return 0

    polys = []
    for slot, text in enumerate(texts):
        try:
            polys.append(parse_polyhedron(text, options.force[slot]))
        except ParseError as exc:
            sys.stderr.write(f"Parse error: {exc}\nError parsing input\n")
            return 0

    try:
        sys.stdout.write(run(options, polys, invocation))
    except (VerificationError, WitnessError) as exc:
        sys.stderr.write(f"{exc}\n")
    return 0