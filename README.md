# polyform

Small command-line tools and a library for polyhedron files in the
H-/V-representation text format: a header, then a `begin` line, an
`m n integer|rational` line, `m` rows of `n` numbers, and `end`.

## Installation

```
pip install .
```

## Commands

### polyv

Writes an SMT-LIB 2.6 formula (logic `LRA`) to standard output. A model of
the formula is a counter-example showing that the descriptions differ, so a
solver answering `unsat` means the check passed.

```
polyv file.ine                 # is the first row of redund/redund_list redundant after eliminate/project?
polyv -c 1 file.ine < model    # write certificate 1 (an lrs input file) from a solver model
polyv -c 2 file.ine < model    # write certificate 2 from a solver model
polyv a.ine b.ext              # do an H- and a V-representation describe the same set?
polyv a.ine b.ine              # do two (possibly projected) H-representations agree?
polyv a.ext b.ext              # do two V-representations agree?
polyv a.ine b.ine c.ine        # is the intersection of a and b equal to c?
```

Which check is written depends on the number of files and on whether each
is an H- or a V-representation. The single-file check and the certificates
need both a `redund` or `redund_list` line and an `eliminate` or `project`
line after `end`; V-representation files may not carry these lines.

A flag made of `-` and one to three letters `v` or `h` (for example `-v`,
`-hv`, `-vhh`) forces the first, second and third file to be read as a V- or
H-representation. Progress messages and errors go to standard error; the
usage text is printed when the command line cannot be understood.

### rat2float

Copies a polyhedron file, writing non-integer entries as 15-digit decimals.
In a row whose first entry is zero, the integer entries are divided by the
absolute value of the row's second entry. Reads the file named as the first
argument, or standard input; `-h` prints a short description.

```
rat2float cube.ext
```

### setupnash and setupnash2

Read a two-player game file (`m n`, then the `m × n` payoff matrices `A` and
`B`, row by row; `m` and `n` at most 1000) and write one H-representation per
player.

```
setupnash game game1.ine game2.ine
setupnash2 game game1.ine game2.ine
```

`setupnash` copies each payoff as written, only flipping its sign, and
writes polytopes with one linearity row. `setupnash2` reads payoffs as
rationals and writes the `Bx <= 1, x >= 0` and `Ay <= 1, y >= 0` form, which
is meant for games with positive payoffs.

## Library use

- `polyform.matrix`: `parse_polyhedron(text, force)` returns a `Polyhedron`;
  `Representation` names the two kinds; bad input raises `ParseError`.
- `polyform.smt`: `checkpred_formula`, `hv_formula`, `hh_formula`,
  `vv_formula` and `intersection_formula` return formulas as strings and
  raise `VerificationError` when the inputs do not fit together.
- `polyform.certificate`: `parse_witness(text, n)` reads a solver model and
  `certificate(poly, ineq, mode, witness, filename)` writes the check file;
  unreadable models raise `WitnessError`.
- `polyform.rat2float.convert(text)`, `polyform.setupnash` and
  `polyform.setupnash2` offer the other commands' work as functions.

```python
from polyform.matrix import parse_polyhedron
from polyform.smt import hh_formula

with open("a.ine") as fa, open("b.ine") as fb:
    first = parse_polyhedron(fa.read(), None)
    second = parse_polyhedron(fb.read(), None)
print(hh_formula(first, second, ["polyv", "a.ine", "b.ine"]))
```

## What it does not do

polyform only writes files. It does not run an SMT solver, does not
enumerate vertices or facets, solve linear programs or compute equilibria;
the formulas, certificates and game polytopes it produces are meant to be
handed to separate tools that do.

## Tests

```
pip install .[test]
pytest
```