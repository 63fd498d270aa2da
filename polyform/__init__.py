"""Polyhedron file tools: SMT-LIB verification formulas, certificates, float conversion and game polytopes."""

__version__ = "0.1.0"