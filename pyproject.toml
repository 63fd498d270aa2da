[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polyform"
version = "0.1.0"
description = "Tools for polyhedron files: SMT-LIB verification formulas, float conversion and bimatrix game polytopes"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "polyhedra",
    "H-representation",
    "V-representation",
    "SMT-LIB",
    "bimatrix games",
    "linear programming",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
polyv = "polyform.polyv:main"
rat2float = "polyform.rat2float:main"
setupnash = "polyform.setupnash:main"
setupnash2 = "polyform.setupnash2:main"

[tool.hatch.build.targets.wheel]
packages = ["polyform"]

[tool.pytest.ini_options]
addopts = "-ra"
