[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chinium"
version = "0.1.0"
description = "Quantum chemistry utilities: input parsing, nuclear repulsion, MP2 energy, Multiwfn files and molecular point-group symmetry"
requires-python = ">=3.10"
keywords = ["quantum chemistry", "mp2", "nuclear repulsion", "point group", "symmetry", "multiwfn"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Chemistry",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chinium"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
