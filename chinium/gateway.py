"""Reading job parameters from a keyword-based input file.

An input file is a sequence of keyword lines (case-insensitive), each
followed by a line carrying the value, for example::

    XYZ
    3
    O 0.0 0.0 0.0
    H 0.0 0.757 0.586
    H 0.0 -0.757 0.586
    BASIS
    def2-SVP
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Union

PathLike = Union[str, Path]

ANGSTROM_TO_BOHR = 1.0 / 0.529177210903

_SYMBOLS = (
    "H He Li Be B C N O F Ne Na Mg Al Si P S Cl Ar K Ca "
    "Sc Ti V Cr Mn Fe Co Ni Cu Zn Ga Ge As Se Br Kr Rb Sr Y Zr "
    "Nb Mo Tc Ru Rh Pd Ag Cd In Sn Sb Te I Xe Cs Ba La Ce Pr Nd "
    "Pm Sm Eu Gd Tb Dy Ho Er Tm Yb Lu Hf Ta W Re Os Ir Pt Au Hg "
    "Tl Pb Bi Po At Rn Fr Ra Ac Th Pa U Np Pu Am Cm Bk Cf Es Fm "
    "Md No Lr Rf Db Sg Bh Hs Mt Ds Rg Cn Nh Fl Mc Lv Ts Og"
).split()

_NUMBERS = {symbol.upper(): z for z, symbol in enumerate(_SYMBOLS, start=1)}

_INT = re.compile(r"[+-]?\d+")
_FLOAT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class InputError(ValueError):
    """Raised when an input file is missing a value or holds an invalid one."""


def element_symbol(z: int) -> str:
    """Return the chemical symbol of atomic number ``z``."""
    if not 1 <= z <= len(_SYMBOLS):
        raise InputError(f"Unknown atomic number: {z}")
    return _SYMBOLS[z - 1]


def atomic_number(symbol: str) -> int:
    """Return the atomic number of a chemical symbol, ignoring case."""
    try:
        return _NUMBERS[symbol.strip().upper()]
    except KeyError:
        raise InputError(f"Unknown element: {symbol!r}") from None


def _lines(inp: PathLike) -> list[str]:
    return Path(inp).read_text().splitlines()


def _value_line(inp: PathLike, keyword: str) -> str | None:
    """Return the line after the first occurrence of ``keyword``.

    None means the keyword does not appear; an empty string means it is
    the last line of the file.
    """
    lines = _lines(inp)
    for i, line in enumerate(lines):
        if line.strip().upper() == keyword:
            return lines[i + 1] if i + 1 < len(lines) else ""
    return None


def _first_token(line: str) -> str:
    tokens = line.split()
    return tokens[0] if tokens else ""


def _leading(line: str, pattern: re.Pattern, convert: Callable):
    """Parse the numeric prefix of the first token, or 0 if there is none."""
    match = pattern.match(_first_token(line))
    return convert(match.group()) if match else convert("0")


def _required(inp: PathLike, keyword: str, missing: str) -> str | None:
    line = _value_line(inp, keyword)
    if line is not None and not line:
        raise InputError(missing)
    return line


def read_xyz(inp: PathLike) -> list[list[float]]:
    """Read atoms as ``[Z, Z, x, y, z]`` rows with coordinates in bohr.

    Returns an empty list when the geometry is to be read elsewhere.
    """
    lines = iter(_lines(inp))
    for line in lines:
        if line.strip().upper() != "XYZ":
            continue
        header = next(lines, "").strip().upper()
        if header == "READ":
            return []
        natoms = _leading(header, _INT, int)
        if natoms <= 0:
            raise InputError("Invalid number of atoms!")
        atoms = []
        for _ in range(natoms):
            entry = next(lines, "")
            if not entry:
                raise InputError("Missing atom!")
            fields = entry.split()
            if len(fields) < 4:
                raise InputError(f"Invalid atom line: {entry!r}")
            z = float(atomic_number(fields[0]))
            try:
                x, y, zc = (float(value) for value in fields[1:4])
            except ValueError:
                raise InputError(f"Invalid coordinates: {entry!r}") from None
            atoms.append(
                [z, z, x * ANGSTROM_TO_BOHR, y * ANGSTROM_TO_BOHR, zc * ANGSTROM_TO_BOHR]
            )
        return atoms
    raise InputError("Missing atomic coordinates")


def read_basis_set(inp: PathLike) -> str:
    """Read the basis set name; an empty string means it is read elsewhere."""
    line = _value_line(inp, "BASIS")
    basis = ""
    if line is not None:
        if line.strip().upper() == "READ":
            return ""
        basis = _first_token(line)
    if not basis:
        raise InputError("Missing basis set name!")
    return basis


def read_num_electrons(inp: PathLike) -> int:
    """Count electrons from the nuclear charges and the CHARGE entry."""
    ne = sum(round(atom[0]) for atom in read_xyz(inp))
    line = _required(inp, "CHARGE", "Missing charge!")
    charge = _leading(line, _INT, int) if line is not None else 0
    ne -= charge
    if ne <= 0:
        raise InputError("Invalid number of electrons!")
    return ne


def read_num_threads(inp: PathLike) -> int:
    """Read the number of threads, 1 by default."""
    line = _required(inp, "NTHREADS", "Missing nthreads!")
    nthreads = _leading(line, _INT, int) if line is not None else 1
    if nthreads <= 0:
        raise InputError("Invalid number of threads!")
    return nthreads


def _upper_word(inp: PathLike, keyword: str, default: str, missing: str) -> str:
    line = _required(inp, keyword, missing)
    if line is None:
        return default
    return _first_token(line.upper())


def read_job_type(inp: PathLike) -> str:
    """Read the job type: SCF (default) or LOCALIZATION."""
    jobtype = _upper_word(inp, "JOBTYPE", "SCF", "Missing job type!")
    if jobtype not in ("SCF", "LOCALIZATION"):
        raise InputError("Invalid job type!")
    return jobtype


def read_guess(inp: PathLike) -> str:
    """Read the initial guess: SAP (default) or READ."""
    guess = _upper_word(inp, "GUESS", "SAP", "Missing guess!")
    if guess not in ("SAP", "READ"):
        raise InputError("Invalid guess!")
    return guess


def read_grid(inp: PathLike) -> str:
    """Read the integration grid name, empty if none is given."""
    return _upper_word(inp, "GRID", "", "Missing grid!")


def read_method(inp: PathLike) -> str:
    """Read the electronic structure method, RHF by default."""
    return _upper_word(inp, "METHOD", "RHF", "Missing method!")


def read_derivative(inp: PathLike) -> int:
    """Read the order of nuclear derivatives to compute, 0 by default."""
    line = _required(inp, "DERIVATIVE", "Missing derivative!")
    order = _leading(line, _FLOAT, float) if line is not None else 0.0
    if order < 0:
        raise InputError("Invalid order of derivative!")
    return int(order)


def read_temperature(inp: PathLike) -> float:
    """Read the electronic temperature, 0 by default."""
    line = _required(inp, "TEMPERATURE", "Missing temperature!")
    temperature = _leading(line, _FLOAT, float) if line is not None else 0.0
    if temperature < 0:
        raise InputError("Invalid temperature!")
    return temperature


def read_chemical_potential(inp: PathLike) -> float:
    """Read the chemical potential, 0 by default."""
    line = _required(inp, "CHEMICALPOTENTIAL", "Missing chemical potential!")
    return _leading(line, _FLOAT, float) if line is not None else 0.0