"""Reading and writing Multiwfn ``.mwfn`` wavefunction files.

Internally, basis functions of a shell of angular momentum ``l`` are
ordered by magnetic quantum number, ``m = -l, ..., +l``. The ``.mwfn``
format orders them as ``Px, Py, Pz`` for P shells and as
``0, +1, -1, +2, -2, ...`` for higher shells. Coefficients and matrices
are reordered when they are read and written.
"""

from __future__ import annotations

import re
from collections import Counter, deque
from dataclasses import dataclass, field
from itertools import islice
from pathlib import Path
from typing import Union

import numpy as np

from .gateway import ANGSTROM_TO_BOHR, element_symbol

PathLike = Union[str, Path]

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_FLT_MAX = 3.4028234663852886e38
_FLT_MIN_NORMAL = 1.1754943508222875e-38


def mwfn_matrix_transform(shell_types) -> np.ndarray:
    """Return the permutation taking internal basis order to ``.mwfn`` order.

    ``T @ c`` converts a coefficient vector to file order and
    ``T.T @ c`` converts it back. The sign of each shell type is ignored.
    """
    blocks = [_shell_permutation(abs(int(t))) for t in shell_types]
    nbasis = sum(len(block) for block in blocks)
    transform = np.zeros((nbasis, nbasis))
    start = 0
    for block in blocks:
        size = len(block)
        transform[start : start + size, start : start + size] = block
        start += size
    return transform


def _shell_permutation(l: int) -> np.ndarray:
    size = 2 * l + 1
    if l == 1:
        columns = [2, 0, 1]
    else:
        columns = [l]
        for k in range(1, l + 1):
            columns += [l + k, l - k]
    block = np.zeros((size, size))
    block[np.arange(size), columns] = 1.0
    return block


def safe_float(word: str) -> float:
    """Parse the leading number of ``word``.

    Values outside the single-precision range, such as tiny occupation
    numbers of order 1E-50, are read as zero.
    """
    match = _FLOAT_PREFIX.match(word)
    if match is None:
        raise ValueError(f"Not a number: {word!r}")
    value = float(match.group())
    magnitude = abs(value)
    if np.isfinite(value) and value != 0.0 and (
        magnitude < _FLT_MIN_NORMAL or magnitude > _FLT_MAX
    ):
        return 0.0
    return value


@dataclass
class Mwfn:
    """Contents of a ``.mwfn`` file; ``None`` marks an absent entry."""

    # Overview
    wfntype: int | None = None
    charge: int | None = None
    naelec: int | None = None
    nbelec: int | None = None
    e_tot: float | None = None
    vt_ratio: float | None = None

    # Atoms: rows of (Z, x, y, z) in bohr
    ncenter: int | None = None
    centers: np.ndarray | None = None

    # Basis set
    nbasis: int | None = None
    nindbasis: int | None = None
    nprims: int | None = None
    nshell: int | None = None
    nprimshell: int | None = None
    shell_types: list[int] = field(default_factory=list)
    shell_centers: list[int] = field(default_factory=list)
    shell_contraction_degrees: list[int] = field(default_factory=list)
    primitive_exponents: list[float] = field(default_factory=list)
    contraction_coefficients: list[float] = field(default_factory=list)

    # Orbitals
    orbital_types: list[int] = field(default_factory=list)
    energy: np.ndarray | None = None
    occ: np.ndarray | None = None
    sym: list[str] = field(default_factory=list)
    coeff: np.ndarray | None = None

    # Matrices
    total_density_matrix: np.ndarray | None = None
    hamiltonian_matrix: np.ndarray | None = None
    overlap_matrix: np.ndarray | None = None
    kinetic_energy_matrix: np.ndarray | None = None
    potential_energy_matrix: np.ndarray | None = None

    def _transform(self, size: int) -> np.ndarray:
        if self.shell_types:
            return mwfn_matrix_transform(self.shell_types)
        return np.eye(size)

    def export(self, filename: PathLike) -> None:
        """Write the wavefunction to ``filename`` in ``.mwfn`` format."""
        out = ["# Generated by Chinium", "", "", "# Overview", "Wfntype= 0"]
        for label, value in (
            ("Charge", self.charge),
            ("Naelec", self.naelec),
            ("Nbelec", self.nbelec),
        ):
            if value is not None:
                out.append(f"{label}= {value:d}")
        for label, value in (("E_tot", self.e_tot), ("VT_ratio", self.vt_ratio)):
            if value is not None:
                out.append(f"{label}= {value:f}")

        out += ["", "", "# Atoms"]
        if self.ncenter is not None:
            out.append(f"Ncenter= {self.ncenter:d}")
        if self.centers is not None and len(self.centers):
            out.append("$Centers")
            for icenter, (z, x, y, zc) in enumerate(np.asarray(self.centers, float), 1):
                out.append(
                    f"{icenter} {element_symbol(int(z))} {int(z)} {z:f} "
                    f"{x / ANGSTROM_TO_BOHR:f} {y / ANGSTROM_TO_BOHR:f} "
                    f"{zc / ANGSTROM_TO_BOHR:f}"
                )

        out += ["", "", "# Basis set"]
        for label, value in (
            ("Nbasis", self.nbasis),
            ("Nindbasis", self.nindbasis),
            ("Nprims", self.nprims),
            ("Nshell", self.nshell),
            ("Nprimshell", self.nprimshell),
        ):
            if value is not None:
                out.append(f"{label}= {value:d}")
        if self.shell_centers:
            out += self._shell_lines()

        out += ["", "", "# Orbitals"]
        if self.energy is not None and len(self.energy):
            coeff = np.asarray(self.coeff, dtype=float)
            transformed = self._transform(coeff.shape[0]) @ coeff
            for index, (kind, energy, occ, sym, column) in enumerate(
                zip(self.orbital_types, self.energy, self.occ, self.sym, transformed.T),
                start=1,
            ):
                out += [
                    f"Index= {index:9d}",
                    f"Type= {kind:d}",
                    f"Energy= {energy:E}",
                    f"Occ= {occ:E}",
                    f"Sym= {sym}",
                    "$Coeff",
                    "".join(f" {value:E}" for value in column),
                    "",
                ]

        out += ["", "", "# Matrices"]
        for label, matrix in (
            ("$Total density matrix", self.total_density_matrix),
            ("$1-e Hamiltonian matrix", self.hamiltonian_matrix),
            ("$Overlap matrix", self.overlap_matrix),
            ("$Kinetic energy matrix", self.kinetic_energy_matrix),
            ("$Potential energy matrix", self.potential_energy_matrix),
        ):
            if matrix is None or not np.size(matrix):
                continue
            matrix = np.asarray(matrix, dtype=float)
            n = self.nbasis if self.nbasis is not None else matrix.shape[0]
            transform = self._transform(matrix.shape[0])
            out.append(f"{label}, dim= {n:d} {n:d} lower= 1")
            reordered = transform @ matrix @ transform.T
            out += [
                "".join(f" {value:E}" for value in row[: i + 1])
                for i, row in enumerate(reordered)
            ]

        Path(filename).write_text("\n".join(out) + "\n")

    def _shell_lines(self) -> list[str]:
        ncenter = (
            self.ncenter if self.ncenter is not None else max(self.shell_centers) + 1
        )
        counts = Counter(self.shell_centers)
        if any(not 0 <= c < ncenter for c in counts):
            raise ValueError("Shell centre out of range")

        def per_centre(values) -> list[str]:
            it = iter(values)
            return [
                "".join(f" {v:d}" for v in islice(it, counts[c])) for c in range(ncenter)
            ]

        # Only pure spherical harmonics are used, flagged by negative types.
        signed = [t if t < 2 else -t for t in self.shell_types]
        lines = ["$Shell types", *per_centre(signed)]
        lines.append("$Shell centers")
        lines += ["".join(f" {c + 1:d}" for _ in range(counts[c])) for c in range(ncenter)]
        lines += ["$Shell contraction degrees", *per_centre(self.shell_contraction_degrees)]

        def per_shell(values) -> list[str]:
            it = iter(values)
            return [
                "".join(f" {v:f}" for v in islice(it, degree))
                for degree in self.shell_contraction_degrees
            ]

        lines += ["$Primitive exponents", *per_shell(self.primitive_exponents)]
        lines += ["$Contraction coefficients", *per_shell(self.contraction_coefficients)]
        return lines


def _take_words(lines: deque, total: int) -> list[str]:
    """Collect ``total`` words from the following non-empty lines."""
    words: list[str] = []
    while lines and lines[0] and len(words) < total:
        words.extend(lines.popleft().split())
    if len(words) < total:
        raise ValueError(f"Expected {total} values, found {len(words)}")
    return words[:total]


def _arg(args: list[str], key: str) -> str:
    if not args:
        raise ValueError(f"Missing value after {key}")
    return args[0]


def _load_matrix(lines: deque, args: list[str]) -> np.ndarray:
    try:
        dim = args.index("dim=")
        nrows, ncols = int(args[dim + 1]), int(args[dim + 2])
        lower = int(args[args.index("lower=") + 1])
    except (ValueError, IndexError):
        raise ValueError(f"Invalid matrix header: {' '.join(args)!r}") from None
    matrix = np.zeros((nrows, ncols))
    if lower:
        values = iter(safe_float(w) for w in _take_words(lines, ncols * (ncols + 1) // 2))
        for i in range(ncols):
            for j in range(i + 1):
                matrix[i, j] = matrix[j, i] = next(values)
    else:
        values = [safe_float(w) for w in _take_words(lines, nrows * ncols)]
        matrix[:, :] = np.reshape(values, (nrows, ncols))
    return matrix


def read_mwfn(filename: PathLike) -> Mwfn:
    """Read a ``.mwfn`` file; a missing file gives an empty :class:`Mwfn`."""
    path = Path(filename)
    wfn = Mwfn()
    if not path.is_file():
        return wfn
    lines = deque(path.read_text().splitlines())
    transform: np.ndarray | None = None
    index: int | None = None
    counts = {
        "Nindbasis=": "nindbasis",
        "Nprims=": "nprims",
        "Nshell=": "nshell",
        "Nprimshell=": "nprimshell",
    }

    def current() -> int:
        if wfn.nbasis is None or index is None:
            raise ValueError("Orbital data appears before Nbasis= and Index=")
        return index

    while lines:
        tokens = lines.popleft().split()
        if not tokens:
            continue
        key, args = tokens[0], tokens[1:]

        if key == "Nbasis=":
            n = int(_arg(args, key))
            wfn.nbasis = n
            wfn.orbital_types = [0] * n
            wfn.energy = np.zeros(n)
            wfn.occ = np.zeros(n)
            wfn.sym = [""] * n
            wfn.coeff = np.zeros((n, n))
        elif key in counts:
            setattr(wfn, counts[key], int(_arg(args, key)))
        elif key == "$Shell" and args and args[0] in ("types", "centers", "contraction"):
            values = [int(w) for w in _take_words(lines, wfn.nshell or 0)]
            if args[0] == "types":
                wfn.shell_types = values
                transform = mwfn_matrix_transform(values)
            elif args[0] == "centers":
                wfn.shell_centers = [c - 1 for c in values]
            else:
                wfn.shell_contraction_degrees = values
        elif key == "Index=":
            index = int(_arg(args, key)) - 1
        elif key == "Type=":
            wfn.orbital_types[current()] = int(_arg(args, key))
        elif key == "Energy=":
            wfn.energy[current()] = safe_float(_arg(args, key))
        elif key == "Occ=":
            wfn.occ[current()] = safe_float(_arg(args, key))
        elif key == "Sym=":
            wfn.sym[current()] = _arg(args, key)
        elif key == "$Coeff":
            i = current()
            column = np.array([safe_float(w) for w in _take_words(lines, wfn.nbasis)])
            wfn.coeff[:, i] = column if transform is None else transform.T @ column
        elif key in ("$Total", "$Overlap"):
            matrix = _load_matrix(lines, args)
            if transform is not None:
                matrix = transform.T @ matrix @ transform
            if key == "$Total":
                wfn.total_density_matrix = matrix
            else:
                wfn.overlap_matrix = matrix
    return wfn