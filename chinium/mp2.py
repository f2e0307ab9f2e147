"""Second-order Moller-Plesset correlation energy from MO integrals."""

from __future__ import annotations

from enum import Enum

import numpy as np


class ShellType(Enum):
    """Whether orbitals are spatial (restricted) or spin orbitals (unrestricted)."""

    RESTRICTED = "Restricted"
    UNRESTRICTED = "Unrestricted"


def duplicate_rows(matrix) -> np.ndarray:
    """Repeat every row twice in place, doubling the row count."""
    return np.repeat(np.asarray(matrix), 2, axis=0)


def duplicate_cols(matrix) -> np.ndarray:
    """Repeat every column twice in place, doubling the column count."""
    return np.repeat(np.asarray(matrix), 2, axis=1)


def mp2_correlation_energy(orbital_energies, mo2e, n_electrons, shell_type) -> float:
    """Return the MP2 correlation energy.

    ``mo2e[p, q, r, s]`` holds the chemists'-notation integral (pq|rs).
    In the restricted case the lowest ``n_electrons // 2`` orbitals are
    occupied; in the unrestricted case the lowest ``n_electrons`` spin
    orbitals are.
    """
    kind = ShellType(shell_type)
    energies = np.asarray(orbital_energies, dtype=float).ravel()
    integrals = np.asarray(mo2e, dtype=float)
    nocc = n_electrons // 2 if kind is ShellType.RESTRICTED else n_electrons
    occ = slice(0, nocc)
    vir = slice(nocc, len(energies))

    direct = integrals[occ, vir, occ, vir]  # (a r | b s)
    exchange = direct.transpose(0, 3, 2, 1)  # (a s | b r)
    eo = energies[occ]
    ev = energies[vir]
    denom = (
        eo[:, None, None, None]
        - ev[None, :, None, None]
        + eo[None, None, :, None]
        - ev[None, None, None, :]
    )
    if kind is ShellType.RESTRICTED:
        return float(np.sum(direct * (2.0 * direct - exchange) / denom))
    return float(np.sum((direct - exchange) ** 2 / denom) / 4.0)