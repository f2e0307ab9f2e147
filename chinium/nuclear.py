"""Nuclear repulsion energy and its first and second derivatives.

Atoms are given as rows ``(Z, x, y, z)`` with coordinates in bohr.
"""

from __future__ import annotations

import numpy as np


def _split(atoms) -> tuple[np.ndarray, np.ndarray]:
    arr = np.asarray(atoms, dtype=float)
    if arr.ndim != 2 or arr.shape[1] != 4:
        raise ValueError("atoms must be rows of (Z, x, y, z)")
    return arr[:, 0], arr[:, 1:]


def _pair_terms(atoms):
    charges, coords = _split(atoms)
    diff = coords[:, None, :] - coords[None, :, :]
    dist = np.linalg.norm(diff, axis=2)
    np.fill_diagonal(dist, np.inf)
    zz = np.outer(charges, charges)
    return zz, diff, dist


def nuclear_repulsion(atoms) -> float:
    """Return the nuclear repulsion energy in hartree."""
    charges, coords = _split(atoms)
    i, j = np.triu_indices(len(charges), k=1)
    dist = np.linalg.norm(coords[i] - coords[j], axis=1)
    return float(np.sum(charges[i] * charges[j] / dist))


def nuclear_repulsion_gradient(atoms) -> np.ndarray:
    """Return the energy gradient as an ``(natoms, 3)`` array."""
    zz, diff, dist = _pair_terms(atoms)
    coef = zz / dist**3
    return -np.einsum("ij,ijk->ik", coef, diff)


def nuclear_repulsion_hessian(atoms) -> np.ndarray:
    """Return the energy Hessian as a ``(3 natoms, 3 natoms)`` array."""
    zz, diff, dist = _pair_terms(atoms)
    n = len(zz)
    coef3 = zz / dist**3
    coef5 = zz / dist**5
    blocks = coef3[:, :, None, None] * np.eye(3) - 3.0 * coef5[:, :, None, None] * (
        diff[:, :, :, None] * diff[:, :, None, :]
    )
    idx = np.arange(n)
    blocks[idx, idx] = -blocks.sum(axis=1)
    return blocks.transpose(0, 2, 1, 3).reshape(3 * n, 3 * n)