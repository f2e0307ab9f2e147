"""Testing molecules for symmetry elements.

Coordinates are in bohr. A symmetry operation is accepted when every atom
maps onto a like atom within a relative tolerance.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

_ATOMIC_MASSES = {
    1: 1.0079, 2: 4.0026, 3: 6.9412, 4: 9.0121, 5: 10.811, 6: 12.010,
    7: 14.006, 8: 15.999, 9: 18.998, 10: 20.179, 11: 22.989, 12: 24.305,
    13: 26.981, 14: 28.085, 15: 30.973, 16: 32.065, 17: 35.453, 18: 39.948,
}


@dataclass(frozen=True)
class Atom:
    """An atom given by its atomic number and position."""

    atomic_number: int
    x: float
    y: float
    z: float

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


def atomic_mass(z: int) -> float:
    """Return the average atomic mass of element ``z`` (H to Ar)."""
    try:
        return _ATOMIC_MASSES[z]
    except KeyError:
        raise ValueError(f"No atomic mass for atomic number {z}") from None


def rotation_matrix(axis, angle: float) -> np.ndarray:
    """Return the matrix rotating by ``angle`` radians about the unit ``axis``."""
    x, y, z = (float(v) for v in axis)
    c, s = math.cos(angle), math.sin(angle)
    t = 1.0 - c
    return np.array(
        [
            [x * x * t + c, x * y * t - z * s, x * z * t + y * s],
            [x * y * t + z * s, y * y * t + c, y * z * t - x * s],
            [x * z * t - y * s, y * z * t + x * s, z * z * t + c],
        ]
    )


def reflection_matrix(normal) -> np.ndarray:
    """Return the reflection through the plane with unit ``normal``."""
    n = np.asarray(normal, dtype=float).reshape(3)
    return np.eye(3) - 2.0 * np.outer(n, n)


def _transform(atoms: Sequence[Atom], matrix: np.ndarray) -> list[Atom]:
    return [
        Atom(atom.atomic_number, *(float(v) for v in matrix @ atom.position))
        for atom in atoms
    ]


def find_image(atom: Atom, projections: Sequence[Atom], tolerance: float) -> Optional[int]:
    """Return the index of the like projection that coincides with ``atom``.

    The deviation is scaled by the distance, so it is judged relatively.
    None means no projection lies within tolerance.
    """
    origin = atom.position
    nearest: Optional[int] = None
    nearest_deviation = 364364.0
    for index, candidate in enumerate(projections):
        if candidate.atomic_number != atom.atomic_number:
            continue
        deviation = float(np.sum((origin - candidate.position) ** 2))
        if nearest_deviation > deviation:
            nearest, nearest_deviation = index, deviation
    if nearest is None:
        return None
    tol2 = tolerance * tolerance
    if nearest_deviation / (nearest_deviation + tol2) < tol2:
        return nearest
    return None


def _invariant(atoms: Sequence[Atom], matrix: np.ndarray, tolerance: float) -> bool:
    projections = _transform(atoms, matrix)
    return all(find_image(atom, projections, tolerance) is not None for atom in atoms)


def has_inversion_centre(atoms: Sequence[Atom], tolerance: float) -> bool:
    """Tell whether the origin is an inversion centre of the molecule."""
    return _invariant(atoms, -np.eye(3), tolerance)


def is_mirror(atoms: Sequence[Atom], normal, tolerance: float) -> bool:
    """Tell whether the plane through the origin with ``normal`` is a mirror."""
    return _invariant(atoms, reflection_matrix(normal), tolerance)


def _check_manifold(manifold: int) -> None:
    if manifold < 1:
        raise ValueError("The manifold of an axis must be positive")


def is_proper_axis(atoms: Sequence[Atom], axis, manifold: int, tolerance: float) -> bool:
    """Tell whether ``axis`` is a C_n axis with ``n = manifold``."""
    _check_manifold(manifold)
    angle = 2.0 * math.pi / manifold
    return all(
        _invariant(atoms, rotation_matrix(axis, k * angle), tolerance)
        for k in range(1, manifold)
    )


def is_improper_axis(atoms: Sequence[Atom], axis, manifold: int, tolerance: float) -> bool:
    """Tell whether ``axis`` is an S_n axis with ``n = manifold``.

    The odd powers of the improper rotation are checked.
    """
    _check_manifold(manifold)
    angle = 2.0 * math.pi / manifold
    reflection = reflection_matrix(axis)
    return all(
        _invariant(atoms, rotation_matrix(axis, k * angle) @ reflection, tolerance)
        for k in range(1, manifold, 2)
    )