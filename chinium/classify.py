"""Assigning point groups to molecules and moving them to standard orientation.

A molecule is first translated so that its centre of mass is at the origin
and rotated so that its principal axes of inertia are the coordinate axes.
It is then reoriented so that its main symmetry axis lies along ``z``.
Only the point groups listed in :mod:`chinium.pointgroups` are recognised;
any other symmetry gives an unnamed :class:`PointGroup`.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .pointgroups import PointGroup, point_group
from .symmetry import (
    Atom,
    atomic_mass,
    has_inversion_centre,
    is_improper_axis,
    is_mirror,
    is_proper_axis,
)

# Takes a molecule whose main axis lies along x (or y) onto z when its
# transpose is applied to the coordinates.
_MAIN_X_TO_Z = np.array([[0.0, 0.0, 1.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
_MAIN_Y_TO_Z = np.array([[0.0, 1.0, 0.0], [0.0, 0.0, 1.0], [1.0, 0.0, 0.0]])

_MANIFOLDS = (2, 3, 4, 5, 6, 8, 9, 10, 12, 15, 18, 20, 24, 30, 36)

_DN = {3: "D3"}
_CNV = {3: "C3v", 4: "C4v"}
_CN = {3: "C3"}
_DNH = {3: "D3h", 4: "D4h", 6: "D6h", 9: "D9h"}
_CNH = {3: "C3h"}
_DND = {2: "D2d", 3: "D3d", 4: "D4d"}
_SN = {4: "S4"}

_X = (1.0, 0.0, 0.0)
_Y = (0.0, 1.0, 0.0)
_Z = (0.0, 0.0, 1.0)


def _coords(atoms: Sequence[Atom]) -> np.ndarray:
    return np.array([atom.position for atom in atoms], dtype=float).T


def _with_coords(atoms: Sequence[Atom], coords: np.ndarray) -> list[Atom]:
    return [
        Atom(atom.atomic_number, *(float(v) for v in column))
        for atom, column in zip(atoms, coords.T)
    ]


def _apply(atoms: Sequence[Atom], matrix: np.ndarray) -> list[Atom]:
    return _with_coords(atoms, matrix @ _coords(atoms))


def _off_axis(atoms: Sequence[Atom], tolerance: float):
    """Yield atoms that do not lie on the z axis."""
    tol2 = tolerance * tolerance
    for index, atom in enumerate(atoms):
        if atom.x * atom.x + atom.y * atom.y >= tol2:
            yield index, atom


def _like_pairs(atoms: Sequence[Atom], tolerance: float, first_offset: int):
    """Yield pairs of off-axis atoms whose midpoint is off the z axis."""
    tol2 = tolerance * tolerance
    for i, a in _off_axis(atoms, tolerance):
        for b in atoms[i + first_offset :]:
            if b.x * b.x + b.y * b.y < tol2:
                continue
            if ((a.x + b.x) ** 2 + (a.y + b.y) ** 2) / 4.0 < tol2:
                continue
            if a.atomic_number == b.atomic_number:
                yield a, b


def _unit(vector) -> np.ndarray:
    v = np.asarray(vector, dtype=float)
    return v / np.sqrt(v @ v)


def horizontal_c2_axis(atoms: Sequence[Atom], tolerance: float) -> Optional[np.ndarray]:
    """Return a C2 axis lying in the xy plane, or None if there is none.

    Candidates pass through the origin and either an atom in the xy plane
    or the midpoint of two like atoms placed symmetrically about it.
    """
    atoms = list(atoms)
    tol2 = tolerance * tolerance
    for a, b in _like_pairs(atoms, tolerance, 0):
        if (a.z + b.z) ** 2 < tol2:
            candidate = _unit((a.x + b.x, a.y + b.y, 0.0))
            if is_proper_axis(atoms, candidate, 2, tolerance):
                return candidate
    return None


def horizontal_mirror(atoms: Sequence[Atom], tolerance: float) -> Optional[np.ndarray]:
    """Return the normal of a mirror containing the z axis, or None.

    Planes through single atoms are tried first, then planes between two
    like atoms at the same height.
    """
    atoms = list(atoms)
    for _, atom in _off_axis(atoms, tolerance):
        candidate = _unit((atom.y, -atom.x, 0.0))
        if is_mirror(atoms, candidate, tolerance):
            return candidate
    tol2 = tolerance * tolerance
    for a, b in _like_pairs(atoms, tolerance, 1):
        if (a.z - b.z) ** 2 < tol2:
            candidate = _unit((a.y + b.y, -(a.x + b.x), 0.0))
            if is_mirror(atoms, candidate, tolerance):
                return candidate
    return None


def _named(table: dict, key: int) -> PointGroup:
    return point_group(table[key]) if key in table else PointGroup()


def _align_c2(atoms: list[Atom], axis: np.ndarray) -> list[Atom]:
    hx, hy = axis[0], axis[1]
    rotation = np.array([[hx, hy, 0.0], [-hy, hx, 0.0], [0.0, 0.0, 1.0]])
    return _apply(atoms, rotation)


def _align_mirror(atoms: list[Atom], normal: np.ndarray) -> list[Atom]:
    mx, my = normal[0], normal[1]
    rotation = np.array([[-my, mx, 0.0], [-mx, -my, 0.0], [0.0, 0.0, 1.0]])
    return _apply(atoms, rotation)


def _asymmetric_top(atoms: list[Atom], tolerance: float, u: np.ndarray):
    to_z_from_x = _MAIN_X_TO_Z.T
    to_z_from_y = _MAIN_Y_TO_Z.T

    def mirror(axis) -> bool:
        return is_mirror(atoms, axis, tolerance)

    def c2(axis) -> bool:
        return is_proper_axis(atoms, axis, 2, tolerance)

    if mirror(_X) or mirror(_Y) or mirror(_Z):
        if has_inversion_centre(atoms, tolerance):
            if mirror(_X) and mirror(_Y) and mirror(_Z):
                return point_group("D2h"), atoms
            if mirror(_X):
                return point_group("C2h"), _apply(atoms, to_z_from_x)
            if mirror(_Y):
                return point_group("C2h"), _apply(atoms, to_z_from_y)
            return point_group("C2h"), atoms
        if c2(_X) or c2(_Y) or c2(_Z):
            if c2(_X):
                return point_group("C2v"), _apply(atoms, to_z_from_x)
            if c2(_Y):
                return point_group("C2v"), _apply(atoms, to_z_from_y)
            return point_group("C2v"), atoms
        if mirror(_X):
            return point_group("Cs"), _apply(atoms, to_z_from_x)
        if mirror(_Y):
            return point_group("Cs"), _apply(atoms, to_z_from_y)
        return point_group("Cs"), atoms

    if has_inversion_centre(atoms, tolerance):
        return point_group("Ci"), atoms
    if c2(_X) or c2(_Y) or c2(_Z):
        if c2(_X) and c2(_Y) and c2(_Z):
            return point_group("D2"), atoms
        if c2(_X):
            return point_group("C2"), _apply(atoms, to_z_from_x)
        if c2(_Y):
            return point_group("C2"), _apply(atoms, to_z_from_y)
        return point_group("C2"), atoms
    # Without symmetry the molecule is turned back to its original orientation.
    return point_group("C1"), _apply(atoms, u)


def _symmetric_top(atoms: list[Atom], tolerance: float, moments):
    ixx, iyy, izz = moments
    if (iyy - izz) ** 2 < tolerance:
        atoms = _apply(atoms, _MAIN_X_TO_Z.T)
    elif (izz - ixx) ** 2 < tolerance:
        atoms = _apply(atoms, _MAIN_Y_TO_Z.T)

    max_proper = 0
    max_improper = 0
    for manifold in _MANIFOLDS:
        if is_proper_axis(atoms, _Z, manifold, tolerance):
            max_proper = manifold
        if is_improper_axis(atoms, _Z, manifold, tolerance):
            max_improper = manifold

    if max_improper == 0:
        c2 = horizontal_c2_axis(atoms, tolerance)
        if c2 is not None:
            return _named(_DN, max_proper), _align_c2(atoms, c2)
        normal = horizontal_mirror(atoms, tolerance)
        if normal is not None:
            return _named(_CNV, max_proper), _align_mirror(atoms, normal)
        return _named(_CN, max_proper), atoms
    if max_proper == max_improper:
        c2 = horizontal_c2_axis(atoms, tolerance)
        if c2 is not None:
            return _named(_DNH, max_proper), _align_c2(atoms, c2)
        return _named(_CNH, max_proper), atoms
    if max_proper < max_improper:
        c2 = horizontal_c2_axis(atoms, tolerance)
        if c2 is not None:
            return _named(_DND, max_proper), _align_c2(atoms, c2)
        return _named(_SN, max_improper), atoms
    return PointGroup(), atoms


def get_point_group(atoms: Sequence[Atom], tolerance: float) -> tuple[PointGroup, list[Atom]]:
    """Return the point group of a molecule and the molecule reoriented.

    Linear molecules give an unnamed group whose ``inversion_centre`` tells
    D-infinity-h from C-infinity-v; their axis is moved onto z. Spherical
    tops and unlisted groups give an unnamed, empty group.
    """
    atoms = list(atoms)
    if not atoms:
        raise ValueError("A molecule needs at least one atom")
    masses = np.array([atomic_mass(atom.atomic_number) for atom in atoms])
    coords = _coords(atoms)
    centre = coords @ masses / masses.sum()
    shifted = coords - centre[:, None]
    inertia = np.zeros((3, 3))
    for mass, r in zip(masses, shifted.T):
        inertia += mass * ((r @ r) * np.eye(3) - np.outer(r, r))
    moments, u = np.linalg.eigh(inertia)
    atoms = _with_coords(atoms, u.T @ shifted)
    ixx, iyy, izz = (float(m) for m in moments)
    tol2 = tolerance * tolerance

    if ixx * ixx < tol2 or iyy * iyy < tol2 or izz * izz < tol2:
        inversion = has_inversion_centre(atoms, tolerance)
        return PointGroup(inversion_centre=inversion), _apply(atoms, _MAIN_X_TO_Z.T)
    if (ixx - iyy) ** 2 > tol2 and (ixx - izz) ** 2 > tol2 and (iyy - izz) ** 2 > tol2:
        return _asymmetric_top(atoms, tolerance, u)
    if (
        (ixx - iyy) ** 2 < tolerance
        and (ixx - izz) ** 2 < tolerance
        and (iyy - izz) ** 2 < tolerance
    ):
        return PointGroup(), atoms
    return _symmetric_top(atoms, tolerance, (ixx, iyy, izz))