import math
from itertools import combinations

import numpy as np
import pytest

from chinium.classify import get_point_group, horizontal_c2_axis, horizontal_mirror
from chinium.pointgroups import PointGroup
from chinium.symmetry import Atom, is_mirror, is_proper_axis

TOL = 0.01


def distances(atoms):
    return sorted(
        float(np.linalg.norm(a.position - b.position)) for a, b in combinations(atoms, 2)
    )


def water():
    return [Atom(8, 0.0, 0.0, 0.0), Atom(1, 0.0, 1.43, 1.1), Atom(1, 0.0, -1.43, 1.1)]


def ammonia():
    atoms = [Atom(7, 0.0, 0.0, 0.3)]
    for k in range(3):
        angle = 2.0 * math.pi * k / 3
        atoms.append(Atom(1, 1.77 * math.cos(angle), 1.77 * math.sin(angle), -0.1))
    return atoms


def boron_trifluoride():
    atoms = [Atom(5, 0.0, 0.0, 0.0)]
    for k in range(3):
        angle = 2.0 * math.pi * k / 3
        atoms.append(Atom(9, 2.5 * math.cos(angle), 2.5 * math.sin(angle), 0.0))
    return atoms


def test_water_is_c2v_with_axis_on_z():
    group, atoms = get_point_group(water(), TOL)
    assert group.name == "C2v"
    assert is_proper_axis(atoms, (0.0, 0.0, 1.0), 2, TOL)
    oxygen = atoms[0]
    assert abs(oxygen.x) < 1e-8 and abs(oxygen.y) < 1e-8


def test_reorientation_preserves_geometry():
    original = water()
    _, atoms = get_point_group(original, TOL)
    assert [a.atomic_number for a in atoms] == [a.atomic_number for a in original]
    assert np.allclose(distances(atoms), distances(original))


def test_asymmetric_molecule_is_c1_and_only_translated():
    original = [
        Atom(1, 0.0, 0.0, 0.0),
        Atom(2, 1.3, 0.2, 0.1),
        Atom(3, -0.4, 1.7, 0.5),
        Atom(4, 0.3, -0.6, 2.2),
    ]
    group, atoms = get_point_group(original, TOL)
    assert group.name == "C1"
    shift = original[0].position - atoms[0].position
    for before, after in zip(original, atoms):
        assert np.allclose(before.position - after.position, shift)


def test_centrosymmetric_molecule_is_ci():
    points = [(1, (1.0, 0.2, 0.3)), (2, (0.3, 1.5, -0.4)), (3, (-0.7, 0.4, 1.9))]
    atoms = []
    for z, p in points:
        atoms.append(Atom(z, *p))
        atoms.append(Atom(z, *(-v for v in p)))
    group, _ = get_point_group(atoms, TOL)
    assert group.name == "Ci"
    assert group.inversion_centre


def test_ethylene_is_d2h():
    atoms = [Atom(6, 1.26, 0.0, 0.0), Atom(6, -1.26, 0.0, 0.0)]
    for sx in (1, -1):
        for sy in (1, -1):
            atoms.append(Atom(1, sx * 2.33, sy * 1.75, 0.0))
    group, _ = get_point_group(atoms, TOL)
    assert group.name == "D2h"


def test_planar_triangle_is_cs_in_xy_plane():
    atoms = [Atom(1, 0.0, 0.0, 0.0), Atom(2, 1.5, 0.3, 0.0), Atom(3, -0.2, 2.0, 0.0)]
    group, result = get_point_group(atoms, TOL)
    assert group.name == "Cs"
    assert all(abs(a.z) < 1e-8 for a in result)


def test_twisted_molecule_is_c2():
    atoms = [
        Atom(8, 1.3, 0.2, 0.0),
        Atom(8, -1.3, -0.2, 0.0),
        Atom(1, 1.6, 1.5, 0.9),
        Atom(1, -1.6, -1.5, 0.9),
    ]
    group, result = get_point_group(atoms, TOL)
    assert group.name == "C2"
    assert is_proper_axis(result, (0.0, 0.0, 1.0), 2, TOL)


def test_ammonia_is_c3v():
    group, result = get_point_group(ammonia(), TOL)
    assert group.name == "C3v"
    assert is_proper_axis(result, (0.0, 0.0, 1.0), 3, TOL)


def test_boron_trifluoride_is_d3h_with_c2_on_x():
    group, result = get_point_group(boron_trifluoride(), TOL)
    assert group.name == "D3h"
    assert is_proper_axis(result, (1.0, 0.0, 0.0), 2, TOL)


@pytest.mark.parametrize(
    "atoms, inversion",
    [
        ([Atom(8, -2.2, 0.0, 0.0), Atom(6, 0.0, 0.0, 0.0), Atom(8, 2.2, 0.0, 0.0)], True),
        ([Atom(1, -2.0, 0.0, 0.0), Atom(6, 0.0, 0.0, 0.0), Atom(7, 2.2, 0.0, 0.0)], False),
    ],
)
def test_linear_molecule_lies_on_z(atoms, inversion):
    group, result = get_point_group(atoms, TOL)
    assert group.inversion_centre is inversion
    assert all(abs(a.x) < 1e-8 and abs(a.y) < 1e-8 for a in result)


def test_spherical_top_gives_empty_group():
    a = 1.19
    atoms = [
        Atom(6, 0.0, 0.0, 0.0),
        Atom(1, a, a, a),
        Atom(1, a, -a, -a),
        Atom(1, -a, a, -a),
        Atom(1, -a, -a, a),
    ]
    group, _ = get_point_group(atoms, TOL)
    assert group == PointGroup()


def test_horizontal_c2_axis_of_boron_trifluoride():
    atoms = boron_trifluoride()
    axis = horizontal_c2_axis(atoms, TOL)
    assert axis is not None
    assert abs(axis[2]) < 1e-12
    assert np.isclose(np.linalg.norm(axis), 1.0)
    assert is_proper_axis(atoms, axis, 2, TOL)


def test_ammonia_has_no_horizontal_c2_axis():
    assert horizontal_c2_axis(ammonia(), TOL) is None


def test_horizontal_mirror_of_ammonia():
    atoms = ammonia()
    normal = horizontal_mirror(atoms, TOL)
    assert normal is not None
    assert abs(normal[2]) < 1e-12
    assert is_mirror(atoms, normal, TOL)


def test_twisted_molecule_has_no_vertical_mirror():
    atoms = [
        Atom(8, 1.3, 0.2, 0.0),
        Atom(8, -1.3, -0.2, 0.0),
        Atom(1, 1.6, 1.5, 0.9),
        Atom(1, -1.6, -1.5, 0.9),
    ]
    assert horizontal_mirror(atoms, TOL) is None


def test_empty_molecule_raises():
    with pytest.raises(ValueError):
        get_point_group([], TOL)


def test_unknown_mass_raises():
    with pytest.raises(ValueError):
        get_point_group([Atom(30, 0.0, 0.0, 0.0), Atom(1, 1.0, 0.0, 0.0)], TOL)