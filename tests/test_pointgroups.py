import pytest

from chinium.pointgroups import PointGroup, format_point_group, point_group


def test_c2v_elements():
    group = point_group("C2v")
    assert group.name == "C2v"
    assert group.inversion_centre is False
    assert group.mirrors == ((1, 0, 0), (0, 1, 0))
    assert group.proper_axes == ((0, 0, 1),)
    assert group.proper_manifolds == (2,)
    assert group.proper_exponents == (1,)


def test_d2h_has_inversion_and_three_axes():
    group = point_group("D2h")
    assert group.inversion_centre is True
    assert len(group.mirrors) == 3
    assert group.proper_manifolds == (2, 2, 2)
    assert group.mirrors == group.proper_axes


@pytest.mark.parametrize(
    "name, inversion",
    [("Ci", True), ("C1", False), ("D4h", True), ("D3d", True), ("S4", False), ("D9h", False)],
)
def test_inversion_flags(name, inversion):
    assert point_group(name).inversion_centre is inversion


def test_operation_count_counts_identity():
    assert point_group("C1").operation_count == 1
    assert point_group("C2h").operation_count == 4
    assert point_group("D2h").operation_count == 8


def test_unknown_group_raises():
    with pytest.raises(ValueError):
        point_group("Xy9")


def test_inconsistent_axes_rejected():
    with pytest.raises(ValueError):
        PointGroup("bad", proper_axes=((0, 0, 1),), proper_manifolds=(), proper_exponents=())


def test_format_lists_elements():
    text = format_point_group(point_group("C2v"))
    lines = text.splitlines()
    assert lines[0] == "Point group: C2v"
    assert lines[1] == "Inversion Centre: 0"
    assert "Mirrors: 1 0 0" in lines
    assert "Proper manifolds: 2" in lines


def test_format_of_empty_group_names_it():
    text = format_point_group(point_group("C1"))
    assert text.startswith("Point group: C1\n")
    assert "Mirrors: \n" in text