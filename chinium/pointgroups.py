"""Point groups with their symmetry elements in the standard orientation."""

from __future__ import annotations

from dataclasses import dataclass

Vector = tuple[float, float, float]


@dataclass(frozen=True)
class PointGroup:
    """Symmetry elements of a point group.

    Mirrors are given by unit normals and rotation axes by unit vectors.
    Each rotation axis has a manifold ``n`` and an exponent ``k``, standing
    for the rotation by ``2 pi k / n``.
    """

    name: str = ""
    inversion_centre: bool = False
    mirrors: tuple[Vector, ...] = ()
    proper_axes: tuple[Vector, ...] = ()
    proper_manifolds: tuple[int, ...] = ()
    proper_exponents: tuple[int, ...] = ()
    improper_axes: tuple[Vector, ...] = ()
    improper_manifolds: tuple[int, ...] = ()
    improper_exponents: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        if not len(self.proper_axes) == len(self.proper_manifolds) == len(self.proper_exponents):
            raise ValueError("Proper axes, manifolds and exponents differ in number")
        if not (
            len(self.improper_axes)
            == len(self.improper_manifolds)
            == len(self.improper_exponents)
        ):
            raise ValueError("Improper axes, manifolds and exponents differ in number")

    @property
    def operation_count(self) -> int:
        """Number of listed operations, the identity included."""
        return (
            1
            + int(self.inversion_centre)
            + len(self.mirrors)
            + len(self.proper_axes)
            + len(self.improper_axes)
        )


_X = (1.0, 0.0, 0.0)
_Y = (0.0, 1.0, 0.0)
_Z = (0.0, 0.0, 1.0)

_GROUPS = {
    group.name: group
    for group in (
        PointGroup("C1"),
        PointGroup("Cs", mirrors=(_Z,)),
        PointGroup("Ci", inversion_centre=True),
        PointGroup("C2", proper_axes=(_Z,), proper_manifolds=(2,), proper_exponents=(1,)),
        PointGroup(
            "C2v",
            mirrors=(_X, _Y),
            proper_axes=(_Z,),
            proper_manifolds=(2,),
            proper_exponents=(1,),
        ),
        PointGroup(
            "C2h",
            inversion_centre=True,
            mirrors=(_Z,),
            proper_axes=(_Z,),
            proper_manifolds=(2,),
            proper_exponents=(1,),
        ),
        PointGroup(
            "D2",
            proper_axes=(_Z, _X, _Y),
            proper_manifolds=(2, 2, 2),
            proper_exponents=(1, 1, 1),
        ),
        PointGroup(
            "D2h",
            inversion_centre=True,
            mirrors=(_Z, _X, _Y),
            proper_axes=(_Z, _X, _Y),
            proper_manifolds=(2, 2, 2),
            proper_exponents=(1, 1, 1),
        ),
        PointGroup("D3"),
        PointGroup("C3"),
        PointGroup("C3h"),
        PointGroup("C3v"),
        PointGroup("C4v"),
        PointGroup("D3h"),
        PointGroup("D4h", inversion_centre=True),
        PointGroup("D6h", inversion_centre=True),
        PointGroup("D9h"),
        PointGroup("D2d"),
        PointGroup("D3d", inversion_centre=True),
        PointGroup("D4d"),
        PointGroup("S4"),
    )
}


def point_group(name: str) -> PointGroup:
    """Return the point group called ``name``, such as ``"C2v"``."""
    try:
        return _GROUPS[name]
    except KeyError:
        raise ValueError(f"Unknown point group: {name!r}") from None


def _rows(vectors) -> str:
    return "\n".join(" ".join(f"{v:g}" for v in row) for row in vectors)


def _row(values) -> str:
    return " ".join(f"{v:g}" for v in values)


def format_point_group(group: PointGroup) -> str:
    """Describe the symmetry elements of ``group`` in readable text."""
    return "\n".join(
        (
            f"Point group: {group.name}",
            f"Inversion Centre: {int(group.inversion_centre)}",
            f"Mirrors: {_rows(group.mirrors)}",
            f"Proper axes: {_rows(group.proper_axes)}",
            f"Proper manifolds: {_row(group.proper_manifolds)}",
            f"Proper exponents: {_row(group.proper_exponents)}",
            f"Improper axes: {_rows(group.improper_axes)}",
            f"Improper manifolds: {_row(group.improper_manifolds)}",
            f"Improper exponents: {_row(group.improper_exponents)}",
        )
    )