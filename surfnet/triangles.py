"""Quad stitching around sign-changing lattice edges.

Every lattice edge leaving point ``coord`` along an axis whose endpoints
differ in sign is shared by four cells: ``coord``, ``coord - a1``,
``coord - a2`` and ``coord - a1 - a2`` where ``a1``/``a2`` are the other
two axes.  When all four are active their vertices form a quad, which is
split into two triangles wound so the right-handed normal points from the
solid side to the air side.

Edges whose quad would need a cell below index 0 are skipped, so the mesh
stays open along the lower grid faces.
"""

from __future__ import annotations

import enum
from typing import List, Tuple

import numpy as np

from .array import Dense3DArray
from .sampler import FieldSampler
from .vertices import NO_VERTEX

_Coord = Tuple[int, int, int]

X_AXIS: _Coord = (1, 0, 0)
Y_AXIS: _Coord = (0, 1, 0)
Z_AXIS: _Coord = (0, 0, 1)

DIAGONAL_MODES = ("shortest", "fixed")

__all__ = [
    "Face",
    "DIAGONAL_MODES",
    "check_diagonal",
    "is_face",
    "make_triangles",
    "make_all_triangles",
]


class Face(enum.Enum):
    """Sign pattern along a lattice edge ``coord -> coord + axis``."""

    #: Same sign at both ends.
    NONE = 0
    #: ``coord`` is exterior (``>= 0``), ``coord + axis`` is interior.
    POSITIVE = 1
    #: ``coord`` is interior (``< 0``), ``coord + axis`` is exterior.
    NEGATIVE = 2


# Triangle corner orders into the quad (v1, v2, v3, v4), keyed by
# (face, split along v1-v4).
_WINDINGS = {
    (Face.NEGATIVE, True): (0, 1, 3, 0, 3, 2),
    (Face.NEGATIVE, False): (0, 1, 2, 1, 3, 2),
    (Face.POSITIVE, True): (0, 3, 1, 0, 2, 3),
    (Face.POSITIVE, False): (0, 2, 1, 1, 2, 3),
}


def check_diagonal(diagonal: str) -> str:
    if diagonal not in DIAGONAL_MODES:
        raise ValueError(
            f"diagonal must be one of {DIAGONAL_MODES}, got {diagonal!r}"
        )
    return diagonal


def _sub(a: _Coord, b: _Coord) -> _Coord:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _dist2(positions: np.ndarray, i: int, j: int) -> float:
    d = positions[i].astype(np.float64) - positions[j]
    return float(np.dot(d, d))


def is_face(sampler: FieldSampler, coord: _Coord, axis: _Coord) -> Face:
    """Classify the lattice edge from *coord* to ``coord + axis``."""
    inside = sampler.is_inside(*coord)
    other_inside = sampler.is_inside(
        coord[0] + axis[0], coord[1] + axis[1], coord[2] + axis[2]
    )
    if inside == other_inside:
        return Face.NONE
    return Face.NEGATIVE if inside else Face.POSITIVE


def make_triangles(
    sampler: FieldSampler,
    index_grid: Dense3DArray,
    positions: np.ndarray,
    coord: _Coord,
    axis: _Coord,
    other_axis1: _Coord,
    other_axis2: _Coord,
    indices: List[int],
    diagonal: str = "shortest",
) -> int:
    """Append the two triangles around the edge ``coord -> coord + axis``.

    ``(axis, other_axis1, other_axis2)`` must be a right-handed
    permutation of the unit axes.  Nothing is appended when the edge does
    not cross the surface or when any of the four surrounding cells has no
    vertex.

    Returns
    -------
    int
        Number of triangles appended (0 or 2).
    """
    check_diagonal(diagonal)
    face = is_face(sampler, coord, axis)
    if face is Face.NONE:
        return 0

    quad = (
        int(index_grid[coord]),
        int(index_grid[_sub(coord, other_axis1)]),
        int(index_grid[_sub(coord, other_axis2)]),
        int(index_grid[_sub(_sub(coord, other_axis1), other_axis2)]),
    )
    if NO_VERTEX in quad:
        return 0

    v1, v2, v3, v4 = quad
    if diagonal == "fixed":
        split_14 = True
    else:
        split_14 = _dist2(positions, v1, v4) <= _dist2(positions, v2, v3)

    indices.extend(quad[k] for k in _WINDINGS[face, split_14])
    return 2


def make_all_triangles(
    sampler: FieldSampler,
    resolution: int,
    index_grid: Dense3DArray,
    positions: np.ndarray,
    diagonal: str = "shortest",
) -> np.ndarray:
    """Triangulate every crossing edge of the grid.

    Parameters
    ----------
    sampler:
        Field access over ``[0, resolution]^3``.
    resolution:
        Number of cells per axis.
    index_grid:
        Cell-to-vertex map from :func:`~surfnet.vertices.place_vertices`.
    positions:
        ``(n, 3)`` vertex positions, used for the diagonal choice.
    diagonal:
        ``"shortest"`` splits each quad along its shorter diagonal,
        ``"fixed"`` always along ``v1-v4``.

    Returns
    -------
    numpy.ndarray
        Flat ``uint32`` triangle list, length a multiple of 3.
    """
    check_diagonal(diagonal)
    indices: List[int] = []
    for x in range(resolution):
        for y in range(resolution):
            for z in range(resolution):
                coord = (x, y, z)
                if y != 0 and z != 0:
                    make_triangles(sampler, index_grid, positions, coord,
                                   X_AXIS, Y_AXIS, Z_AXIS, indices, diagonal)
                if x != 0 and z != 0:
                    make_triangles(sampler, index_grid, positions, coord,
                                   Y_AXIS, Z_AXIS, X_AXIS, indices, diagonal)
                if x != 0 and y != 0:
                    make_triangles(sampler, index_grid, positions, coord,
                                   Z_AXIS, X_AXIS, Y_AXIS, indices, diagonal)
    return np.array(indices, dtype=np.uint32)
