"""Per-cell vertex placement and normal estimation.

A cell ``(x, y, z)`` is *active* when any of its 12 edges joins an
interior corner (value ``< 0``) to an exterior one (value ``>= 0``).  Each
active cell receives exactly one vertex: the mean of the linear
zero-crossings on its crossing edges, offset by the cell's integer
coordinate.  The optional normal is the normalized difference between the
four high-side and the four low-side corner values along each axis.
"""

from __future__ import annotations

import logging
import math
from typing import NamedTuple, Optional, Tuple

import numpy as np

import surfnet
from .array import Dense3DArray
from .sampler import FieldSampler

logger = logging.getLogger(surfnet.__name__)

_Coord = Tuple[int, int, int]
_Vec3 = Tuple[float, float, float]

#: Sentinel stored in the index grid for cells without a vertex.
NO_VERTEX: int = int(np.iinfo(np.uint32).max)

# ---------------------------------------------------------------------------
# The 12 cube edges as (offset1, offset2) corner pairs
# ---------------------------------------------------------------------------
EDGE_OFFSETS: Tuple[Tuple[_Coord, _Coord], ...] = (
    ((0, 0, 0), (0, 0, 1)),
    ((0, 0, 0), (0, 1, 0)),
    ((0, 0, 0), (1, 0, 0)),
    ((0, 0, 1), (0, 1, 1)),
    ((0, 0, 1), (1, 0, 1)),
    ((0, 1, 0), (0, 1, 1)),
    ((0, 1, 0), (1, 1, 0)),
    ((0, 1, 1), (1, 1, 1)),
    ((1, 0, 0), (1, 0, 1)),
    ((1, 0, 0), (1, 1, 0)),
    ((1, 0, 1), (1, 1, 1)),
    ((1, 1, 0), (1, 1, 1)),
)

CORNER_OFFSETS: Tuple[_Coord, ...] = tuple(Dense3DArray.coords(2))

__all__ = [
    "NO_VERTEX",
    "EDGE_OFFSETS",
    "CORNER_OFFSETS",
    "PlacedVertices",
    "find_edge",
    "find_center",
    "cell_normal",
    "place_vertices",
]


class PlacedVertices(NamedTuple):
    """Output of :func:`place_vertices`."""

    positions: np.ndarray
    normals: np.ndarray
    index_grid: Dense3DArray
    degenerate_normals: int


# ===========================================================================
# Single cell
# ===========================================================================

def find_edge(
    sampler: FieldSampler,
    coord: _Coord,
    offset1: _Coord,
    offset2: _Coord,
) -> Optional[_Vec3]:
    """Zero-crossing on the edge ``coord+offset1 -> coord+offset2``.

    Returns ``None`` when both ends lie on the same side of the surface.
    The point is in grid coordinates (cell offset already added).
    """
    x, y, z = coord
    value1 = sampler(x + offset1[0], y + offset1[1], z + offset1[2])
    value2 = sampler(x + offset2[0], y + offset2[1], z + offset2[2])
    if (value1 < 0.0) == (value2 < 0.0):
        return None
    t = value1 / (value1 - value2)
    return (
        offset1[0] * (1.0 - t) + offset2[0] * t + x,
        offset1[1] * (1.0 - t) + offset2[1] * t + y,
        offset1[2] * (1.0 - t) + offset2[2] * t + z,
    )


def find_center(sampler: FieldSampler, coord: _Coord) -> Optional[_Vec3]:
    """Mean of all edge crossings of cell *coord*, or ``None`` if inactive."""
    count = 0
    sx = sy = sz = 0.0
    for offset1, offset2 in EDGE_OFFSETS:
        point = find_edge(sampler, coord, offset1, offset2)
        if point is None:
            continue
        count += 1
        sx += point[0]
        sy += point[1]
        sz += point[2]
    if count == 0:
        return None
    return (sx / count, sy / count, sz / count)


def cell_normal(sampler: FieldSampler, coord: _Coord) -> _Vec3:
    """Unit gradient of the field across cell *coord*.

    Each component is the sum of the four corners on the high side of that
    axis minus the four on the low side.  A zero gradient gives
    ``(0.0, 0.0, 0.0)``.
    """
    x, y, z = coord
    gradient = [0.0, 0.0, 0.0]
    for offset in CORNER_OFFSETS:
        value = sampler(x + offset[0], y + offset[1], z + offset[2])
        for axis in range(3):
            if offset[axis]:
                gradient[axis] += value
            else:
                gradient[axis] -= value
    norm = math.sqrt(gradient[0] ** 2 + gradient[1] ** 2 + gradient[2] ** 2)
    if norm == 0.0:
        return (0.0, 0.0, 0.0)
    return (gradient[0] / norm, gradient[1] / norm, gradient[2] / norm)


# ===========================================================================
# Whole grid
# ===========================================================================

def place_vertices(
    sampler: FieldSampler,
    resolution: int,
    compute_normals: bool = True,
) -> PlacedVertices:
    """Place one vertex per active cell and build the cell index grid.

    Cells are visited in ascending ``(x, y, z)`` order; the vertex arrays
    and the index grid are filled in that same pass, so vertex ``i`` is the
    ``i``-th active cell in scan order.

    Parameters
    ----------
    sampler:
        Field access over ``[0, resolution]^3``.
    resolution:
        Number of cells per axis.
    compute_normals:
        Also estimate a per-vertex normal.

    Returns
    -------
    PlacedVertices
        ``positions`` ``(n, 3) float32``, ``normals`` ``(n, 3) float32``
        (``(0, 3)`` when normals are off), the ``uint32`` index grid holding
        :data:`NO_VERTEX` for inactive cells, and the number of zero
        normals emitted.
    """
    positions: list[_Vec3] = []
    normals: list[_Vec3] = []
    degenerate = 0

    def visit(coord: _Coord) -> int:
        nonlocal degenerate
        center = find_center(sampler, coord)
        if center is None:
            return NO_VERTEX
        index = len(positions)
        positions.append(center)
        if compute_normals:
            normal = cell_normal(sampler, coord)
            if normal == (0.0, 0.0, 0.0):
                degenerate += 1
                logger.debug(f"Zero gradient at active cell {coord}")
            normals.append(normal)
        return index

    index_grid = Dense3DArray.create_from(resolution, visit, dtype=np.uint32)

    return PlacedVertices(
        positions=np.array(positions, dtype=np.float32).reshape(-1, 3),
        normals=np.array(normals, dtype=np.float32).reshape(-1, 3),
        index_grid=index_grid,
        degenerate_normals=degenerate,
    )
