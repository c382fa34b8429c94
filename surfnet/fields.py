"""Ready-made scalar fields for :func:`surfnet.surface_net`.

All fields here take integer lattice coordinates ``(x, y, z)`` and return
signed-distance-like values (negative inside).  Analytic shapes are given
in grid units; :func:`lattice_field` adapts any vectorised SDF working in
physical coordinates, e.g. an ``sdf(p)`` callable accepting ``(..., 3)``
point arrays.
"""

from __future__ import annotations

from math import sqrt
from typing import Callable, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from .array import check_resolution
from .sampler import ScalarField

_Array = npt.NDArray[np.floating]
_SDFFunc = Callable[[_Array], _Array]
_Bounds3D = Tuple[Tuple[float, float], Tuple[float, float], Tuple[float, float]]

__all__ = [
    "sphere_field",
    "box_field",
    "torus_field",
    "single_corner_field",
    "constant_field",
    "lattice_field",
]


# ===========================================================================
# Analytic shapes (grid units)
# ===========================================================================

def sphere_field(center: Sequence[float], radius: float) -> ScalarField:
    """Exact distance to a sphere of *radius* around *center*."""
    cx, cy, cz = (float(c) for c in center)

    def field(x: int, y: int, z: int) -> float:
        return sqrt((x - cx) ** 2 + (y - cy) ** 2 + (z - cz) ** 2) - radius

    return field


def box_field(center: Sequence[float], half_size: Sequence[float]) -> ScalarField:
    """Exact distance to an axis-aligned box with half-extents *half_size*."""
    c = tuple(float(v) for v in center)
    b = tuple(float(v) for v in half_size)

    def field(x: int, y: int, z: int) -> float:
        q = (abs(x - c[0]) - b[0], abs(y - c[1]) - b[1], abs(z - c[2]) - b[2])
        outside = sqrt(sum(max(v, 0.0) ** 2 for v in q))
        return outside + min(max(q), 0.0)

    return field


def torus_field(center: Sequence[float], major: float, minor: float) -> ScalarField:
    """Torus around the z axis through *center*; *major*/*minor* radii."""
    cx, cy, cz = (float(v) for v in center)

    def field(x: int, y: int, z: int) -> float:
        ring = sqrt((x - cx) ** 2 + (y - cy) ** 2) - major
        return sqrt(ring * ring + (z - cz) ** 2) - minor

    return field


def single_corner_field(corner: Sequence[int] = (0, 0, 0)) -> ScalarField:
    """``-1`` at one lattice point, ``+1`` everywhere else."""
    target = tuple(int(v) for v in corner)

    def field(x: int, y: int, z: int) -> float:
        return -1.0 if (x, y, z) == target else 1.0

    return field


def constant_field(value: float) -> ScalarField:
    """Same *value* everywhere; meshes to nothing."""

    def field(x: int, y: int, z: int) -> float:
        return value

    return field


# ===========================================================================
# Vectorised SDF adapter
# ===========================================================================

def lattice_field(sdf: _SDFFunc, bounds: _Bounds3D, resolution: int) -> ScalarField:
    """Sample *sdf* on the ``(resolution+1)^3`` node lattice spanning *bounds*.

    Lattice point ``i`` along an axis maps to ``lo + i * (hi - lo) / resolution``,
    so both ends of every interval are sampled.  The whole lattice is
    evaluated in one vectorised call; the returned field only indexes it.

    Parameters
    ----------
    sdf:
        Callable taking a ``(..., 3)`` array of points and returning a
        ``(...)`` array of signed distances.
    bounds:
        ``((x0, x1), (y0, y1), (z0, z1))`` physical extents.
    resolution:
        Number of cells per axis.
    """
    resolution = check_resolution(resolution)
    axes = [np.linspace(lo, hi, resolution + 1) for lo, hi in bounds]
    X, Y, Z = np.meshgrid(*axes, indexing="ij")
    phi = np.asarray(sdf(np.stack([X, Y, Z], axis=-1)), dtype=np.float64)
    expected = (resolution + 1,) * 3
    if phi.shape != expected:
        raise ValueError(f"sdf returned shape {phi.shape}, expected {expected}")

    def field(x: int, y: int, z: int) -> float:
        return float(phi[x, y, z])

    return field
