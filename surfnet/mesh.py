"""Surface-net meshing entry point.

:func:`surface_net` runs the three stages in order, each over the whole
grid before the next starts::

    FieldSampler -> place_vertices -> make_all_triangles

and returns a :class:`SurfaceNetMesh`.
"""

from __future__ import annotations

import logging
import os
from typing import NamedTuple

import numpy as np

import surfnet
from .array import check_resolution
from .sampler import FieldSampler, ScalarField
from .triangles import check_diagonal, make_all_triangles
from .vertices import place_vertices

logger = logging.getLogger(surfnet.__name__)

__all__ = ["SurfaceNetMesh", "surface_net", "save_npz"]


class SurfaceNetMesh(NamedTuple):
    """Vertex buffer, normal buffer and flat triangle index buffer.

    Unpacks as ``positions, normals, indices``.
    """

    positions: np.ndarray
    normals: np.ndarray
    indices: np.ndarray

    @property
    def faces(self) -> np.ndarray:
        """Triangle indices reshaped to ``(m, 3)``."""
        return self.indices.reshape(-1, 3)

    @property
    def n_vertices(self) -> int:
        return int(self.positions.shape[0])

    @property
    def n_triangles(self) -> int:
        return int(self.indices.shape[0] // 3)


def surface_net(
    resolution: int,
    field: ScalarField,
    memoize: bool = False,
    *,
    compute_normals: bool = True,
    diagonal: str = "shortest",
) -> SurfaceNetMesh:
    """Mesh the zero-level set of *field* on a ``resolution^3`` cell grid.

    Parameters
    ----------
    resolution:
        Number of cells per axis, ``>= 1``.
    field:
        Pure, deterministic ``field(x, y, z) -> float`` defined for integer
        ``x, y, z`` in ``[0, resolution]``.  Negative values are solid,
        zero and positive values are air.
    memoize:
        Evaluate the whole ``(resolution+1)^3`` lattice once up front.
        Worth it when *field* is expensive; results are identical either
        way.
    compute_normals:
        Estimate per-vertex normals from the corner gradient.  When off,
        ``normals`` is an empty ``(0, 3)`` array.
    diagonal:
        ``"shortest"`` (default) splits quads along the shorter diagonal,
        ``"fixed"`` always along the same one.

    Returns
    -------
    SurfaceNetMesh
        ``positions`` ``(n, 3) float32`` in grid units, ``normals``
        ``(n, 3) float32`` and ``indices`` ``(3m,) uint32``.

    Raises
    ------
    InvalidResolutionError
        If *resolution* is not an integer ``>= 1``.
    ValueError
        If *diagonal* is not a known mode.
    NonFiniteSampleError
        If *field* returns ``nan``/``inf`` or a value beyond ``float32``.
    """
    resolution = check_resolution(resolution)
    check_diagonal(diagonal)

    sampler = FieldSampler(resolution, field, memoize=memoize)
    placed = place_vertices(sampler, resolution, compute_normals=compute_normals)
    indices = make_all_triangles(
        sampler, resolution, placed.index_grid, placed.positions, diagonal=diagonal
    )

    mesh = SurfaceNetMesh(placed.positions, placed.normals, indices)
    logger.debug(
        f"surface_net(resolution={resolution}, memoize={memoize}): "
        f"{mesh.n_vertices} vertices, {mesh.n_triangles} triangles"
    )
    if placed.degenerate_normals:
        logger.debug(
            f"{placed.degenerate_normals} vertices have a zero gradient; "
            "their normals are (0, 0, 0)"
        )
    return mesh


def save_npz(path: str, mesh: SurfaceNetMesh) -> None:
    """Save *mesh* arrays to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.savez_compressed(
        path,
        positions=mesh.positions,
        normals=mesh.normals,
        indices=mesh.indices,
    )
