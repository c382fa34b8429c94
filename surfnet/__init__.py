"""
surfnet — surface nets meshing for sampled scalar fields
=========================================================

Turns a signed-distance-like function sampled on a regular cubic grid
(negative = solid, zero or positive = air) into a triangle mesh of its
zero-level surface.  Surface nets place exactly one vertex in every grid
cell the surface passes through and connect neighbouring cells with
quads, each split into two triangles.

Implemented features
--------------------
- Bounds-checked cubic storage: :class:`Dense3DArray`
- Direct or memoized field access: :class:`FieldSampler`
- Vertex placement and gradient normals: :func:`place_vertices`
- Shortest-diagonal quad triangulation: :func:`make_all_triangles`
- Entry point: :func:`surface_net` returning a :class:`SurfaceNetMesh`
- Analytic demo fields and a vectorised SDF adapter: :mod:`surfnet.fields`

Quick start
-----------
::

    from surfnet import surface_net
    from surfnet.fields import sphere_field

    mesh = surface_net(16, sphere_field((8, 8, 8), 5.0), memoize=True)
    positions, normals, indices = mesh
    mesh.faces.shape    # (n_triangles, 3)

Grid-boundary cells never emit triangles across the lower grid faces, so
shapes touching the grid edge come out open.
"""

from .errors import (
    SurfaceNetError,
    OutOfRangeError,
    InvalidResolutionError,
    NonFiniteSampleError,
)
from .array import Dense3DArray, check_resolution
from .sampler import FieldSampler, ScalarField
from .vertices import (
    NO_VERTEX,
    EDGE_OFFSETS,
    find_edge,
    find_center,
    cell_normal,
    place_vertices,
)
from .triangles import Face, is_face, make_triangles, make_all_triangles
from .mesh import SurfaceNetMesh, surface_net, save_npz

import surfnet.utils

surfnet.utils.configure_logging()

__version__ = "0.1.0"

__all__ = [
    # Errors
    "SurfaceNetError",
    "OutOfRangeError",
    "InvalidResolutionError",
    "NonFiniteSampleError",

    # Storage and sampling
    "Dense3DArray",
    "check_resolution",
    "FieldSampler",
    "ScalarField",

    # Vertex placement
    "NO_VERTEX",
    "EDGE_OFFSETS",
    "find_edge",
    "find_center",
    "cell_normal",
    "place_vertices",

    # Triangulation
    "Face",
    "is_face",
    "make_triangles",
    "make_all_triangles",

    # Entry point
    "SurfaceNetMesh",
    "surface_net",
    "save_npz",
]
