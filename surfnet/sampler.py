"""Access to the caller's scalar field on the ``(resolution+1)^3`` lattice.

Two modes share one contract:

* **direct** — every read calls the field again.
* **memoized** — the whole lattice is evaluated once, in ascending
  ``(x, y, z)`` order, into a :class:`~surfnet.array.Dense3DArray` of
  ``float32`` and served from there.

Both modes round values to ``float32`` so the choice affects speed only.
A sample that is not finite after rounding raises
:class:`~surfnet.errors.NonFiniteSampleError`.
"""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

import surfnet
from .array import Dense3DArray, check_resolution
from .errors import NonFiniteSampleError, OutOfRangeError

logger = logging.getLogger(surfnet.__name__)

ScalarField = Callable[[int, int, int], float]

__all__ = ["FieldSampler", "ScalarField"]


class FieldSampler:
    """Read-only view of *field* over integer points in ``[0, resolution]^3``.

    Parameters
    ----------
    resolution:
        Number of cells per axis; the lattice has ``resolution + 1`` points
        per axis.
    field:
        Pure, deterministic ``field(x, y, z) -> float``.
    memoize:
        Precompute the whole lattice up front.
    """

    def __init__(self, resolution: int, field: ScalarField, memoize: bool = False) -> None:
        self.resolution = check_resolution(resolution)
        self.field = field
        self.memoize = bool(memoize)
        self._cache = None
        if self.memoize:
            n = self.resolution + 1
            logger.debug(f"Sampling field on {n}^3 lattice")
            self._cache = Dense3DArray.create_from(
                n, lambda c: _to_float32(c, field(*c)), dtype=np.float32
            )

    def sample(self, x: int, y: int, z: int) -> float:
        """Field value at lattice point ``(x, y, z)`` rounded to ``float32``."""
        if self._cache is not None:
            return float(self._cache[x, y, z])
        n = self.resolution + 1
        if not (0 <= x < n and 0 <= y < n and 0 <= z < n):
            raise OutOfRangeError(n, (x, y, z))
        return float(_to_float32((x, y, z), self.field(x, y, z)))

    def __call__(self, x: int, y: int, z: int) -> float:
        return self.sample(x, y, z)

    def is_inside(self, x: int, y: int, z: int) -> bool:
        """``True`` for strictly negative (solid) samples; zero is exterior."""
        return self.sample(x, y, z) < 0.0


def _to_float32(coord, value) -> np.float32:
    """Round *value* to ``float32``; ``nan``, ``inf`` and overflow are rejected."""
    with np.errstate(over="ignore", invalid="ignore"):
        rounded = np.float32(value)
    if not np.isfinite(rounded):
        raise NonFiniteSampleError(coord, value)
    return rounded
