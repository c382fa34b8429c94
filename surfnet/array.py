"""Bounds-checked dense storage over a cubic integer domain.

:class:`Dense3DArray` backs both the memoized field samples (side
``resolution + 1``) and the cell-to-vertex index grid (side
``resolution``).  Elements are laid out linearly as ``x*S*S + y*S + z``,
which is also the order in which :meth:`Dense3DArray.create_from` visits
coordinates.
"""

from __future__ import annotations

import numbers
from typing import Any, Callable, Iterator, Optional, Tuple

import numpy as np
import numpy.typing as npt

from .errors import InvalidResolutionError, OutOfRangeError

_Coord = Tuple[int, int, int]

__all__ = ["Dense3DArray", "check_resolution"]


def check_resolution(value: Any, name: str = "resolution") -> int:
    """Return *value* as ``int`` if it is an integer ``>= 1``.

    Raises
    ------
    InvalidResolutionError
        For booleans, non-integers, zero and negative values.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidResolutionError(
            f"{name} must be a positive integer, got {value!r}"
        )
    if value < 1:
        raise InvalidResolutionError(f"{name} must be >= 1, got {value}")
    return int(value)


class Dense3DArray:
    """Cubic ``S x S x S`` container indexed by ``(x, y, z)`` tuples.

    Parameters
    ----------
    size:
        Side length ``S``.
    backing:
        Exactly ``S**3`` elements in ``x*S*S + y*S + z`` order.  Anything
        :func:`numpy.asarray` accepts; multi-dimensional input is flattened
        in C order.
    """

    def __init__(self, size: int, backing: npt.ArrayLike) -> None:
        self._size = check_resolution(size, "size")
        values = np.asarray(backing).reshape(-1)
        if values.shape[0] != self._size ** 3:
            raise ValueError(
                f"backing has {values.shape[0]} elements, "
                f"expected {self._size ** 3} for size {self._size}"
            )
        self._values = values

    @staticmethod
    def coords(size: int) -> Iterator[_Coord]:
        """Yield every ``(x, y, z)`` in ``[0, size)^3``, z varying fastest."""
        for x in range(size):
            for y in range(size):
                for z in range(size):
                    yield (x, y, z)

    @classmethod
    def create_from(
        cls,
        size: int,
        func: Callable[[_Coord], Any],
        dtype: Optional[npt.DTypeLike] = None,
    ) -> "Dense3DArray":
        """Build an array by calling ``func(coord)`` once per coordinate.

        Calls happen in :meth:`coords` order, so *func* may rely on side
        effects (e.g. appending to an output list) being sequenced by scan
        order.
        """
        size = check_resolution(size, "size")
        values = np.fromiter(
            (func(c) for c in cls.coords(size)),
            dtype=dtype if dtype is not None else np.float64,
            count=size ** 3,
        )
        return cls(size, values)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def values(self) -> np.ndarray:
        """Read-only flat view of the backing array."""
        view = self._values.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return self._values.shape[0]

    def _offset(self, index: _Coord) -> int:
        s = self._size
        try:
            x, y, z = index
        except (TypeError, ValueError):
            raise TypeError(
                f"Dense3DArray index must be an (x, y, z) tuple, got {index!r}"
            ) from None
        if not (0 <= x < s and 0 <= y < s and 0 <= z < s):
            raise OutOfRangeError(s, (x, y, z))
        return s * s * x + s * y + z

    def __getitem__(self, index: _Coord) -> Any:
        return self._values[self._offset(index)]

    def __repr__(self) -> str:
        return f"Dense3DArray(size={self._size}, dtype={self._values.dtype})"
