"""Exception hierarchy for surface-net meshing."""

from __future__ import annotations

__all__ = [
    "SurfaceNetError",
    "OutOfRangeError",
    "InvalidResolutionError",
    "NonFiniteSampleError",
]


class SurfaceNetError(Exception):
    """Base class for every error raised by :mod:`surfnet`."""


class OutOfRangeError(SurfaceNetError, IndexError):
    """A grid coordinate fell outside ``[0, size)``.

    Always a defect in the caller's scan bounds, never bad input, so it is
    not caught anywhere inside the package.
    """

    def __init__(self, size: int, coord: tuple) -> None:
        self.size = size
        self.coord = tuple(coord)
        super().__init__(
            f"Index out of range (size {size}): "
            + ", ".join(str(c) for c in self.coord)
        )


class InvalidResolutionError(SurfaceNetError, ValueError):
    """Grid resolution is not an integer ``>= 1``."""


class NonFiniteSampleError(SurfaceNetError, ValueError):
    """The field returned ``nan``/``inf``, or a value beyond the ``float32`` range."""

    def __init__(self, coord: tuple, value: object) -> None:
        self.coord = tuple(coord)
        self.value = value
        super().__init__(
            f"Field value {value!r} at "
            + ", ".join(str(c) for c in self.coord)
            + " is not a finite float32"
        )
